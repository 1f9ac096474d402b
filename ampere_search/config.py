"""
Runtime settings, read from the environment (or a .env file) once per process.
"""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	# Corpus: JSON file shaped like the demo table; the built-in demo table is used when unset
	CONTENT_SOURCE_PATH: Optional[str] = None

	# Search paging
	DEFAULT_SEARCH_LIMIT: int = 20
	MAX_SEARCH_LIMIT: int = 50

	# Rate limiting (fixed window per client IP)
	RATE_LIMIT_WINDOW_MS: int = 60000
	RATE_LIMIT_MAX_REQUESTS: int = 100

	# Monitoring
	LOG_LEVEL: str = "INFO"

	@field_validator("LOG_LEVEL", mode="before")
	@classmethod
	def normalize_log_level(cls, v):
		return str(v).strip().upper() if v else "INFO"

	@field_validator("MAX_SEARCH_LIMIT", "RATE_LIMIT_WINDOW_MS", "RATE_LIMIT_MAX_REQUESTS")
	@classmethod
	def must_be_positive(cls, v):
		if v < 1:
			raise ValueError("must be a positive integer")
		return v


@lru_cache()
def get_settings() -> Settings:
	return Settings()
