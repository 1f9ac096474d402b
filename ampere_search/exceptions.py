"""
Error types raised by the search service.
Each carries the machine-readable code and HTTP status the API reports.
"""

from typing import Optional


class AmpereSearchError(Exception):
	"""Base class for errors surfaced to API callers."""
	code = "INTERNAL_ERROR"
	status_code = 500

	def __init__(self, message: str, code: Optional[str] = None, status_code: Optional[int] = None):
		super().__init__(message)
		self.message = message
		if code is not None:
			self.code = code
		if status_code is not None:
			self.status_code = status_code

	def to_dict(self) -> dict:
		return {"error": self.message, "code": self.code, "status": self.status_code}


class MissingQueryError(AmpereSearchError):
	"""Search invoked without query text, platform filter or genre filter."""
	code = "MISSING_QUERY"
	status_code = 400

	def __init__(self, message: str = "At least one of: q, platforms, genre is required"):
		super().__init__(message)


class MissingCommandError(AmpereSearchError):
	"""Command endpoint invoked without a usable command string."""
	code = "MISSING_COMMAND"
	status_code = 400

	def __init__(self, message: str = "command required"):
		super().__init__(message)


class RateLimitedError(AmpereSearchError):
	code = "RATE_LIMITED"
	status_code = 429

	def __init__(self, retry_after: int, message: str = "Too many requests"):
		super().__init__(message)
		self.retry_after = retry_after

	def to_dict(self) -> dict:
		out = super().to_dict()
		out["retryAfter"] = self.retry_after
		return out


class IndexBuildError(Exception):
	"""Raised when a content source table cannot produce a valid index."""
