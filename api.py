"""
FastAPI server exposing the Ampere search API.
Endpoints:
- GET /health: basic health check
- GET /api/search?q=&platforms=&genre=&type=&limit=: federated content search
- POST /api/search {"command": "..."}: voice/text command parsing

Startup builds the content index once (from CONTENT_SOURCE_PATH if set,
otherwise the built-in demo table); both search routes are rate limited per client IP.
"""

# Import standard libraries for logging sinks and timing
import sys  # stderr sink for loguru
import time  # measure startup latency
from contextlib import asynccontextmanager  # startup/shutdown hook
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import Depends, FastAPI, Query, Request  # FastAPI primitives
from fastapi.responses import JSONResponse  # error payloads
from pydantic import BaseModel, ConfigDict  # response schema definitions
from pydantic.alias_generators import to_camel  # camelCase JSON keys

# Import our internal modules for loading, indexing, search and intent parsing
from ampere_search.catalog import PlatformCatalog  # platform labels and lookups
from ampere_search.config import get_settings  # env-driven settings
from ampere_search.content_index import init_content_index  # process-wide corpus
from ampere_search.data_loader import DataLoader  # source table loading
from ampere_search.exceptions import AmpereSearchError, MissingCommandError, RateLimitedError  # API errors
from ampere_search.intent_parser import IntentParser  # command classifier
from ampere_search.rate_limiter import RateLimiter  # per-IP throttling
from ampere_search.search_engine import SearchEngine  # core search engine

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger


# Globals that hold the shared services and measured startup time
ENGINE: Optional[SearchEngine] = None  # will point to the initialized engine
PARSER: Optional[IntentParser] = None  # command parser sharing the engine's catalog
LIMITER: Optional[RateLimiter] = None  # per-client request counter
STARTUP_TIME_S: float = 0.0  # measures how long startup took


def configure_logging(level: str) -> None:
	"""Route loguru output to stderr at the configured level."""
	logger.remove()  # drop the default sink
	logger.add(sys.stderr, level=level)  # single stderr sink


def init_services() -> SearchEngine:
	"""Build the index, engine, parser and limiter once; later calls reuse them."""
	global ENGINE, PARSER, LIMITER, STARTUP_TIME_S  # refer to module-level globals
	if ENGINE is not None and PARSER is not None and LIMITER is not None:  # already initialized
		return ENGINE

	start = time.time()  # start timer for startup latency
	settings = get_settings()  # env-driven configuration
	logger.info("[API] Startup: loading content source and building index...")  # log intent

	source = DataLoader().load_source(settings.CONTENT_SOURCE_PATH)  # demo table or JSON file
	index = init_content_index(source)  # one-time corpus build
	catalog = PlatformCatalog()  # shared by engine and parser

	ENGINE = SearchEngine(
		index,
		catalog=catalog,
		default_limit=settings.DEFAULT_SEARCH_LIMIT,
		max_limit=settings.MAX_SEARCH_LIMIT,
	)
	PARSER = IntentParser(catalog)
	if LIMITER is None:  # tests may install their own
		LIMITER = RateLimiter(settings.RATE_LIMIT_MAX_REQUESTS, settings.RATE_LIMIT_WINDOW_MS)

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s. {len(index)} items indexed.")  # summary log
	return ENGINE


@asynccontextmanager
async def lifespan(app: FastAPI):
	configure_logging(get_settings().LOG_LEVEL)
	init_services()
	yield


# Instantiate the FastAPI application with metadata
app = FastAPI(title="Ampere Search API", version="1.0.0", lifespan=lifespan)  # web app


# Shared camelCase config so JSON keys match the frontend contract
class CamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# One scored content item in a search response
class ContentResultOut(CamelModel):
	id: str  # stable content id
	title: str  # display title
	platform_id: str  # platform the title streams on
	genre: str  # category label
	type: str  # movie / series
	year: Optional[int] = None  # release year if known
	match_score: float  # relevance in [0, 1]
	platform: str  # platform display label


# Echo of the filters the search ran with
class SearchFilters(CamelModel):
	platforms: List[str]
	genre: str
	type: str


# Complete search response payload
class SearchResponse(CamelModel):
	query: str  # trimmed query text
	results: List[ContentResultOut]  # ranked items, truncated to limit
	total_count: int  # matches before truncation
	search_time_ms: float  # server-side search time in ms
	filters: SearchFilters


class ParsedIntentOut(BaseModel):
	action: str
	target: Optional[str] = None
	query: Optional[str] = None


class CommandResponse(BaseModel):
	command: str  # command exactly as received
	parsed: ParsedIntentOut


@app.exception_handler(AmpereSearchError)
async def handle_search_error(request: Request, exc: AmpereSearchError):
	"""Render service errors as {error, code, status}."""
	headers = None
	if isinstance(exc, RateLimitedError):
		headers = {"Retry-After": str(exc.retry_after), "X-RateLimit-Remaining": "0"}
	logger.info(f"[API] {request.method} {request.url.path} -> {exc.status_code} {exc.code}")
	return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


def client_ip(request: Request) -> str:
	"""First x-forwarded-for hop, else the socket peer."""
	forwarded = request.headers.get("x-forwarded-for")
	if forwarded:
		first = forwarded.split(",")[0].strip()
		if first:
			return first
	if request.client and request.client.host:
		return request.client.host
	return "unknown"


def enforce_rate_limit(request: Request) -> None:
	"""Dependency run before both search routes; raises RateLimitedError on violation."""
	init_services()  # limiter lives with the other services
	decision = LIMITER.check(f"api:{client_ip(request)}")
	if not decision.allowed:
		raise RateLimitedError(retry_after=decision.retry_after(LIMITER.now()))


def parse_limit(raw: Optional[str]) -> Optional[int]:
	"""Lenient page-size parsing: anything non-numeric means 'use the default'."""
	if raw is None:
		return None
	try:
		return int(raw.strip())
	except ValueError:
		logger.debug(f"[API] Ignoring non-numeric limit '{raw}'")
		return None


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness checks."""
	return {
		"status": "ok",  # constant indicator
		"engine_ready": ENGINE is not None,  # True if engine initialized
		"index_size": len(ENGINE.index) if ENGINE is not None else 0,  # corpus size
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


# Federated search endpoint
@app.get("/api/search", response_model=SearchResponse, dependencies=[Depends(enforce_rate_limit)])
async def search(
	q: Optional[str] = Query(None, description="Free-text query"),
	platforms: Optional[str] = Query(None, description="Comma-separated platform ids"),
	genre: Optional[str] = Query(None, description="Genre label, case-insensitive"),
	content_type: Optional[str] = Query(None, alias="type", description="movie or series, exact"),
	limit: Optional[str] = Query(None, description="Page size, clamped to [1, 50]"),
):
	"""Filter, score and page the content index."""
	engine = init_services()  # engine must be ready to serve
	query = (q or "").strip()  # trimmed query
	platform_list = [p for p in (platforms or "").split(",") if p]  # drop empty segments
	logger.debug(f"[API] /api/search q='{query}' platforms={platform_list} genre='{genre}' type='{content_type}' limit={limit}")

	# Delegate to the engine (raises MissingQueryError -> 400)
	outcome = engine.search(
		query,
		platform_filter=platform_list,
		genre_filter=genre,
		type_filter=content_type,
		limit=parse_limit(limit),
	)

	# Convert engine results to response schema
	items = [
		ContentResultOut(
			id=r.item.id,
			title=r.item.title,
			platform_id=r.item.platform_id,
			genre=r.item.genre,
			type=r.item.type,
			year=r.item.year,
			match_score=round(r.match_score, 3),
			platform=r.platform,
		)
		for r in outcome.results
	]

	return SearchResponse(
		query=query,
		results=items,
		total_count=outcome.total_count,
		search_time_ms=round(outcome.search_time_ms, 2),
		filters=SearchFilters(platforms=platform_list, genre=genre or "", type=content_type or ""),
	)


# Voice/text command endpoint
@app.post("/api/search", response_model=CommandResponse, response_model_exclude_none=True, dependencies=[Depends(enforce_rate_limit)])
async def parse_voice_command(request: Request):
	"""Classify a command string into a structured intent."""
	init_services()
	try:
		body = await request.json()  # tolerate any body; validate by hand
	except ValueError:
		raise MissingCommandError()

	command = body.get("command") if isinstance(body, dict) else None
	if not isinstance(command, str) or not command:
		raise MissingCommandError()

	intent = PARSER.parse(command)
	logger.info(f"[API] /api/search command='{command}' -> {intent.action.value}")
	return CommandResponse(command=command, parsed=ParsedIntentOut(**intent.to_dict()))
