"""
In-memory fixed-window rate limiter, keyed per client.
"""

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict

from loguru import logger


@dataclass
class RateLimitDecision:
	allowed: bool
	remaining: int
	reset_at: float  # monotonic seconds when the window ends

	def retry_after(self, now: float) -> int:
		"""Whole seconds until the window resets."""
		return max(0, math.ceil(self.reset_at - now))


@dataclass
class _Window:
	count: int
	reset_at: float


class RateLimiter:
	"""
	Counts hits per key inside a fixed window.
	The first hit after a window expires opens a new one.
	"""

	def __init__(self, max_requests: int = 100, window_ms: int = 60000, clock: Callable[[], float] = time.monotonic):
		self.max_requests = max_requests
		self.window_s = window_ms / 1000.0
		self._clock = clock
		self._windows: Dict[str, _Window] = {}
		self._next_sweep = clock() + self.window_s  # earliest time expired windows are dropped
		self._lock = threading.Lock()

	def now(self) -> float:
		return self._clock()

	def check(self, key: str) -> RateLimitDecision:
		now = self._clock()
		with self._lock:
			if now > self._next_sweep:
				self._sweep(now)
			window = self._windows.get(key)
			if window is None or now > window.reset_at:
				window = _Window(count=1, reset_at=now + self.window_s)
				self._windows[key] = window
				return RateLimitDecision(True, self.max_requests - 1, window.reset_at)

			window.count += 1
			if window.count > self.max_requests:
				logger.warning(f"[RateLimit] '{key}' exceeded {self.max_requests} requests per {self.window_s:.0f}s")
				return RateLimitDecision(False, 0, window.reset_at)
			return RateLimitDecision(True, self.max_requests - window.count, window.reset_at)

	def _sweep(self, now: float) -> None:
		# Caller holds the lock; runs at most once per window
		expired = [k for k, w in self._windows.items() if now > w.reset_at]
		for k in expired:
			del self._windows[k]
		self._next_sweep = now + self.window_s
		if expired:
			logger.debug(f"[RateLimit] Dropped {len(expired)} expired windows")

	def __len__(self) -> int:
		return len(self._windows)

	def reset(self) -> None:
		with self._lock:
			self._windows.clear()
