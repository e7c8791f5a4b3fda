"""Timeouts and optional result caching for the advisor endpoints."""
import hashlib
import json
import os
import threading
import time
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError

_pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="advisor")

_TIMEOUT_SEC = int(os.environ.get("ADVISOR_TIMEOUT_SEC", "30"))
_CACHE_TTL_SEC = int(os.environ.get("ADVISOR_CACHE_TTL_SEC", "300"))
_CACHE_MAX_SIZE = int(os.environ.get("ADVISOR_CACHE_MAX", "500"))

# key -> (response dict, monotonic insert time); insertion order is eviction order
_results: "OrderedDict[str, tuple[dict, float]]" = OrderedDict()
_results_lock = threading.Lock()


def run_sync_with_timeout(seconds: int, func, *args, **kwargs):
    """
    Run a pure advisor function on the worker pool and wait at most `seconds`.
    A late result is discarded; exceptions raised by func propagate unchanged.
    """
    future = _pool.submit(func, *args, **kwargs)
    try:
        return future.result(timeout=seconds)
    except FuturesTimeoutError:
        future.cancel()
        raise TimeoutError(f"{getattr(func, '__name__', 'call')} exceeded {seconds}s") from None


def _cache_key(kind: str, request_dict: dict) -> str:
    canonical = json.dumps({"kind": kind, "request": request_dict}, sort_keys=True)
    return hashlib.sha256(canonical.encode()).hexdigest()


def get_cached_result(kind: str, request_dict: dict) -> dict | None:
    """Return the cached response dict for (kind, request) if present and not expired."""
    if _CACHE_TTL_SEC <= 0:
        return None
    key = _cache_key(kind, request_dict)
    with _results_lock:
        entry = _results.get(key)
        if entry is None:
            return None
        data, stored_at = entry
        if time.monotonic() - stored_at > _CACHE_TTL_SEC:
            _results.pop(key, None)
            return None
        return data


def set_cached_result(kind: str, request_dict: dict, response_dict: dict) -> None:
    """Store a response, evicting the oldest entries past ADVISOR_CACHE_MAX."""
    if _CACHE_TTL_SEC <= 0:
        return
    key = _cache_key(kind, request_dict)
    with _results_lock:
        _results.pop(key, None)
        while _results and len(_results) >= _CACHE_MAX_SIZE:
            _results.popitem(last=False)
        _results[key] = (response_dict, time.monotonic())


def clear_cache() -> None:
    with _results_lock:
        _results.clear()


def get_timeout_sec() -> int:
    return _TIMEOUT_SEC
