"""
Opt-in statistics about the documents sakura parses and renders.

Collection starts enabled when SAKURA_PROFILE is set in the environment at
import time (ignored under -O) and can be switched with set_profiling().
The scanner reports every object and array span it walks, the scalar tokens
it converts and the typed values it rebuilds; counts accumulate across
threads until clear_scan_stats() resets them.
"""

import dataclasses
import os
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

PROFILE_ENV_VAR = "SAKURA_PROFILE"


@dataclass
class ScanStats:
    """Counts gathered while profiling is enabled."""

    documents_parsed: int = 0
    chars_parsed: int = 0
    parse_time_ns: int = 0
    # Span counts include spans of documents that later failed to parse
    objects: int = 0
    arrays: int = 0
    scalars: int = 0
    typed_values: int = 0
    max_depth: int = 0
    documents_rendered: int = 0
    chars_rendered: int = 0


_enabled = __debug__ and PROFILE_ENV_VAR in os.environ
_lock = threading.Lock()
_stats = ScanStats()


def profiling_enabled() -> bool:
    return _enabled


def set_profiling(enabled: bool) -> None:
    """Turns statistics collection on or off for the whole process."""
    global _enabled
    _enabled = bool(enabled)


def get_scan_stats() -> ScanStats:
    """Returns a snapshot of the collected statistics."""
    with _lock:
        return dataclasses.replace(_stats)


def clear_scan_stats() -> None:
    global _stats
    with _lock:
        _stats = ScanStats()


def record_span(opener: str, depth: int) -> None:
    """Counts one object ("{") or array ("[") span at the given depth."""
    if not _enabled:
        return
    with _lock:
        if opener == "{":
            _stats.objects += 1
        else:
            _stats.arrays += 1
        _stats.max_depth = max(_stats.max_depth, depth)


def record_scalar() -> None:
    if not _enabled:
        return
    with _lock:
        _stats.scalars += 1


def record_typed() -> None:
    if not _enabled:
        return
    with _lock:
        _stats.typed_values += 1


def record_render(chars: int) -> None:
    if not _enabled:
        return
    with _lock:
        _stats.documents_rendered += 1
        _stats.chars_rendered += chars


@contextmanager
def timed_parse(chars: int) -> Iterator[None]:
    """Times one top-level parse; only parses that complete are counted."""
    if not _enabled:
        yield
        return

    started = time.perf_counter_ns()
    yield
    elapsed = time.perf_counter_ns() - started
    with _lock:
        _stats.documents_parsed += 1
        _stats.chars_parsed += chars
        _stats.parse_time_ns += elapsed
