"""
library-wide settings.

settings are read when a sequence is iterated, not when it is built, so an
`override()` block affects every query enumerated inside it.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """tunable engine behaviour"""

    # sorts of at least this many elements over plain numeric keys go through numpy.lexsort.
    # None turns the numpy path off entirely.
    numpy_sort_threshold: Optional[int] = 256


_settings = Settings()


def get_settings() -> Settings:
    return _settings


def configure(**changes) -> Settings:
    """replace individual settings, returning the new settings object"""
    global _settings
    known = {f.name for f in fields(Settings)}
    unknown = set(changes) - known
    if unknown:
        raise TypeError(f"unknown setting(s): {', '.join(sorted(unknown))}")
    threshold = changes.get('numpy_sort_threshold')
    if threshold is not None and (isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0):
        raise ValueError("numpy_sort_threshold must be a non-negative integer or None")
    _settings = replace(_settings, **changes)
    logger.debug("settings changed: %s", _settings)
    return _settings


@contextmanager
def override(**changes) -> Iterator[Settings]:
    """temporarily change settings, restoring the previous ones on exit"""
    global _settings
    previous = _settings
    try:
        yield configure(**changes)
    finally:
        _settings = previous
