"""Open-file limit discovery."""

from __future__ import annotations

try:
    import resource as _resource
except ImportError:  # not available on Windows
    _resource = None

_DEFAULT_LIMIT = 50000
_WINDOWS_LIMIT = 10000


def get_file_limit() -> int:
    """Raise the open-file soft limit to the hard limit and return the result."""
    res = _resource
    if res is None:
        return _WINDOWS_LIMIT

    limit = _DEFAULT_LIMIT
    try:
        _, hard = res.getrlimit(res.RLIMIT_NOFILE)
    except (OSError, ValueError):
        hard = None

    if hard is not None and hard != res.RLIM_INFINITY:
        limit = hard
        try:
            res.setrlimit(res.RLIMIT_NOFILE, (hard, hard))
        except (OSError, ValueError):
            return limit

    try:
        current, _ = res.getrlimit(res.RLIMIT_NOFILE)
    except (OSError, ValueError):
        return limit
    if current != res.RLIM_INFINITY and current < limit:
        limit = current
    return limit