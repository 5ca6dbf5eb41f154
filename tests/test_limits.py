from types import SimpleNamespace
from unittest import mock

from attackmap.limits import get_file_limit


def _fake_resource(readings, set_error=None):
    calls = iter(readings)

    def setrlimit(kind, values):
        if set_error is not None:
            raise set_error

    return SimpleNamespace(
        RLIMIT_NOFILE=7,
        RLIM_INFINITY=-1,
        getrlimit=lambda kind: next(calls),
        setrlimit=setrlimit,
    )


def test_get_file_limit_is_positive():
    assert get_file_limit() > 0


def test_raises_soft_limit_to_hard_limit():
    fake = _fake_resource([(1024, 4096), (4096, 4096)])
    with mock.patch("attackmap.limits._resource", fake):
        assert get_file_limit() == 4096


def test_returns_hard_limit_when_raising_fails():
    fake = _fake_resource([(1024, 4096)], set_error=ValueError("denied"))
    with mock.patch("attackmap.limits._resource", fake):
        assert get_file_limit() == 4096


def test_lower_current_limit_wins():
    fake = _fake_resource([(1024, 4096), (2048, 4096)])
    with mock.patch("attackmap.limits._resource", fake):
        assert get_file_limit() == 2048


def test_default_when_hard_limit_unbounded():
    fake = _fake_resource([(-1, -1), (-1, -1)])
    with mock.patch("attackmap.limits._resource", fake):
        assert get_file_limit() == 50000


def test_fixed_limit_without_resource_module():
    with mock.patch("attackmap.limits._resource", None):
        assert get_file_limit() == 10000