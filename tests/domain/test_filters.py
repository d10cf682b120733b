from __future__ import annotations

import pytest

from lib_log_fanout.domain.filters import (
    Comparison,
    FilterTarget,
    MessageFilter,
    function_filter,
    message_filter,
    path_filter,
)
from lib_log_fanout.domain.levels import Level
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


@pytest.mark.parametrize(
    "comparison, value, expected",
    [
        (Comparison.CONTAINS, "billing", True),
        (Comparison.STARTS_WITH, "/srv/app", True),
        (Comparison.ENDS_WITH, "api.py", True),
        (Comparison.EQUALS, "/srv/app/billing/api.py", True),
        (Comparison.EQUALS, "api.py", False),
        (Comparison.MATCHES, r"billing/\w+\.py$", True),
        (Comparison.MATCHES, r"^auth", False),
    ],
)
def test_path_comparisons(comparison: Comparison, value: str, expected: bool) -> None:
    flt = path_filter(comparison, value)

    assert flt.passes(Level.INFO, "/srv/app/billing/api.py", "charge()", None) is expected


def test_any_value_may_match() -> None:
    flt = function_filter(Comparison.EQUALS, "save()", "load()")

    assert flt.passes(Level.INFO, "a.py", "load()", None)
    assert not flt.passes(Level.INFO, "a.py", "drop()", None)


def test_case_insensitive_by_default() -> None:
    flt = message_filter(Comparison.CONTAINS, "TIMEOUT")

    assert flt.passes(Level.INFO, "a.py", "f()", "request timeout after 3s")


def test_case_sensitive_option() -> None:
    flt = message_filter(Comparison.CONTAINS, "TIMEOUT", case_sensitive=True)
    pattern = message_filter(Comparison.MATCHES, "TIMEOUT", case_sensitive=True)

    assert not flt.passes(Level.INFO, "a.py", "f()", "request timeout")
    assert not pattern.passes(Level.INFO, "a.py", "f()", "request timeout")


def test_exclude_inverts_the_outcome() -> None:
    flt = path_filter(Comparison.CONTAINS, "vendor", exclude=True)

    assert not flt.passes(Level.INFO, "/srv/vendor/lib.py", "f()", None)
    assert flt.passes(Level.INFO, "/srv/app/lib.py", "f()", None)


def test_min_level_limits_where_the_filter_applies() -> None:
    flt = path_filter(Comparison.CONTAINS, "billing", min_level=Level.WARNING)

    assert flt.passes(Level.INFO, "/srv/app/auth.py", "f()", None)
    assert not flt.passes(Level.ERROR, "/srv/app/auth.py", "f()", None)


def test_message_filter_passes_unresolved_messages() -> None:
    flt = message_filter(Comparison.EQUALS, "anything")

    assert flt.targets_message is True
    assert flt.passes(Level.INFO, "a.py", "f()", None)


def test_path_filter_does_not_target_message() -> None:
    assert path_filter(Comparison.CONTAINS, "x").targets_message is False


def test_empty_values_are_rejected() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        MessageFilter(target=FilterTarget.PATH, comparison=Comparison.CONTAINS, values=())


def test_filters_compare_by_value() -> None:
    first = message_filter(Comparison.MATCHES, r"\d+")
    second = message_filter(Comparison.MATCHES, r"\d+")

    assert first == second
    assert hash(first) == hash(second)
