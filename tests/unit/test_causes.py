from __future__ import annotations

from lib_struct_logger.domain.causes import MAX_CAUSE_DEPTH, root_cause, root_cause_message


def _chain(length: int) -> list[Exception]:
    errors = [RuntimeError(f"level {index}") for index in range(length)]
    for outer, inner in zip(errors, errors[1:]):
        outer.__cause__ = inner
    return errors


def test_error_without_cause_is_its_own_root() -> None:
    error = ValueError("alone")
    assert root_cause(error) is error
    assert root_cause_message(error) == "alone"


def test_explicit_chain_resolves_to_innermost_error() -> None:
    errors = _chain(3)
    assert root_cause(errors[0]) is errors[2]
    assert root_cause_message(errors[0]) == "level 2"


def test_implicit_context_is_not_followed() -> None:
    """Only ``raise ... from ...`` links count; exceptions raised while handling do not."""

    try:
        try:
            raise KeyError("inner")
        except KeyError:
            raise RuntimeError("outer")
    except RuntimeError as exc:
        assert root_cause(exc) is exc


def test_cycle_stops_at_last_unseen_error() -> None:
    first, second = ValueError("first"), ValueError("second")
    first.__cause__ = second
    second.__cause__ = first
    assert root_cause(first) is second


def test_walk_is_bounded_by_max_depth() -> None:
    errors = _chain(MAX_CAUSE_DEPTH + 50)
    assert root_cause(errors[0]) is errors[MAX_CAUSE_DEPTH]
