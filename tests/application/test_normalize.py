from __future__ import annotations

from collections import OrderedDict

from hypothesis import given
from hypothesis import strategies as st

from lib_struct_logger.application.normalize import (
    ERROR_MESSAGE_KEY,
    ArgumentKind,
    classify,
    expand_loggable,
    normalize_arguments,
)
from lib_struct_logger.domain.fields import Field, GenericLoggable


class Collector(list):
    """Diagnostic sink remembering every sentence."""

    def __call__(self, text: str) -> None:
        self.append(text)


class NoneLoggable:
    def loggable_fields(self):
        return None


class MappingLoggable:
    def loggable_fields(self):
        return {"user": "ada", "bad key": 1}


class LoggableError(Exception):
    def loggable_fields(self):
        return ["code", 42]


def test_flat_pairs_in_call_order() -> None:
    report = Collector()
    result = normalize_arguments(["a", 1, "b", "two"], report)
    assert result.fields == [Field("a", 1), Field("b", "two")]
    assert result.error is None
    assert report == []


def test_odd_count_drops_trailing_item_with_one_diagnostic() -> None:
    report = Collector()
    result = normalize_arguments(["a", "b", "c"], report)
    assert result.fields == [Field("a", "b")]
    assert report == [
        "odd number of parameters (3) passed in. The value pair for key `c` not found thus it has been ignored."
    ]


def test_rejected_key_consumes_its_value_and_stops_pairing() -> None:
    report = Collector()
    result = normalize_arguments(["a b", 1, "c", 2], report)
    assert result.fields == []
    assert report == ["key `a b` with spaces passed in."]


def test_wrong_type_key_is_reported_with_its_type() -> None:
    report = Collector()
    normalize_arguments([7, "x"], report)
    assert report == ["key `7` expected to be of type str but `int` passed in."]


def test_loggables_and_mappings_survive_lost_ordering() -> None:
    report = Collector()
    result = normalize_arguments([1, "x", "orphan", GenericLoggable("k", "v"), {"m": 2}], report)
    assert result.fields == [Field("k", "v"), Field("m", 2)]
    assert len(report) == 1


def test_loggable_is_expanded_in_place() -> None:
    result = normalize_arguments(["a", 1, GenericLoggable("b", 2, "c", 3), "d", 4], Collector())
    assert [field.key for field in result.fields] == ["a", "b", "c", "d"]


def test_nested_odd_loggable_drops_only_its_own_trailing_item() -> None:
    report = Collector()
    result = normalize_arguments(["outer", 1, GenericLoggable("a", 1, "b"), "last", 2], report)
    assert result.fields == [Field("outer", 1), Field("a", 1), Field("last", 2)]
    assert report == [
        "odd number of parameters (3) returned from GenericLoggable.loggable_fields(). "
        "The value pair for key `b` not found thus it has been ignored."
    ]


def test_loggable_returning_none_is_reported_and_skipped() -> None:
    report = Collector()
    result = normalize_arguments([NoneLoggable(), "a", 1], report)
    assert result.fields == [Field("a", 1)]
    assert report == ["NoneLoggable.loggable_fields() returned None"]


def test_loggable_returning_mapping_validates_keys_against_source() -> None:
    report = Collector()
    assert expand_loggable(MappingLoggable(), report) == [Field("user", "ada")]
    assert report == ["key `bad key` with spaces passed in from MappingLoggable.loggable_fields()"]


def test_error_is_forwarded_and_described() -> None:
    error = ValueError("boom")
    result = normalize_arguments(["a", 1, error], Collector())
    assert result.error is error
    assert result.fields == [Field("a", 1), Field(ERROR_MESSAGE_KEY, "boom")]


def test_error_message_uses_root_cause() -> None:
    try:
        try:
            raise OSError("disk full")
        except OSError as exc:
            raise RuntimeError("save failed") from exc
    except RuntimeError as exc:
        result = normalize_arguments([exc], Collector())
    assert result.fields == [Field(ERROR_MESSAGE_KEY, "disk full")]


def test_first_error_is_forwarded_but_every_error_is_described() -> None:
    first, second = ValueError("one"), KeyError("two")
    result = normalize_arguments([first, second], Collector())
    assert result.error is first
    assert result.fields == [Field(ERROR_MESSAGE_KEY, "one"), Field(ERROR_MESSAGE_KEY, "'two'")]


def test_error_does_not_shift_pair_parity() -> None:
    result = normalize_arguments([ValueError("x"), "a", 1], Collector())
    assert result.fields[1:] == [Field("a", 1)]


def test_loggable_error_is_expanded_not_forwarded() -> None:
    result = normalize_arguments([LoggableError("hidden")], Collector())
    assert result.error is None
    assert result.fields == [Field("code", 42)]


def test_errors_as_plain_values_when_not_captured() -> None:
    error = ValueError("kept")
    report = Collector()
    result = normalize_arguments(["cause", error], report, capture_errors=False)
    assert result == ([Field("cause", error)], None)
    normalize_arguments([error, "x"], report, capture_errors=False)
    assert report == ["key `kept` expected to be of type str but `ValueError` passed in."]


def test_mapping_after_a_key_is_that_key_value() -> None:
    payload = {"a": 1}
    result = normalize_arguments(["payload", payload], Collector())
    assert result.fields == [Field("payload", payload)]


def test_mapping_in_even_slot_is_expanded_and_validated() -> None:
    report = Collector()
    result = normalize_arguments([OrderedDict([("a", 1), (2, "x"), ("b", 2)])], report)
    assert result.fields == [Field("a", 1), Field("b", 2)]
    assert report == ["key `2` expected to be of type str but `int` passed in."]


def test_mapping_in_odd_slot_after_non_key_is_expanded() -> None:
    result = normalize_arguments([GenericLoggable("k", "v"), {"m": 1}], Collector())
    assert result.fields == [Field("k", "v"), Field("m", 1)]
    result = normalize_arguments([ValueError("x"), {"m": 1}], Collector())
    assert result.fields[1:] == [Field("m", 1)]


def test_classes_are_not_loggables() -> None:
    assert classify(GenericLoggable) is ArgumentKind.SCALAR
    assert classify(GenericLoggable()) is ArgumentKind.LOGGABLE


def test_empty_arguments() -> None:
    assert normalize_arguments([], Collector()) == ([], None)


KEYS = st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJ0123456789_.-", min_size=1, max_size=12)
SCALARS = st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=20))


@given(st.lists(st.tuples(KEYS, SCALARS), max_size=8))
def test_well_formed_pairs_pass_through_unchanged(pairs: list[tuple[str, object]]) -> None:
    report = Collector()
    args = [item for pair in pairs for item in pair]
    result = normalize_arguments(args, report)
    assert result.fields == [Field(key, value) for key, value in pairs]
    assert report == []


@given(st.lists(st.tuples(KEYS, SCALARS), max_size=8), KEYS)
def test_odd_length_drops_only_the_trailing_item(pairs: list[tuple[str, object]], dangling: str) -> None:
    report = Collector()
    args = [item for pair in pairs for item in pair] + [dangling]
    result = normalize_arguments(args, report)
    assert result.fields == [Field(key, value) for key, value in pairs]
    assert len(report) == 1
    assert f"key `{dangling}` not found" in report[0]
