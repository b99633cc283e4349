"""Key validation rules for structured fields.

Purpose
-------
Decide whether a candidate key may be rendered. A valid key is a non-empty
``str`` without whitespace. Rejections are never fatal: callers turn the
verdict into a warning diagnostic and drop the field.

Contents
--------
* :class:`KeyVerdict` – outcome of a key check.
* :func:`check_key` – classify a candidate key.
* :func:`is_valid_key` – boolean shortcut used for silent look-behind checks.
* :func:`describe_rejection` – human readable diagnostic text for a verdict.
"""

from __future__ import annotations

from enum import Enum


class KeyVerdict(Enum):
    """Outcome of :func:`check_key`."""

    VALID = "valid"
    WRONG_TYPE = "wrong_type"
    EMPTY = "empty"
    WHITESPACE = "whitespace"


def check_key(candidate: object) -> KeyVerdict:
    """Classify *candidate* as a field key.

    Examples
    --------
    >>> check_key("user_id")
    <KeyVerdict.VALID: 'valid'>
    >>> check_key("user id")
    <KeyVerdict.WHITESPACE: 'whitespace'>
    >>> check_key(1)
    <KeyVerdict.WRONG_TYPE: 'wrong_type'>
    >>> check_key("")
    <KeyVerdict.EMPTY: 'empty'>
    """

    if not isinstance(candidate, str):
        return KeyVerdict.WRONG_TYPE
    if not candidate:
        return KeyVerdict.EMPTY
    if any(char.isspace() for char in candidate):
        return KeyVerdict.WHITESPACE
    return KeyVerdict.VALID


def is_valid_key(candidate: object) -> bool:
    """Return ``True`` when *candidate* passes :func:`check_key`."""

    return check_key(candidate) is KeyVerdict.VALID


def describe_rejection(candidate: object, verdict: KeyVerdict, source: object | None = None) -> str:
    """Return the diagnostic sentence for a rejected key (without the library tag).

    ``source`` is the Loggable that yielded the key, or ``None`` for call-site
    arguments.

    Examples
    --------
    >>> describe_rejection("a b", KeyVerdict.WHITESPACE)
    'key `a b` with spaces passed in.'
    >>> describe_rejection(3, KeyVerdict.WRONG_TYPE)
    'key `3` expected to be of type str but `int` passed in.'
    """

    if verdict is KeyVerdict.WRONG_TYPE:
        text = f"key `{candidate}` expected to be of type str but `{type(candidate).__name__}` passed in"
    elif verdict is KeyVerdict.EMPTY:
        text = "empty key passed in"
    else:
        text = f"key `{candidate}` with spaces passed in"
    if source is None:
        return text + "."
    return f"{text} from {type(source).__name__}.loggable_fields()"
