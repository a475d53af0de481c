"""Field validators for form and question edits.

One function per field kind; ``make_validator`` picks the function for a kind
and binds the vocabulary it needs (categories, known ids).
"""
import enum
from functools import partial
from typing import Any, Callable, Iterable, Optional

from coaching_config.domain.common.types import as_int

MAX_QUESTION_TEXT_LENGTH = 255

FieldCheck = Callable[[Any], bool]


class FieldKind(str, enum.Enum):
    CHECKBOX = "Checkbox"
    TEXT = "Text"
    CATEGORY = "Category"
    IDENTIFIER = "Identifier"


def check_checkbox(value: Any) -> bool:
    return value is True or value is False


def check_text(value: Any, max_length: int = MAX_QUESTION_TEXT_LENGTH) -> bool:
    return isinstance(value, str) and len(value) <= max_length


def check_category(value: Any, categories: frozenset[str] = frozenset()) -> bool:
    # Empty string clears the category
    return value == "" or value in categories


def check_identifier(value: Any, known_ids: frozenset[int] = frozenset()) -> bool:
    number = as_int(value)
    return number is not None and number in known_ids


_CHECKS: dict[FieldKind, Callable[..., bool]] = {
    FieldKind.CHECKBOX: check_checkbox,
    FieldKind.TEXT: check_text,
    FieldKind.CATEGORY: check_category,
    FieldKind.IDENTIFIER: check_identifier,
}


def make_validator(
    kind: FieldKind | str,
    *,
    categories: Optional[Iterable[str]] = None,
    known_ids: Optional[Iterable[Any]] = None,
    max_length: int = MAX_QUESTION_TEXT_LENGTH,
) -> FieldCheck:
    """Return the check(value) -> bool function for a field kind."""
    try:
        kind = FieldKind(kind)
    except ValueError:
        raise ValueError(f"Invalid validator type: {kind!r}") from None
    check = _CHECKS[kind]
    if kind is FieldKind.TEXT:
        return partial(check, max_length=max_length)
    if kind is FieldKind.CATEGORY:
        return partial(check, categories=frozenset(categories or ()))
    if kind is FieldKind.IDENTIFIER:
        ids = frozenset(n for n in (as_int(v) for v in (known_ids or ())) if n is not None)
        return partial(check, known_ids=ids)
    return check
