from datetime import datetime
from typing import Callable, Iterable, List, Optional

from pagecms.domain.exceptions import ValidationError

OPTION_TYPE_TEXT = "text"
OPTION_TYPE_INTEGER = "integer"
OPTION_TYPE_FLOAT = "float"
OPTION_TYPE_BOOLEAN = "boolean"
OPTION_TYPE_DATETIME = "datetime"
OPTION_TYPE_CSS_URL = "css-url"
OPTION_TYPE_JS_URL = "js-url"

OPTION_TYPES = {
    OPTION_TYPE_TEXT,
    OPTION_TYPE_INTEGER,
    OPTION_TYPE_FLOAT,
    OPTION_TYPE_BOOLEAN,
    OPTION_TYPE_DATETIME,
    OPTION_TYPE_CSS_URL,
    OPTION_TYPE_JS_URL,
}

_BOOLEAN_VALUES = {"true", "false", "1", "0"}


def _is_valid_value(option_type, value):
    if option_type in (OPTION_TYPE_TEXT, OPTION_TYPE_CSS_URL, OPTION_TYPE_JS_URL):
        return True
    if option_type == OPTION_TYPE_BOOLEAN:
        return value.strip().lower() in _BOOLEAN_VALUES
    try:
        if option_type == OPTION_TYPE_INTEGER:
            int(value)
        elif option_type == OPTION_TYPE_FLOAT:
            float(value)
        elif option_type == OPTION_TYPE_DATETIME:
            datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_option_values(option_values: Optional[Iterable[dict]]) -> None:
    keys = set()
    for option in option_values or []:
        key = (option.get("key") or "").strip()
        option_type = option.get("type") or OPTION_TYPE_TEXT
        value = option.get("value")

        if not key:
            raise ValidationError("option_key_required", "Option key is required.")

        if key.lower() in keys:
            raise ValidationError(
                "option_key_duplicated",
                f"Option {key} is submitted more than once.",
            )
        keys.add(key.lower())

        if option_type not in OPTION_TYPES:
            raise ValidationError(
                "option_type_invalid",
                f"Option {key} has unknown type {option_type!r}.",
            )

        if value not in (None, "") and not _is_valid_value(option_type, str(value)):
            raise ValidationError(
                "option_value_invalid",
                f"Value {value!r} of option {key} is not a valid {option_type}.",
            )


def save_option_values(
    option_values: Optional[Iterable[dict]],
    saved_options: List,
    factory: Callable[[], object],
    *,
    default_values: Optional[dict] = None,
) -> None:
    """
    Reconcile ``saved_options`` (mutated in place) with the submitted values.

    An option is dropped when it is not submitted, its value is empty, or the
    value equals the layout default for the same key.
    """
    default_values = {k.lower(): v for k, v in (default_values or {}).items()}

    wanted = {}
    for option in option_values or []:
        key = option["key"].strip()
        value = option.get("value")
        value = None if value is None else str(value)

        if value in (None, ""):
            continue
        if default_values.get(key.lower()) == value:
            continue

        wanted[key.lower()] = (key, option.get("type") or OPTION_TYPE_TEXT, value)

    for saved in list(saved_options):
        target = wanted.pop(saved.key.lower(), None)
        if target is None:
            saved_options.remove(saved)
            continue

        _, option_type, value = target
        if saved.value != value:
            saved.value = value
        if saved.type != option_type:
            saved.type = option_type

    for key, option_type, value in wanted.values():
        option = factory()
        option.key = key
        option.type = option_type
        option.value = value
        saved_options.append(option)
