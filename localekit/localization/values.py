"""Classification of JSON message values."""

from enum import Enum
from typing import Any, Dict, List, Union

from localekit.errors import SchemaError

MessageValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
LocaleDocument = Dict[str, MessageValue]


class JsonKind(Enum):
    """The closed set of shapes a message value can take."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> JsonKind:
    """Return the JSON kind of a decoded value.

    Raises:
        SchemaError: for values json.loads never produces.
    """
    if value is None:
        return JsonKind.NULL
    # bool is a subclass of int
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise SchemaError(f"Unsupported message value of type {type(value).__name__}")


def is_mapping(value: Any) -> bool:
    return isinstance(value, dict)


def is_empty_message(value: Any) -> bool:
    """A message counts as empty only when it is null or the empty string."""
    return value is None or value == ""
