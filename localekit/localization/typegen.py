"""Structural TypeScript type inference from an example locale document."""

import json
import re
from typing import Any

from .values import JsonKind, LocaleDocument, kind_of

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_SCALAR_TYPES = {
    JsonKind.NULL: "null",
    JsonKind.BOOLEAN: "boolean",
    JsonKind.NUMBER: "number",
    JsonKind.STRING: "string",
}


def property_name(name: str) -> str:
    """Render an object key as a TypeScript property name."""
    if _IDENTIFIER.match(name):
        return name
    return json.dumps(name, ensure_ascii=False)


def infer_type(value: Any, indent: int = 0) -> str:
    """Infer the TypeScript type of a JSON value.

    Arrays become an array of the sorted union of their distinct element
    types, objects list their keys in sorted order. The result depends only
    on the structure of ``value``, never on key insertion order.

    Args:
        value: Decoded JSON value
        indent: Nesting level, two spaces per level

    Returns:
        The type as TypeScript source text
    """
    kind = kind_of(value)

    if kind in _SCALAR_TYPES:
        return _SCALAR_TYPES[kind]

    if kind is JsonKind.ARRAY:
        element_types = sorted({infer_type(item, indent + 1) for item in value})
        if not element_types:
            return "never[]"
        if len(element_types) == 1:
            return f"{element_types[0]}[]"
        return "(" + "|".join(f"({t})" for t in element_types) + ")[]"

    # JsonKind.OBJECT
    indent_string = "  " * indent
    entries = []
    for name in sorted(value):
        entries.extend([
            f"{indent_string}  /**",
            f"{indent_string}   * The localized value for the message key `{name}`.",
            f"{indent_string}   */",
            f"{indent_string}  {property_name(name)}: {infer_type(value[name], indent + 1)},",
        ])
    return "{\n" + "\n".join(entries) + "\n" + indent_string + "}"


def render_locale_interface(document: LocaleDocument) -> str:
    """Render the ``Locale`` interface shared by every language."""
    return "\n".join([
        "/**",
        " * Type to which all locales adhere, contains the keys present for each locale.",
        " */",
        f"export interface Locale {infer_type(document)}",
    ])
