"""Emission of the generated JavaScript modules and type declarations.

Two directories are written with the same layout, one per module
convention::

    js/   ESM      (export const en = {...})
    cjs/  CommonJS (module.exports.en = {...})

Each holds ``locale.d.ts`` with the shared ``Locale`` interface,
``<code>.js`` and ``<code>.d.ts`` per language, and ``all.js`` /
``all.d.ts`` aggregating every language.
"""

import json
import math
from pathlib import Path
from typing import List, Sequence, Union

import structlog

from .loader import LocaleSet
from .storage import recreate_directory, write_text_file
from .values import JsonKind, LocaleDocument, MessageValue, kind_of

logger = structlog.get_logger(__name__)


def dash_alias(language_code: str) -> str:
    """``pt_br`` -> ``pt-br``."""
    return language_code.replace("_", "-")


def _module_header(language_code: str) -> List[str]:
    return [
        "// @ts-check",
        "",
        '/** @import { Locale } from "./locale.js"; */',
        "",
        "/**",
        f" * Contains the localized messages for the locale {language_code}.",
        " * @type {Locale}",
        " */",
    ]


# Number.MAX_SAFE_INTEGER; larger integers lose precision in JavaScript
_MAX_SAFE_INTEGER = 2 ** 53 - 1


def format_number(value: Union[int, float]) -> str:
    """Format a number the way ``JSON.stringify`` does.

    Integral floats lose their fraction (``1.0`` -> ``1``) and exponents
    are only used outside ``1e-7 <= |x| < 1e21``, without zero padding.
    Non-finite values become ``null``.
    """
    if isinstance(value, int) and abs(value) <= _MAX_SAFE_INTEGER:
        return str(value)
    value = float(value)
    if not math.isfinite(value):
        return "null"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr gives the shortest round-tripping digits, as JavaScript does
    mantissa, _, exponent = repr(abs(value)).partition("e")
    int_part, _, frac_part = mantissa.partition(".")
    all_digits = int_part + frac_part
    digits = all_digits.lstrip("0")
    # value == 0.<digits> * 10 ** point
    point = len(int_part) + int(exponent or 0) - (len(all_digits) - len(digits))
    digits = digits.rstrip("0")
    k = len(digits)

    if k <= point <= 21:
        return sign + digits + "0" * (point - k)
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits

    e = point - 1
    e_str = f"e{'+' if e >= 0 else '-'}{abs(e)}"
    if k == 1:
        return sign + digits + e_str
    return sign + digits[0] + "." + digits[1:] + e_str


def _to_js_literal(value: MessageValue, indent: int = 2, level: int = 0) -> str:
    """Serialize ``value`` like ``JSON.stringify(value, null, indent)``."""
    kind = kind_of(value)
    if kind is JsonKind.NULL:
        return "null"
    if kind is JsonKind.BOOLEAN:
        return "true" if value else "false"
    if kind is JsonKind.NUMBER:
        return format_number(value)
    if kind is JsonKind.STRING:
        return json.dumps(value, ensure_ascii=False)
    if not value:
        return "{}" if kind is JsonKind.OBJECT else "[]"

    inner = " " * (indent * (level + 1))
    outer = " " * (indent * level)
    if kind is JsonKind.OBJECT:
        items = [
            f"{inner}{json.dumps(key, ensure_ascii=False)}: {_to_js_literal(item, indent, level + 1)}"
            for key, item in value.items()
        ]
        return "{\n" + ",\n".join(items) + "\n" + outer + "}"
    items = [f"{inner}{_to_js_literal(item, indent, level + 1)}" for item in value]
    return "[\n" + ",\n".join(items) + "\n" + outer + "]"


def _all_entries(language_codes: Sequence[str]) -> List[str]:
    lines = []
    for code in sorted(language_codes):
        alias = dash_alias(code)
        lines.append(f"  {code},")
        if alias != code:
            lines.append(f'  "{alias}": {code},')
    return lines


_ALL_DOC = [
    "/**",
    " * An object with all messages for all languages.",
    " * The key is the language code, the value the messages.",
    " */",
]


def render_esm_module(language_code: str, document: LocaleDocument) -> str:
    return "\n".join(
        _module_header(language_code)
        + [f"export const {language_code} = {_to_js_literal(document)};"]
    )


def render_cjs_module(language_code: str, document: LocaleDocument) -> str:
    return "\n".join(
        _module_header(language_code)
        + [f"module.exports.{language_code} = {_to_js_literal(document)};"]
    )


def render_language_declaration(language_code: str) -> str:
    return "\n".join([
        'import type { Locale } from "./locale.js";',
        "",
        "/**",
        f" * Contains the localized messages for the locale {language_code}.",
        " */",
        f"export declare const {language_code}: Locale;",
    ])


def render_all_esm(language_codes: Sequence[str]) -> str:
    codes = sorted(language_codes)
    lines = ["// @ts-check", ""]
    lines += [f'import {{ {code} }} from "./{code}.js";' for code in codes]
    lines += [""] + _ALL_DOC + ["export const all = {"]
    lines += _all_entries(codes)
    lines.append("};")
    return "\n".join(lines)


def render_all_cjs(language_codes: Sequence[str]) -> str:
    codes = sorted(language_codes)
    lines = ["// @ts-check", ""]
    lines += [f'const {code} = require("./{code}.js").{code};' for code in codes]
    lines += [""] + _ALL_DOC + ["module.exports.all = {"]
    lines += _all_entries(codes)
    lines.append("};")
    return "\n".join(lines)


def render_all_declaration(language_codes: Sequence[str]) -> str:
    lines = ['import type { Locale } from "./locale.js";', "", "export interface AllLocales {"]
    for code in sorted(language_codes):
        alias = dash_alias(code)
        names = [code] if alias == code else [code, f'"{alias}"']
        for name in names:
            lines += [
                "  /**",
                f"   * The localized messages for the language `{code}`.",
                "   */",
                f"  {name}: Locale;",
            ]
    lines += ["}", ""] + _ALL_DOC + ["export declare const all: AllLocales;"]
    return "\n".join(lines)


class ModuleEmitter:
    """Writes the generated files for both module conventions."""

    def __init__(self, esm_dir: Path, cjs_dir: Path):
        self.esm_dir = Path(esm_dir)
        self.cjs_dir = Path(cjs_dir)
        self.written: List[Path] = []

    def prepare_output_dirs(self) -> None:
        """Delete and recreate both output directories."""
        recreate_directory(self.esm_dir)
        recreate_directory(self.cjs_dir)

    async def _write(self, path: Path, content: str) -> None:
        logger.info(f"Writing <{path}>")
        await write_text_file(path, content)
        self.written.append(path)

    async def _write_both(self, file_name: str, content: str) -> None:
        await self._write(self.esm_dir / file_name, content)
        await self._write(self.cjs_dir / file_name, content)

    async def write_all(self, locale_set: LocaleSet, locale_type: str) -> List[Path]:
        """Write every generated file.

        Args:
            locale_set: Validated locale documents
            locale_type: Rendered ``Locale`` interface, see ``render_locale_interface``

        Returns:
            Paths written, in write order
        """
        self.written = []

        await self._write_both("locale.d.ts", locale_type)

        for code, document in locale_set.items():
            await self._write(self.esm_dir / f"{code}.js", render_esm_module(code, document))
            await self._write(self.cjs_dir / f"{code}.js", render_cjs_module(code, document))
            await self._write_both(f"{code}.d.ts", render_language_declaration(code))

        codes = locale_set.languages()
        await self._write(self.esm_dir / "all.js", render_all_esm(codes))
        await self._write(self.cjs_dir / "all.js", render_all_cjs(codes))
        await self._write_both("all.d.ts", render_all_declaration(codes))

        return list(self.written)
