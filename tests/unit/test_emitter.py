"""Tests for rendering and writing generated modules."""

from pathlib import Path

import pytest

from localekit.localization.emitter import (
    ModuleEmitter,
    dash_alias,
    format_number,
    render_all_cjs,
    render_all_declaration,
    render_all_esm,
    render_cjs_module,
    render_esm_module,
    render_language_declaration,
)
from localekit.localization.loader import LocaleSet


class TestRenderModules:

    def test_esm_module(self):
        result = render_esm_module("de", {"hello": "Hallo"})

        assert result == "\n".join([
            "// @ts-check",
            "",
            '/** @import { Locale } from "./locale.js"; */',
            "",
            "/**",
            " * Contains the localized messages for the locale de.",
            " * @type {Locale}",
            " */",
            'export const de = {\n  "hello": "Hallo"\n};',
        ])

    def test_cjs_module(self):
        result = render_cjs_module("de", {"hello": "Hallo"})

        assert result.endswith('module.exports.de = {\n  "hello": "Hallo"\n};')
        assert "export const" not in result

    def test_module_keeps_unicode(self):
        assert '"Привіт"' in render_esm_module("uk", {"hello": "Привіт"})

    def test_language_declaration(self):
        result = render_language_declaration("pt_br")

        assert result.startswith('import type { Locale } from "./locale.js";')
        assert result.endswith("export declare const pt_br: Locale;")


class TestRenderAll:

    def test_dash_alias(self):
        assert dash_alias("pt_br") == "pt-br"
        assert dash_alias("de") == "de"

    def test_all_esm_sorted_with_alias(self):
        result = render_all_esm(["pt_br", "de", "en"])

        lines = result.split("\n")
        assert lines[2:5] == [
            'import { de } from "./de.js";',
            'import { en } from "./en.js";',
            'import { pt_br } from "./pt_br.js";',
        ]
        body = result.split("export const all = {\n")[1]
        assert body == '  de,\n  en,\n  pt_br,\n  "pt-br": pt_br,\n};'

    def test_all_cjs_sorted_with_alias(self):
        result = render_all_cjs(["zh_tw", "en"])

        assert 'const en = require("./en.js").en;' in result
        assert 'const zh_tw = require("./zh_tw.js").zh_tw;' in result
        assert result.endswith('module.exports.all = {\n  en,\n  zh_tw,\n  "zh-tw": zh_tw,\n};')

    def test_input_order_does_not_matter(self):
        assert render_all_esm(["b", "a_x", "c"]) == render_all_esm(["c", "a_x", "b"])
        assert render_all_declaration(["b", "a"]) == render_all_declaration(["a", "b"])

    def test_all_declaration(self):
        result = render_all_declaration(["pt_br"])

        assert "export interface AllLocales {" in result
        assert "  pt_br: Locale;" in result
        assert '  "pt-br": Locale;' in result
        assert result.count("The localized messages for the language `pt_br`.") == 2
        assert result.endswith("export declare const all: AllLocales;")


class TestJsLiterals:

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (42, "42"),
            (-7, "-7"),
            (1.0, "1"),
            (-2.0, "-2"),
            (0.0, "0"),
            (0.5, "0.5"),
            (123.456, "123.456"),
            (1e-06, "0.000001"),
            (1e-07, "1e-7"),
            (1.5e-10, "1.5e-10"),
            (1e16, "10000000000000000"),
            (1e21, "1e+21"),
            (2.5e22, "2.5e+22"),
            (12345678901234567890, "12345678901234567000"),
            (float("nan"), "null"),
        ],
    )
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    def test_module_numbers_match_json_stringify(self):
        result = render_esm_module("en", {"size": 1.0, "ratio": 1e-07, "nested": {"n": [2.0, True, None]}})

        assert result.endswith(
            "export const en = {\n"
            '  "size": 1,\n'
            '  "ratio": 1e-7,\n'
            '  "nested": {\n'
            '    "n": [\n'
            "      2,\n"
            "      true,\n"
            "      null\n"
            "    ]\n"
            "  }\n"
            "};"
        )

    def test_empty_containers(self):
        result = render_cjs_module("en", {"list": [], "obj": {}})

        assert result.endswith('module.exports.en = {\n  "list": [],\n  "obj": {}\n};')


class TestModuleEmitter:

    @pytest.mark.asyncio
    async def test_write_all(self, temp_dir: Path):
        locale_set = LocaleSet()
        locale_set.add("en", {"a": "A"}, temp_dir / "en.json")
        locale_set.add("pt_br", {"a": "Á"}, temp_dir / "pt-br.json")
        emitter = ModuleEmitter(temp_dir / "js", temp_dir / "cjs")

        emitter.prepare_output_dirs()
        written = await emitter.write_all(locale_set, "export interface Locale {}")

        for directory in ("js", "cjs"):
            names = sorted(p.name for p in (temp_dir / directory).iterdir())
            assert names == [
                "all.d.ts", "all.js", "en.d.ts", "en.js", "locale.d.ts", "pt_br.d.ts", "pt_br.js",
            ]
        assert len(written) == 14
        assert (temp_dir / "js" / "locale.d.ts").read_text(encoding="utf-8") == "export interface Locale {}"
        assert "module.exports.pt_br" in (temp_dir / "cjs" / "pt_br.js").read_text(encoding="utf-8")

    def test_prepare_clears_stale_files(self, temp_dir: Path):
        stale = temp_dir / "js" / "old.js"
        stale.parent.mkdir()
        stale.write_text("stale")
        emitter = ModuleEmitter(temp_dir / "js", temp_dir / "cjs")

        emitter.prepare_output_dirs()

        assert not stale.exists()
        assert (temp_dir / "js").is_dir()
        assert (temp_dir / "cjs").is_dir()
