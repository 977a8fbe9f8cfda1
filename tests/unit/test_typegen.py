"""Tests for JSON kind classification and TypeScript type inference."""

import pytest

from localekit.errors import SchemaError
from localekit.localization.typegen import infer_type, property_name, render_locale_interface
from localekit.localization.values import JsonKind, is_empty_message, kind_of


class TestKindOf:

    @pytest.mark.parametrize(
        "value,kind",
        [
            (None, JsonKind.NULL),
            (True, JsonKind.BOOLEAN),
            (False, JsonKind.BOOLEAN),
            (0, JsonKind.NUMBER),
            (1.5, JsonKind.NUMBER),
            ("", JsonKind.STRING),
            ([], JsonKind.ARRAY),
            ({}, JsonKind.OBJECT),
        ],
    )
    def test_kinds(self, value, kind):
        assert kind_of(value) is kind

    def test_unsupported_value(self):
        with pytest.raises(SchemaError):
            kind_of(object())

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_messages(self, value):
        assert is_empty_message(value)

    @pytest.mark.parametrize("value", [0, False, [], {}, " ", "x"])
    def test_non_empty_messages(self, value):
        assert not is_empty_message(value)


class TestInferType:

    @pytest.mark.parametrize(
        "value,expected",
        [(None, "null"), (True, "boolean"), (3, "number"), (2.5, "number"), ("x", "string")],
    )
    def test_scalars(self, value, expected):
        assert infer_type(value) == expected

    def test_empty_array(self):
        assert infer_type([]) == "never[]"

    def test_homogeneous_array(self):
        assert infer_type(["a", "b"]) == "string[]"

    def test_heterogeneous_array_is_sorted_union(self):
        assert infer_type([1, "a", None, 2]) == "((null)|(number)|(string))[]"

    def test_nested_array(self):
        assert infer_type([["a"], []]) == "((never[])|(string[]))[]"

    def test_object(self):
        expected = "\n".join([
            "{",
            "  /**",
            "   * The localized value for the message key `a`.",
            "   */",
            "  a: string,",
            "  /**",
            "   * The localized value for the message key `b`.",
            "   */",
            "  b: number,",
            "}",
        ])

        assert infer_type({"b": 1, "a": "x"}) == expected

    def test_nested_object_indentation(self):
        result = infer_type({"outer": {"inner": True}})

        assert "  outer: {\n" in result
        assert "    inner: boolean," in result
        assert "     * The localized value for the message key `inner`." in result
        assert result.endswith("  },\n}")

    def test_empty_object(self):
        assert infer_type({}) == "{\n\n}"

    def test_deterministic_regardless_of_insertion_order(self):
        first = {"z": "1", "a": {"y": [1, "x"], "b": None}}
        second = {"a": {"b": None, "y": ["x", 1]}, "z": "1"}

        assert infer_type(first) == infer_type(second)

    def test_idempotent(self):
        document = {"title": "Hi", "sizes": ["B", "KB"], "nested": {"n": 1}}

        assert infer_type(document) == infer_type(document)

    def test_quoted_property_names(self):
        assert property_name("title") == "title"
        assert property_name("$ok_1") == "$ok_1"
        assert property_name("with-dash") == '"with-dash"'
        assert property_name("1st") == '"1st"'


def test_render_locale_interface():
    result = render_locale_interface({"hello": "Hello"})

    assert result.startswith("/**\n * Type to which all locales adhere")
    assert "export interface Locale {\n" in result
    assert "  hello: string," in result
