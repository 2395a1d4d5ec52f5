"""Tests for token-level value rewriting."""

from tinycss2 import ast

from mailcss.stylesheet.values import (
    rewrite_value,
    significant_tokens,
    split_var_arguments,
    tokenize,
)


class TestRewriteValue:
    def test_no_callbacks_preserves_value(self):
        value = "0 1px 2px rgb(0 0 0 / 0.05), inset 0 0 0 1px #fff"
        assert rewrite_value(value) == value

    def test_replace_function(self):
        def on_function(name, arguments):
            return "X" if name == "var" else None

        assert rewrite_value("1px solid var(--c)", on_function=on_function) == "1px solid X"

    def test_functions_are_visited_innermost_first(self):
        seen = []

        def on_function(name, arguments):
            seen.append((name, arguments))
            return None

        rewrite_value("outer(inner(1))", on_function=on_function)
        assert seen == [("inner", "1"), ("outer", "inner(1)")]

    def test_outer_sees_rewritten_arguments(self):
        def on_function(name, arguments):
            if name == "inner":
                return "2"
            if name == "outer":
                return f"[{arguments}]"
            return None

        assert rewrite_value("outer(inner(1))", on_function=on_function) == "[2]"

    def test_function_name_is_lowercased_for_callback(self):
        names = []
        rewrite_value("CALC(1px)", on_function=lambda n, a: names.append(n))
        assert names == ["calc"]

    def test_replace_token(self):
        def on_token(token):
            if isinstance(token, ast.IdentToken) and token.value == "red":
                return "blue"
            return None

        assert rewrite_value("red solid", on_token=on_token) == "blue solid"

    def test_blocks_are_rebuilt(self):
        assert rewrite_value("[a] (b)") == "[a] (b)"

    def test_text_that_looks_like_a_function_inside_a_string(self):
        calls = []
        rewrite_value('"var(--x)"', on_function=lambda n, a: calls.append(n))
        assert calls == []


class TestSplitVarArguments:
    def test_name_only(self):
        assert split_var_arguments("--color") == ("--color", None)

    def test_with_fallback(self):
        assert split_var_arguments("--color, red") == ("--color", "red")

    def test_fallback_keeps_commas(self):
        assert split_var_arguments("--f, Arial, sans-serif") == ("--f", "Arial, sans-serif")

    def test_empty_fallback_is_absent(self):
        assert split_var_arguments("--x,") == ("--x", None)

    def test_not_an_identifier(self):
        assert split_var_arguments("12px") == ("", None)


def test_significant_tokens_drops_whitespace():
    tokens = significant_tokens(tokenize(" a  b "))
    assert [t.value for t in tokens] == ["a", "b"]
