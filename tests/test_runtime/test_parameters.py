"""Tests for plugcli.runtime.parameters."""

from __future__ import annotations

import pytest

from plugcli.models import Parameters
from plugcli.runtime.parameters import coerce_value, parse_params, split_argv


class TestSplitArgv:
    def test_positionals_only(self) -> None:
        assert split_argv(["build", "release"]) == (["build", "release"], {})

    def test_long_flag(self) -> None:
        assert split_argv(["build", "--force"]) == (["build"], {"force": True})

    def test_long_option_with_equals(self) -> None:
        assert split_argv(["--name=Ripley"]) == ([], {"name": "Ripley"})

    def test_long_option_consumes_next_value(self) -> None:
        assert split_argv(["--count", "3", "quote"]) == (["quote"], {"count": 3})

    def test_long_option_does_not_consume_option(self) -> None:
        assert split_argv(["--force", "--quiet"]) == ([], {"force": True, "quiet": True})

    def test_negated_flag(self) -> None:
        assert split_argv(["--no-color"]) == ([], {"color": False})

    def test_short_flag_cluster(self) -> None:
        assert split_argv(["-abc"]) == ([], {"a": True, "b": True, "c": True})

    def test_short_option_with_equals(self) -> None:
        assert split_argv(["-n=5"]) == ([], {"n": 5})

    def test_double_dash_ends_options(self) -> None:
        assert split_argv(["run", "--", "--not-an-option"]) == (
            ["run", "--not-an-option"],
            {},
        )

    def test_negative_number_is_positional(self) -> None:
        assert split_argv(["offset", "-5"]) == (["offset", "-5"], {})

    def test_repeated_option_collects_list(self) -> None:
        assert split_argv(["--tag", "a", "--tag", "b"]) == ([], {"tag": ["a", "b"]})


class TestCoerceValue:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("3", 3),
            ("-2", -2),
            ("1.5", 1.5),
            ("true", True),
            ("False", False),
            ("Ripley", "Ripley"),
            ("1.2.3", "1.2.3"),
        ],
    )
    def test_values(self, raw: str, expected: object) -> None:
        assert coerce_value(raw) == expected


class TestParseParams:
    def test_string_input(self) -> None:
        params = parse_params("quote random --count 3")
        assert params.array == ["quote", "random"]
        assert params.options == {"count": 3}
        assert params.raw == "quote random --count 3"
        assert params.argv == ["quote", "random", "--count", "3"]

    def test_quoted_string(self) -> None:
        params = parse_params('say "hello world"')
        assert params.array == ["say", "hello world"]

    def test_list_input(self) -> None:
        params = parse_params(["build", "--flag"])
        assert params.array == ["build"]
        assert params.options == {"flag": True}

    def test_none_is_empty(self) -> None:
        params = parse_params(None)
        assert params.array == []
        assert params.options == {}

    def test_extra_options_win(self) -> None:
        params = parse_params("go --speed 1", {"speed": 9, "quiet": True})
        assert params.options == {"speed": 9, "quiet": True}

    def test_parameters_input_is_copied(self) -> None:
        original = Parameters(array=["go"], options={"a": 1})
        params = parse_params(original, {"b": 2})
        assert params is not original
        assert params.options == {"a": 1, "b": 2}
        assert original.options == {"a": 1}


class TestParametersModel:
    def test_positional_helpers(self) -> None:
        params = Parameters(array=["one", "two"])
        assert params.first == "one"
        assert params.second == "two"
        assert params.third is None
        assert params.string == "one two"
