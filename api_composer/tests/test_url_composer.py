"""
Tests for URL/query composition: building URLs from param rows and
deriving param rows back from URLs.
"""

from urllib.parse import urlencode

import httpx
import pytest
from hypothesis import given, strategies as st, settings

from api_composer.exceptions import MalformedUrlError
from api_composer.schemas.request import ParamRow
from api_composer.services.url_composer import build_url_with_params, parse_params_from_url


token_strategy = st.text(
    alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyz0123456789"),
    min_size=1,
    max_size=8,
)

url_strategy = st.sampled_from([
    "https://api.example.com/items",
    "https://api.example.com/items?existing=1&existing=2",
    "http://localhost:8080/",
    "https://example.com/a/b?x=%20y",
])


class TestBuildUrlWithParams:

    @given(url=url_strategy)
    @settings(max_examples=20)
    def test_no_params_returns_url_unchanged(self, url: str):
        assert build_url_with_params(url, []) == url

    def test_only_disabled_or_blank_params_returns_url_unchanged(self):
        params = [
            ParamRow(key="q", value="1", enabled=False),
            ParamRow(key="   ", value="2"),
        ]
        url = "https://api.example.com/items?keep=me"
        assert build_url_with_params(url, params) == url

    def test_no_params_leaves_even_malformed_url_alone(self):
        assert build_url_with_params("not a url", []) == "not a url"

    def test_appends_enabled_param(self):
        result = build_url_with_params(
            "https://api.example.com/items",
            [ParamRow(key="q", value="1")],
        )
        assert result == "https://api.example.com/items?q=1"

    def test_keys_and_values_are_trimmed(self):
        result = build_url_with_params(
            "https://api.example.com/items",
            [ParamRow(key="  q ", value=" 1  ")],
        )
        assert result.endswith("?q=1")

    def test_set_semantics_overwrite_existing_key_in_place(self):
        result = build_url_with_params(
            "https://x.io/a?q=0&r=1&q=2",
            [ParamRow(key="q", value="new")],
        )
        assert httpx.URL(result).params.multi_items() == [("q", "new"), ("r", "1")]

    def test_duplicate_rows_collapse_to_last_value(self):
        result = build_url_with_params(
            "https://x.io/a",
            [ParamRow(key="a", value="1"), ParamRow(key="b", value="2"), ParamRow(key="a", value="3")],
        )
        assert httpx.URL(result).params.multi_items() == [("a", "3"), ("b", "2")]

    def test_values_are_encoded(self):
        result = build_url_with_params(
            "https://x.io/search",
            [ParamRow(key="q", value="a b&c")],
        )
        assert httpx.URL(result).params["q"] == "a b&c"

    @pytest.mark.parametrize("url", ["not a url", "/relative/path", "example.com/items", ""])
    def test_malformed_url_with_params_raises(self, url: str):
        with pytest.raises(MalformedUrlError):
            build_url_with_params(url, [ParamRow(key="q", value="1")])


class TestParseParamsFromUrl:

    def test_parses_pairs_in_order(self):
        rows = parse_params_from_url("https://x.io/a?b=2&a=1&b=3")

        assert [(row.key, row.value) for row in rows] == [("b", "2"), ("a", "1"), ("b", "3")]
        assert all(row.enabled for row in rows)
        assert len({row.id for row in rows}) == len(rows)

    def test_decodes_values(self):
        rows = parse_params_from_url("https://x.io/a?q=hello+world&e=%26")
        assert [(row.key, row.value) for row in rows] == [("q", "hello world"), ("e", "&")]

    def test_blank_values_are_kept(self):
        rows = parse_params_from_url("https://x.io/a?flag=&x=1")
        assert [(row.key, row.value) for row in rows] == [("flag", ""), ("x", "1")]

    def test_url_without_query_has_no_params(self):
        assert parse_params_from_url("https://x.io/a") == []

    @pytest.mark.parametrize("url", ["not a url", "", "/only/a/path?x=1"])
    def test_unparseable_url_returns_empty_list(self, url: str):
        assert parse_params_from_url(url) == []


class TestRoundTrip:

    @given(pairs=st.lists(st.tuples(token_strategy, token_strategy), min_size=1, max_size=6))
    @settings(max_examples=100)
    def test_parse_then_build_reproduces_query(self, pairs: list[tuple[str, str]]):
        base = "https://api.example.com/items"
        query = urlencode(pairs)

        rebuilt = build_url_with_params(base, parse_params_from_url(base + "?" + query))

        # Set semantics: first position of each key, last value wins
        expected: dict[str, str] = {}
        for key, value in pairs:
            expected[key] = value
        assert httpx.URL(rebuilt).params.multi_items() == list(expected.items())
