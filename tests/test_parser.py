"""Tests for query-string parsing of storefront locations."""

from types import SimpleNamespace

from models import SelectedOption
from parser import current_selection, parse_location, parse_selected_options, passthrough_params


def test_parse_selected_options_from_url() -> None:
    """Verify every query parameter becomes a SelectedOption, in order."""
    options = parse_selected_options("https://localhost:8080/?Color=Red&Size=S")
    assert options == [
        SelectedOption(name="Color", value="Red"),
        SelectedOption(name="Size", value="S"),
    ]


def test_parse_selected_options_accepts_request_like_objects() -> None:
    """Verify objects exposing .url and {"url": ...} mappings are both accepted."""
    request = SimpleNamespace(url="https://localhost:8080/?Size=M")
    assert parse_selected_options(request) == [SelectedOption(name="Size", value="M")]
    assert parse_selected_options({"url": "/?Size=L"}) == [SelectedOption(name="Size", value="L")]


def test_parse_selected_options_keeps_duplicates_and_order() -> None:
    """Verify repeated names are kept where they appear."""
    options = parse_selected_options("/?a=1&b=2&a=3")
    assert [(o.name, o.value) for o in options] == [("a", "1"), ("b", "2"), ("a", "3")]


def test_parse_location_decodes_values() -> None:
    """Verify plus signs and percent escapes are decoded."""
    location = parse_location("/?Color=Dark+Blue&Note=a%26b&Empty=")
    assert location.params == [("Color", "Dark Blue"), ("Note", "a&b"), ("Empty", "")]


def test_parse_location_pathname() -> None:
    """Verify the pathname is split off and defaults to the root."""
    assert parse_location("https://shop.test/products/tee?x=1").pathname == "/products/tee"
    assert parse_location("https://shop.test").pathname == "/"
    assert parse_location("?Size=M").pathname == "/"


def test_parse_location_roots_bare_relative_paths() -> None:
    """Verify a relative path without a leading slash is made root-relative."""
    location = parse_location("products/tee?Color=Red")
    assert location.pathname == "/products/tee"
    assert location.params == [("Color", "Red")]
    assert parse_location(42).pathname == "/42"


def test_malformed_url_degrades_to_empty_location() -> None:
    """Verify an unparseable URL yields no parameters instead of raising."""
    location = parse_location("http://example.com:abc/?Color=Red")
    assert location.params == []
    assert location.pathname == "/"
    assert parse_selected_options("http://example.com:abc/?Color=Red") == []


def test_missing_url_degrades_to_empty_location() -> None:
    """Verify None and empty input are treated as the root location."""
    assert parse_location(None).params == []
    assert parse_selected_options({"url": None}) == []


def test_current_selection_keeps_known_options_only() -> None:
    """Verify unknown keys are ignored and the first occurrence wins."""
    location = parse_location("/?ref=ad&Size=M&Color=Red&Size=L")
    assert current_selection(location, ["Color", "Size"]) == {"Size": "M", "Color": "Red"}


def test_passthrough_params_preserves_unrelated_params() -> None:
    """Verify non-option parameters survive verbatim and in order."""
    location = parse_location("/?ref=ad&Size=M&utm=x&ref=2")
    assert passthrough_params(location, ["Size"]) == [("ref", "ad"), ("utm", "x"), ("ref", "2")]
