"""
Query-string parser for storefront locations.

Extracts the option selections encoded in a URL's query string and keeps
every other parameter, in its original order, so generated links can carry
it through unchanged.

No product-specific logic: callers pass the option names they care about.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl

import httpx

from models import SelectedOption

logger = logging.getLogger(__name__)


@dataclass
class ParsedLocation:
    """Pathname and ordered query parameters of a URL."""

    pathname: str = "/"
    params: list[tuple[str, str]] = field(default_factory=list)  # duplicates kept


def parse_location(url: Any) -> ParsedLocation:
    """Split a URL (string, URL object or request) into pathname and params.

    Anything that cannot be parsed degrades to an empty location.
    """
    raw = _url_string(url)
    try:
        parsed = httpx.URL(raw)
    except httpx.InvalidURL:
        logger.debug("Unparseable URL %r, using empty location", raw)
        return ParsedLocation()

    # raw_path keeps the percent-encoding; .path would decode it
    pathname, _, query = parsed.raw_path.decode("ascii").partition("?")
    # Bare relative paths ("products/tee") are rooted so generated links stay absolute
    if not pathname.startswith("/"):
        pathname = "/" + pathname
    return ParsedLocation(pathname=pathname, params=_parse_query(query))


def parse_selected_options(request: Any) -> list[SelectedOption]:
    """Return every query parameter of a request as a SelectedOption.

    Order and duplicates are preserved. Nothing is filtered against known
    product options.
    """
    return [SelectedOption(name=name, value=value) for name, value in parse_location(request).params]


def current_selection(location: ParsedLocation, option_names: Iterable[str]) -> dict[str, str]:
    """Map each known option name to its selected value.

    When an option appears more than once, the first occurrence wins.
    """
    known = set(option_names)
    selection: dict[str, str] = {}
    for name, value in location.params:
        if name in known and name not in selection:
            selection[name] = value
    return selection


def passthrough_params(location: ParsedLocation, option_names: Iterable[str]) -> list[tuple[str, str]]:
    """Return the query parameters that are not product options, in order."""
    known = set(option_names)
    return [(name, value) for name, value in location.params if name not in known]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _url_string(url: Any) -> str:
    """Accept a str, a URL object, a request with .url, or a {"url": ...} mapping."""
    if isinstance(url, str):
        return url
    # Starlette requests are Mappings over the ASGI scope, so check .url first
    if hasattr(url, "url"):
        url = url.url
    elif isinstance(url, Mapping):
        url = url.get("url", "")
    return "" if url is None else str(url)


def _parse_query(query: str) -> list[tuple[str, str]]:
    if not query:
        return []
    try:
        return parse_qsl(query, keep_blank_values=True)
    except ValueError:
        logger.debug("Malformed query string %r, ignoring", query)
        return []
