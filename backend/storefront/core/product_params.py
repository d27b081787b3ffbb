"""Product Query Params — typed codec between the URL query and QueryParameterSet.

Invariants:
    - decode() is total: unknown keys ignored, missing keys defaulted,
      malformed values defaulted (never raises)
    - page is always >= 1, q is always a str
    - decode(encode(p)) == p for every valid QueryParameterSet
    - encode() omits values equal to their default (clear-on-default)

Design Decisions:
    - Pure functions, no IO (ADR: ExMA functional core)
    - Multi-valued keys (?q=a&q=b) resolve to the first value, same as a browser form
    - Strict int parsing for page: ASCII digits only, so "2abc", "1_0" and "+2" are malformed
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from urllib.parse import urlencode

PAGE_SIZE = 8

DEFAULT_QUERY = ""
DEFAULT_PAGE = 1

RawParams = Mapping[str, str | Sequence[str]]


@dataclass(frozen=True)
class QueryParameterSet:
    """Recognized query params for the products listing."""
    q: str = DEFAULT_QUERY
    page: int = DEFAULT_PAGE


def _first(value) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, Sequence) and value:
        first = value[0]
        return first if isinstance(first, str) else None
    return None


def _parse_page(value: str) -> int | None:
    digits = value.strip()
    # int() alone would take "1_0" and non-ASCII digits
    if not (digits.isascii() and digits.isdigit()):
        return None
    page = int(digits)
    return page if page >= 1 else None


def decode_with_report(raw: RawParams) -> tuple[QueryParameterSet, tuple[str, ...]]:
    """Decode raw params; also return keys whose given value was replaced by a default."""
    defaulted: list[str] = []

    q = DEFAULT_QUERY
    if "q" in raw:
        value = _first(raw["q"])
        if value is None:
            defaulted.append("q")
        else:
            q = value

    page = DEFAULT_PAGE
    if "page" in raw:
        value = _first(raw["page"])
        parsed = _parse_page(value) if value is not None else None
        if parsed is None:
            defaulted.append("page")
        else:
            page = parsed

    return QueryParameterSet(q=q, page=page), tuple(defaulted)


def decode(raw: RawParams) -> QueryParameterSet:
    """Decode raw query params into a QueryParameterSet. Never raises."""
    params, _ = decode_with_report(raw)
    return params


def encode(params: QueryParameterSet) -> dict[str, str]:
    """Encode params as a flat str mapping, omitting defaults."""
    encoded: dict[str, str] = {}
    if params.q != DEFAULT_QUERY:
        encoded["q"] = params.q
    if params.page != DEFAULT_PAGE:
        encoded["page"] = str(params.page)
    return encoded


def to_query_string(params: QueryParameterSet) -> str:
    """URL query string for params ("" for the default set)."""
    return urlencode(encode(params))
