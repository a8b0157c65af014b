"""Query-string parsing into request objects, and the common response envelope."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union
from urllib.parse import parse_qs

QueryLike = Union[str, Mapping[str, Any]]

DEFAULT_TAKE = 10
DEFAULT_SKIP = 0
DEFAULT_ORDER_BY = "created_at"
DEFAULT_ORDER_DIRECTION = "DESC"

_INTEGER = re.compile(r"[+-]?[0-9]+")

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_PLAIN_FILTERS = {
    "building_status": "building_status",
    "sellable": "sellable",
    "connectivity": "connectivity",
    "resource_type": "resource_type",
    "cbd_area": "cbd_area",
    "subdistrict": "subdistrict",
    "citytown": "citytown",
    "province": "province",
    "grade_resource": "grade_resource",
    "building_type": "building_type",
}

# Order matters: a later key that maps to the same attribute wins.
_MAPPING_FILTERS = (
    ("building_type", "building_type"),
    ("building_grade", "building_grade"),
    ("year", "year"),
    ("district_subdistrict", "subdistrict"),
    ("subdistrict", "subdistrict"),
    ("progress", "progress"),
    ("sellable", "sellable"),
    ("connectivity", "connectivity"),
    ("lcd_presence", "lcd_presence"),
    ("sales_package_ids", "sales_package_ids"),
    ("building_restriction_ids", "building_restriction_ids"),
    ("lat", "lat"),
    ("lng", "lng"),
    ("radius", "radius"),
    ("poi_id", "poi_id"),
    ("polygon", "polygon"),
    ("min_lat", "min_lat"),
    ("max_lat", "max_lat"),
    ("min_lng", "min_lng"),
    ("max_lng", "max_lng"),
)


def _plain(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


@dataclass
class Pagination:
    """Paging information returned alongside list results."""

    take: int
    skip: int
    total: int

    def to_dict(self) -> dict[str, int]:
        return {"take": self.take, "skip": self.skip, "total": self.total}


@dataclass
class WebResponse:
    """The envelope every API response is wrapped in."""

    status: str
    code: int
    data: Any = None
    extras: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "code": self.code,
            "data": _plain(self.data),
            "extras": _plain(self.extras),
        }


class PagedRequest:
    """A list request with paging and ordering; ordering falls back to defaults."""

    def __init__(
        self,
        take: int = 0,
        skip: int = 0,
        order_by: str = "",
        order_direction: str = "",
    ) -> None:
        self.take = take
        self.skip = skip
        self._order_by = order_by
        self._order_direction = ""
        self.set_order_direction(order_direction)

    @property
    def order_by(self) -> str:
        return self._order_by or DEFAULT_ORDER_BY

    @order_by.setter
    def order_by(self, value: str) -> None:
        self._order_by = value

    @property
    def order_direction(self) -> str:
        return self._order_direction or DEFAULT_ORDER_DIRECTION

    @order_direction.setter
    def order_direction(self, value: str) -> None:
        self.set_order_direction(value)

    def set_order_direction(self, direction: str) -> None:
        """Store the direction upper-cased."""
        self._order_direction = direction.upper()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(take={self.take!r}, skip={self.skip!r}, "
            f"order_by={self.order_by!r}, order_direction={self.order_direction!r})"
        )


def parse_query(query: QueryLike) -> dict[str, list[str]]:
    """Normalise a query string or mapping into a dict of value lists."""
    if isinstance(query, str):
        text = query[1:] if query.startswith("?") else query
        return parse_qs(text, keep_blank_values=True)
    parsed: dict[str, list[str]] = {}
    for key, value in query.items():
        if isinstance(value, str):
            parsed[key] = [value]
        elif isinstance(value, (list, tuple)):
            parsed[key] = [str(item) for item in value]
        else:
            parsed[key] = [str(value)]
    return parsed


def _first(params: Mapping[str, list[str]], key: str) -> str:
    values = params.get(key)
    return values[0] if values else ""


def _to_int(text: str, name: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer for {name}: {text!r}")
    return int(text)


def _to_bool(text: str) -> bool | None:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    return None


def set_pagination(request: Any, query: QueryLike) -> None:
    """Set take and skip from the query, defaulting to 10 and 0."""
    params = parse_query(query)
    request.take = (
        _to_int(_first(params, "take"), "take") if "take" in params else DEFAULT_TAKE
    )
    request.skip = (
        _to_int(_first(params, "skip"), "skip") if "skip" in params else DEFAULT_SKIP
    )


def set_order(request: Any, query: QueryLike) -> None:
    """Set ordering column and direction when present in the query."""
    params = parse_query(query)
    if "orderBy" in params:
        request.order_by = _first(params, "orderBy")
    if "orderDirection" in params:
        request.order_direction = _first(params, "orderDirection")


def set_search(request: Any, query: QueryLike) -> None:
    """Set the search term when the query carries a non-empty one."""
    search = _first(parse_query(query), "search")
    if search:
        request.search = search


def set_filters(request: Any, query: QueryLike) -> None:
    """Apply building list filters present in the query."""
    params = parse_query(query)
    for key, attribute in _PLAIN_FILTERS.items():
        value = _first(params, key)
        if value:
            setattr(request, attribute, value)
    competitor = _to_bool(_first(params, "competitor_location"))
    if competitor is not None:
        request.competitor_location = competitor


def set_mapping_filters(request: Any, query: QueryLike) -> None:
    """Apply map filters, accepting both ``filter[key]`` and flat ``key`` forms."""
    params = parse_query(query)

    def lookup(key: str) -> str:
        return _first(params, f"filter[{key}]") or _first(params, key)

    for key, attribute in _MAPPING_FILTERS:
        value = lookup(key)
        if value:
            setattr(request, attribute, value)