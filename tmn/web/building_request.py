"""Request shapes for building listing, map filtering and map export."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from tmn.web.query import PagedRequest

SELLABLE_VALUES = ("sell", "not_sell")
CONNECTIVITY_VALUES = ("online", "manual", "not_yet_checked")


def _shortest_digits(value: float) -> tuple[str, int]:
    """Shortest round-trip digits of ``abs(value)`` and the decimal point position."""
    _, digits, exponent = Decimal(repr(abs(value))).as_tuple()
    text = "".join(str(digit) for digit in digits)
    point = len(text) + exponent
    return text.rstrip("0") or "0", point


def _fixed(digits: str, point: int) -> str:
    if point <= 0:
        return "0." + "0" * -point + digits
    if point >= len(digits):
        return digits + "0" * (point - len(digits))
    return digits[:point] + "." + digits[point:]


def _scientific(digits: str, point: int, min_exp_digits: int) -> str:
    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    exp = point - 1
    sign = "+" if exp >= 0 else "-"
    return f"{mantissa}e{sign}{abs(exp):0{min_exp_digits}d}"


def _format_float(value: float) -> str:
    """Render a float the way the default value formatting of the API does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        return sign + "0"
    digits, point = _shortest_digits(value)
    exp = point - 1
    if exp < -4 or exp >= 6:
        return sign + _scientific(digits, point, 2)
    return sign + _fixed(digits, point)


def _json_float(value: float) -> str:
    """Render a float as a JSON number in the API's encoding."""
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign = "-" if value < 0 else ""
    digits, point = _shortest_digits(value)
    magnitude = abs(value)
    if magnitude < 1e-6 or magnitude >= 1e21:
        return sign + _scientific(digits, point, 1)
    return sign + _fixed(digits, point)


@dataclass
class UpdateBuildingRequest:
    """Editable commercial attributes of a building."""

    sellable: str = ""
    connectivity: str = ""
    resource_type: str = ""

    def validate(self) -> None:
        """Raise ValueError when sellable or connectivity holds an unknown value."""
        if self.sellable and self.sellable not in SELLABLE_VALUES:
            raise ValueError(f"sellable must be one of {' '.join(SELLABLE_VALUES)}")
        if self.connectivity and self.connectivity not in CONNECTIVITY_VALUES:
            raise ValueError(
                f"connectivity must be one of {' '.join(CONNECTIVITY_VALUES)}"
            )


class BuildingRequestFindAll(PagedRequest):
    """Paging, ordering, search and filters for listing buildings."""

    def __init__(
        self,
        take: int = 0,
        skip: int = 0,
        order_by: str = "",
        order_direction: str = "",
        *,
        search: str = "",
        building_status: str = "",
        sellable: str = "",
        connectivity: str = "",
        resource_type: str = "",
        competitor_location: bool | None = None,
        cbd_area: str = "",
        subdistrict: str = "",
        citytown: str = "",
        province: str = "",
        grade_resource: str = "",
        building_type: str = "",
    ) -> None:
        super().__init__(take, skip, order_by, order_direction)
        self.search = search
        self.building_status = building_status
        self.sellable = sellable
        self.connectivity = connectivity
        self.resource_type = resource_type
        self.competitor_location = competitor_location
        self.cbd_area = cbd_area
        self.subdistrict = subdistrict
        self.citytown = citytown
        self.province = province
        self.grade_resource = grade_resource
        self.building_type = building_type


@dataclass
class MappingBuildingRequest:
    """Raw map filter values; list values are comma separated."""

    building_type: str = ""
    building_grade: str = ""
    year: str = ""
    subdistrict: str = ""
    progress: str = ""
    sellable: str = ""
    connectivity: str = ""
    lcd_presence: str = ""
    sales_package_ids: str = ""
    building_restriction_ids: str = ""
    lat: str = ""
    lng: str = ""
    radius: str = ""
    poi_id: str = ""
    polygon: str = ""
    min_lat: str = ""
    max_lat: str = ""
    min_lng: str = ""
    max_lng: str = ""


@dataclass
class ExportMappingRequest:
    """Export of explicitly chosen buildings."""

    ids: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExportMappingRequest:
        return cls(ids=[int(item) for item in data.get("ids") or []])


@dataclass
class MapCenter:
    """A latitude/longitude pair."""

    lat: float = 0.0
    lng: float = 0.0

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> MapCenter:
        return cls(lat=float(data.get("lat") or 0.0), lng=float(data.get("lng") or 0.0))


def _strings(data: Mapping[str, Any], key: str) -> list[str]:
    return [str(item) for item in data.get(key) or []]


def _ints(data: Mapping[str, Any], key: str) -> list[int]:
    return [int(item) for item in data.get(key) or []]


def _optional_float(data: Mapping[str, Any], key: str) -> float | None:
    value = data.get(key)
    return None if value is None else float(value)


@dataclass
class ExportMappingFilters:
    """Map filters as sent with an export request."""

    district_subdistrict: list[str] = field(default_factory=list)
    building_type: list[str] = field(default_factory=list)
    building_grade: list[str] = field(default_factory=list)
    progress: list[str] = field(default_factory=list)
    lcd_presence: list[str] = field(default_factory=list)
    sellable: list[str] = field(default_factory=list)
    connectivity: list[str] = field(default_factory=list)
    year: tuple[int, int] = (0, 0)
    sales_package_ids: list[int] = field(default_factory=list)
    building_restriction_ids: list[int] = field(default_factory=list)
    lat: float | None = None
    lng: float | None = None
    radius: float | None = None  # kilometres
    poi_id: int | None = None
    polygon: list[MapCenter] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExportMappingFilters:
        raw_year = [int(item) for item in (data.get("year") or [])[:2]]
        raw_year += [0] * (2 - len(raw_year))
        poi_id = data.get("poi_id")
        return cls(
            district_subdistrict=_strings(data, "district_subdistrict"),
            building_type=_strings(data, "building_type"),
            building_grade=_strings(data, "building_grade"),
            progress=_strings(data, "progress"),
            lcd_presence=_strings(data, "lcd_presence"),
            sellable=_strings(data, "sellable"),
            connectivity=_strings(data, "connectivity"),
            year=(raw_year[0], raw_year[1]),
            sales_package_ids=_ints(data, "sales_package_ids"),
            building_restriction_ids=_ints(data, "building_restriction_ids"),
            lat=_optional_float(data, "lat"),
            lng=_optional_float(data, "lng"),
            radius=_optional_float(data, "radius"),
            poi_id=None if poi_id is None else int(poi_id),
            polygon=[MapCenter._from_dict(item) for item in data.get("polygon") or []],
        )


@dataclass
class ExportMappingByFilterRequest:
    """Export of every building matching the filters; bounds are ignored."""

    filters: ExportMappingFilters = field(default_factory=ExportMappingFilters)
    map_center: MapCenter | None = None
    bounds: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExportMappingByFilterRequest:
        center = data.get("map_center")
        return cls(
            filters=ExportMappingFilters.from_dict(data.get("filters") or {}),
            map_center=None if center is None else MapCenter._from_dict(center),
            bounds=data.get("bounds"),
        )


def _polygon_json(points: list[MapCenter]) -> str:
    if any(not math.isfinite(p.lat) or not math.isfinite(p.lng) for p in points):
        return ""
    return (
        "["
        + ",".join(
            f'{{"lat":{_json_float(p.lat)},"lng":{_json_float(p.lng)}}}' for p in points
        )
        + "]"
    )


def build_mapping_request_from_export_body(
    body: ExportMappingByFilterRequest,
) -> MappingBuildingRequest:
    """Turn an export body into map filters; bounds are never set."""
    request = MappingBuildingRequest()
    filters = body.filters

    joined = (
        ("district_subdistrict", "subdistrict"),
        ("building_type", "building_type"),
        ("building_grade", "building_grade"),
        ("progress", "progress"),
        ("sellable", "sellable"),
        ("connectivity", "connectivity"),
        ("lcd_presence", "lcd_presence"),
    )
    for source, target in joined:
        values = getattr(filters, source)
        if values:
            setattr(request, target, ",".join(values))

    low, high = filters.year
    if low != 0 or high != 0:
        request.year = f"{low},{high}"
    if filters.sales_package_ids:
        request.sales_package_ids = ",".join(map(str, filters.sales_package_ids))
    if filters.building_restriction_ids:
        request.building_restriction_ids = ",".join(
            map(str, filters.building_restriction_ids)
        )

    if filters.lat is not None:
        request.lat = _format_float(filters.lat)
    elif body.map_center is not None:
        request.lat = _format_float(body.map_center.lat)
    if filters.lng is not None:
        request.lng = _format_float(filters.lng)
    elif body.map_center is not None:
        request.lng = _format_float(body.map_center.lng)

    if filters.radius is not None:
        request.radius = f"{filters.radius * 1000:.0f}"
    if filters.poi_id is not None:
        request.poi_id = str(filters.poi_id)
    if len(filters.polygon) >= 3:
        request.polygon = _polygon_json(filters.polygon)
    return request