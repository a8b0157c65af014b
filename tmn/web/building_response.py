"""Response shapes for buildings, map views and LCD presence summaries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field, fields
from typing import Any


def _read(source: Any, name: str, default: Any) -> Any:
    if isinstance(source, Mapping):
        return source.get(name, default)
    return getattr(source, name, default)


@dataclass
class BuildingImageResponse:
    """An image attached to a building."""

    name: str = ""
    path: str = ""


@dataclass
class BuildingResponse:
    """The full public view of a building."""

    id: int = 0
    external_building_id: str = ""
    iris_code: str = ""
    name: str = ""
    project_name: str = ""
    audience: int = 0
    impression: int = 0
    cbd_area: str = ""
    building_status: str = ""
    competitor_location: bool = False
    competitor_exclusive: bool = False
    competitor_presence: bool = False
    sellable: str = ""
    connectivity: str = ""
    resource_type: str = ""
    subdistrict: str = ""
    citytown: str = ""
    province: str = ""
    grade_resource: str = ""
    building_type: str = ""
    completion_year: int = 0
    latitude: float = 0.0
    longitude: float = 0.0
    lcd_presence_status: str = ""
    images: list[BuildingImageResponse] = field(default_factory=list)
    synced_at: str = ""
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class BuildingDropdownResponse:
    """A building as offered in a selection list."""

    id: int
    name: str
    building_type: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def building_to_response(building: Any) -> BuildingResponse:
    """Build a response from a building record (an object or a mapping)."""
    values = {
        spec.name: _read(building, spec.name, spec.default)
        for spec in fields(BuildingResponse)
        if spec.name != "images"
    }
    images = [
        BuildingImageResponse(name=_read(image, "name", ""), path=_read(image, "path", ""))
        for image in _read(building, "images", None) or []
    ]
    return BuildingResponse(images=images, **values)


def buildings_to_responses(buildings: Iterable[Any] | None) -> list[BuildingResponse]:
    """Convert building records; ``None`` gives an empty list."""
    if buildings is None:
        return []
    return [building_to_response(building) for building in buildings]


@dataclass
class LCDPresenceCitySummary:
    """LCD presence counts and percentages for one city."""

    citytown: str
    total: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    percentages: dict[str, float] = field(default_factory=dict)


@dataclass
class LCDPresenceTotals:
    """LCD presence counts and percentages across all cities."""

    total: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    percentages: dict[str, float] = field(default_factory=dict)


@dataclass
class LCDPresenceSummaryResponse:
    """Per-city LCD presence summaries with grand totals."""

    data: list[LCDPresenceCitySummary] = field(default_factory=list)
    totals: LCDPresenceTotals = field(default_factory=LCDPresenceTotals)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class MappingBuildingImageResponse:
    """An image of a building shown on the map."""

    name: str = ""
    path: str = ""


@dataclass
class MappingBuildingResponse:
    """A building as plotted on the map."""

    id: int = 0
    name: str = ""
    building_type: str = ""
    grade_resource: str = ""
    completion_year: int = 0
    subdistrict: str = ""
    citytown: str = ""
    province: str = ""
    address: str = ""
    building_status: str = ""
    sellable: str = ""
    connectivity: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    lcd_presence_status: str = ""
    images: list[MappingBuildingImageResponse] = field(default_factory=list)


@dataclass
class MappingBuildingsResponse:
    """Map buildings with totals per building type."""

    data: list[MappingBuildingResponse] = field(default_factory=list)
    totals: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)