"""Request and response shapes for auth, dashboard, POIs, restrictions, sales packages and polygons."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

from tmn.web.query import PagedRequest


def _require(value: Any, name: str) -> None:
    """Fail when a required value is empty or zero."""
    if not value:
        raise ValueError(f"{name} is required")


def _require_items(items: Sequence[Any], name: str, minimum: int) -> None:
    """Fail when a required list is missing or shorter than ``minimum``."""
    if not items:
        raise ValueError(f"{name} is required")
    if len(items) < minimum:
        raise ValueError(f"{name} must contain at least {minimum} items")


def _ids(data: Mapping[str, Any], key: str) -> list[int]:
    return [int(item) for item in data.get(key) or []]


# --- auth ---------------------------------------------------------------


@dataclass
class LoginRequest:
    """Credentials posted to the login endpoint."""

    username: str = ""
    password: str = ""
    user_id: int = 0

    def validate(self) -> None:
        """Raise ValueError when username or password is missing."""
        _require(self.username, "username")
        _require(self.password, "password")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LoginRequest:
        return cls(
            username=str(data.get("username", "")),
            password=str(data.get("password", "")),
        )


@dataclass
class UserResponse:
    """The public view of a logged-in user."""

    id: int
    username: str
    name: str
    role: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class LoginResponse:
    """Returned after a successful login."""

    user: UserResponse

    def to_dict(self) -> dict[str, Any]:
        return {"user": self.user.to_dict()}


# --- dashboard ----------------------------------------------------------


@dataclass
class StatsSummary:
    """A total count and its per-status breakdown."""

    total: int = 0
    by_status: dict[str, int] = field(default_factory=dict)


@dataclass
class PersonTypeStat:
    """Building-type counts for one person."""

    person: str
    by_type: dict[str, int] = field(default_factory=dict)


@dataclass
class PersonStatusStat:
    """Workflow-state counts for one person."""

    person: str
    by_status: dict[str, int] = field(default_factory=dict)


@dataclass
class DashboardReport:
    """The report shown for a single resource tab."""

    stats: StatsSummary = field(default_factory=StatsSummary)
    by_person_type: list[PersonTypeStat] = field(default_factory=list)
    by_person_status: list[PersonStatusStat] = field(default_factory=list)
    pics: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "stats": asdict(self.stats),
            "by_person_building_type": [asdict(item) for item in self.by_person_type],
            "by_person_status": [asdict(item) for item in self.by_person_status],
            "pics": list(self.pics),
        }


# --- points of interest -------------------------------------------------


@dataclass
class POIPointRequest:
    """One place belonging to a point-of-interest group."""

    place_name: str = ""
    address: str = ""
    latitude: float = 0.0
    longitude: float = 0.0


def _poi_point(data: Mapping[str, Any]) -> POIPointRequest:
    return POIPointRequest(
        place_name=str(data.get("place_name", "")),
        address=str(data.get("address", "")),
        latitude=float(data.get("latitude", 0.0)),
        longitude=float(data.get("longitude", 0.0)),
    )


@dataclass
class CreatePOIRequest:
    """Body for creating a point-of-interest group."""

    name: str = ""
    color: str = ""
    points: list[POIPointRequest] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError when a field or any point is incomplete."""
        _require(self.name, "name")
        _require(self.color, "color")
        _require_items(self.points, "points", 1)
        for number, point in enumerate(self.points, start=1):
            for attribute in ("place_name", "address", "latitude", "longitude"):
                _require(getattr(point, attribute), f"points[{number}].{attribute}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CreatePOIRequest:
        return cls(
            name=str(data.get("name", "")),
            color=str(data.get("color", "")),
            points=[_poi_point(item) for item in data.get("points") or []],
        )


class UpdatePOIRequest(CreatePOIRequest):
    """Body for replacing a point-of-interest group."""


class POIRequestFindAll(PagedRequest):
    """Paging and ordering for listing point-of-interest groups."""


@dataclass
class POIPointResponse:
    """A stored place of a point-of-interest group."""

    id: int
    place_name: str
    address: str
    latitude: float
    longitude: float
    created_at: str = ""


@dataclass
class POIResponse:
    """A stored point-of-interest group with its places."""

    id: int
    name: str
    color: str
    points: list[POIPointResponse] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# --- building lists (restrictions and sales packages) -------------------


@dataclass
class BuildingRefResponse:
    """A short reference to a building."""

    id: int
    name: str


@dataclass
class CreateBuildingRestrictionRequest:
    """Body for creating a named set of restricted buildings."""

    name: str = ""
    building_ids: list[int] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError when the name or building list is missing."""
        _require(self.name, "name")
        _require_items(self.building_ids, "building_ids", 1)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CreateBuildingRestrictionRequest:
        return cls(name=str(data.get("name", "")), building_ids=_ids(data, "building_ids"))


class UpdateBuildingRestrictionRequest(CreateBuildingRestrictionRequest):
    """Body for replacing a building restriction."""


class BuildingRestrictionRequestFindAll(PagedRequest):
    """Paging and ordering for listing building restrictions."""


@dataclass
class BuildingRestrictionResponse:
    """A stored building restriction."""

    id: int
    name: str
    buildings: list[BuildingRefResponse] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CreateSalesPackageRequest:
    """Body for creating a sales package of buildings."""

    name: str = ""
    building_ids: list[int] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError when the name or building list is missing."""
        _require(self.name, "name")
        _require_items(self.building_ids, "building_ids", 1)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CreateSalesPackageRequest:
        return cls(name=str(data.get("name", "")), building_ids=_ids(data, "building_ids"))


class UpdateSalesPackageRequest(CreateSalesPackageRequest):
    """Body for replacing a sales package."""


class SalesPackageRequestFindAll(PagedRequest):
    """Paging and ordering for listing sales packages."""


@dataclass
class SalesPackageResponse:
    """A stored sales package."""

    id: int
    name: str
    buildings: list[BuildingRefResponse] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# --- saved polygons -----------------------------------------------------


@dataclass
class SavedPolygonPointRequest:
    """One vertex of a polygon to save."""

    lat: float = 0.0
    lng: float = 0.0


@dataclass
class CreateSavedPolygonRequest:
    """Body for saving a named polygon."""

    name: str = ""
    points: list[SavedPolygonPointRequest] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError when the name is missing or the polygon is incomplete."""
        _require(self.name, "name")
        _require_items(self.points, "points", 3)
        for number, point in enumerate(self.points, start=1):
            _require(point.lat, f"points[{number}].lat")
            _require(point.lng, f"points[{number}].lng")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CreateSavedPolygonRequest:
        return cls(
            name=str(data.get("name", "")),
            points=[
                SavedPolygonPointRequest(
                    lat=float(item.get("lat", 0.0)), lng=float(item.get("lng", 0.0))
                )
                for item in data.get("points") or []
            ],
        )


class UpdateSavedPolygonRequest(CreateSavedPolygonRequest):
    """Body for replacing a saved polygon."""


class SavedPolygonRequestFindAll(PagedRequest):
    """Paging and ordering for listing saved polygons."""


@dataclass
class SavedPolygonPointResponse:
    """A stored polygon vertex and its position in the ring."""

    ord: int
    lat: float
    lng: float


@dataclass
class SavedPolygonResponse:
    """A stored polygon with its ordered vertices."""

    id: int
    name: str
    points: list[SavedPolygonPointResponse] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)