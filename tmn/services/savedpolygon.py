"""Saved polygons: named map areas stored as ordered vertex rings."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Protocol

from tmn.services.common import BadRequestError, NotFoundError, RecordNotFoundError, transaction
from tmn.web.schemas import (
    CreateSavedPolygonRequest,
    SavedPolygonPointRequest,
    SavedPolygonPointResponse,
    SavedPolygonRequestFindAll,
    SavedPolygonResponse,
    UpdateSavedPolygonRequest,
)

MIN_POINTS = 3


@dataclass
class SavedPolygonPoint:
    """A stored vertex and its position in the ring."""

    ord: int
    lat: float
    lng: float


@dataclass
class SavedPolygon:
    """A stored polygon with its ordered vertices."""

    id: int = 0
    name: str = ""
    points: list[SavedPolygonPoint] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""


class SavedPolygonRepository(Protocol):
    def create(
        self, tx: Any, polygon: SavedPolygon, points: list[SavedPolygonPoint]
    ) -> SavedPolygon: ...

    def find_all(
        self, tx: Any, take: int, skip: int, order_by: str, order_direction: str
    ) -> list[SavedPolygon]: ...

    def count_all(self, tx: Any) -> int: ...

    def find_by_id(self, tx: Any, id: int) -> SavedPolygon: ...

    def update(
        self, tx: Any, polygon: SavedPolygon, points: list[SavedPolygonPoint]
    ) -> SavedPolygon: ...

    def delete(self, tx: Any, id: int) -> None: ...


def _validate_points(points: Sequence[SavedPolygonPointRequest]) -> None:
    if len(points) < MIN_POINTS:
        raise BadRequestError(f"polygon must have at least {MIN_POINTS} points")
    for number, point in enumerate(points, start=1):
        if not -90 <= point.lat <= 90:
            raise BadRequestError(f"invalid lat at point {number}")
        if not -180 <= point.lng <= 180:
            raise BadRequestError(f"invalid lng at point {number}")


def _to_points(points: Sequence[SavedPolygonPointRequest]) -> list[SavedPolygonPoint]:
    return [
        SavedPolygonPoint(ord=index, lat=point.lat, lng=point.lng)
        for index, point in enumerate(points)
    ]


def _to_response(polygon: SavedPolygon) -> SavedPolygonResponse:
    return SavedPolygonResponse(
        id=polygon.id,
        name=polygon.name,
        points=[
            SavedPolygonPointResponse(ord=point.ord, lat=point.lat, lng=point.lng)
            for point in polygon.points
        ],
        created_at=polygon.created_at,
        updated_at=polygon.updated_at,
    )


class SavedPolygonService:
    """Create, list, read, replace and delete saved polygons, each in one transaction."""

    def __init__(self, db: Any, polygons: SavedPolygonRepository) -> None:
        self.db = db
        self.polygons = polygons

    def _existing(self, tx: Any, id: int) -> SavedPolygon:
        try:
            return self.polygons.find_by_id(tx, id)
        except RecordNotFoundError:
            raise NotFoundError("saved polygon not found") from None

    def create(self, request: CreateSavedPolygonRequest) -> SavedPolygonResponse:
        """Save a polygon; BadRequestError when its points are invalid."""
        with transaction(self.db) as tx:
            _validate_points(request.points)
            created = self.polygons.create(
                tx, SavedPolygon(name=request.name), _to_points(request.points)
            )
            return _to_response(created)

    def find_all(
        self, request: SavedPolygonRequestFindAll
    ) -> tuple[list[SavedPolygonResponse], int]:
        """Return one page of polygons and the total number of polygons."""
        with transaction(self.db) as tx:
            found = self.polygons.find_all(
                tx, request.take, request.skip, request.order_by, request.order_direction
            )
            total = self.polygons.count_all(tx)
            return [_to_response(polygon) for polygon in found], total

    def find_by_id(self, id: int) -> SavedPolygonResponse:
        """Return one polygon; NotFoundError when it does not exist."""
        with transaction(self.db) as tx:
            return _to_response(self._existing(tx, id))

    def update(self, request: UpdateSavedPolygonRequest, id: int) -> SavedPolygonResponse:
        """Rename a polygon and replace its points; points are checked first."""
        with transaction(self.db) as tx:
            _validate_points(request.points)
            existing = self._existing(tx, id)
            updated = self.polygons.update(
                tx, replace(existing, name=request.name), _to_points(request.points)
            )
            return _to_response(updated)

    def delete(self, id: int) -> None:
        """Delete a polygon; NotFoundError when it does not exist."""
        with transaction(self.db) as tx:
            self._existing(tx, id)
            self.polygons.delete(tx, id)