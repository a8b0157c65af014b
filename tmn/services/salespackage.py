"""Sales packages: named groups of buildings offered together."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Protocol

from tmn.services.common import BadRequestError, NotFoundError, RecordNotFoundError, transaction
from tmn.web.schemas import (
    BuildingRefResponse,
    CreateSalesPackageRequest,
    SalesPackageRequestFindAll,
    SalesPackageResponse,
    UpdateSalesPackageRequest,
)


@dataclass
class BuildingRef:
    """A short reference to a building linked to a package."""

    id: int
    name: str


@dataclass
class SalesPackage:
    """A stored sales package and the buildings it holds."""

    id: int = 0
    name: str = ""
    buildings: list[BuildingRef] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""


class SalesPackageRepository(Protocol):
    def create(self, tx: Any, package: SalesPackage, building_ids: list[int]) -> SalesPackage: ...

    def find_all(
        self, tx: Any, take: int, skip: int, order_by: str, order_direction: str
    ) -> list[SalesPackage]: ...

    def count_all(self, tx: Any) -> int: ...

    def find_by_id(self, tx: Any, id: int) -> SalesPackage: ...

    def update(self, tx: Any, package: SalesPackage, building_ids: list[int]) -> SalesPackage: ...

    def delete(self, tx: Any, id: int) -> None: ...


class BuildingRepository(Protocol):
    def find_by_id(self, tx: Any, id: int) -> Any: ...


def _to_response(package: SalesPackage) -> SalesPackageResponse:
    return SalesPackageResponse(
        id=package.id,
        name=package.name,
        buildings=[BuildingRefResponse(id=ref.id, name=ref.name) for ref in package.buildings],
        created_at=package.created_at,
        updated_at=package.updated_at,
    )


class SalesPackageService:
    """Create, list, read, replace and delete sales packages, each in one transaction."""

    def __init__(
        self,
        db: Any,
        packages: SalesPackageRepository,
        buildings: BuildingRepository,
    ) -> None:
        self.db = db
        self.packages = packages
        self.buildings = buildings

    def _check_buildings(self, tx: Any, building_ids: list[int]) -> None:
        for building_id in building_ids:
            try:
                self.buildings.find_by_id(tx, building_id)
            except RecordNotFoundError:
                raise BadRequestError("building not found") from None

    def _existing(self, tx: Any, id: int) -> SalesPackage:
        try:
            return self.packages.find_by_id(tx, id)
        except RecordNotFoundError:
            raise NotFoundError("sales package not found") from None

    def create(self, request: CreateSalesPackageRequest) -> SalesPackageResponse:
        """Create a package linked to the requested buildings."""
        with transaction(self.db) as tx:
            self._check_buildings(tx, request.building_ids)
            created = self.packages.create(
                tx, SalesPackage(name=request.name), request.building_ids
            )
            return _to_response(created)

    def find_all(
        self, request: SalesPackageRequestFindAll
    ) -> tuple[list[SalesPackageResponse], int]:
        """Return one page of packages and the total number of packages."""
        with transaction(self.db) as tx:
            found = self.packages.find_all(
                tx, request.take, request.skip, request.order_by, request.order_direction
            )
            total = self.packages.count_all(tx)
            return [_to_response(package) for package in found], total

    def find_by_id(self, id: int) -> SalesPackageResponse:
        """Return one package; NotFoundError when it does not exist."""
        with transaction(self.db) as tx:
            return _to_response(self._existing(tx, id))

    def update(self, request: UpdateSalesPackageRequest, id: int) -> SalesPackageResponse:
        """Rename a package and replace its building links."""
        with transaction(self.db) as tx:
            existing = self._existing(tx, id)
            self._check_buildings(tx, request.building_ids)
            updated = self.packages.update(
                tx, replace(existing, name=request.name), request.building_ids
            )
            return _to_response(updated)

    def delete(self, id: int) -> None:
        """Delete a package; NotFoundError when it does not exist."""
        with transaction(self.db) as tx:
            self._existing(tx, id)
            self.packages.delete(tx, id)