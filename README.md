# tmn

Building blocks for a building mapping backend: query-string parsing into
request objects, request and response schemas, and transactional services
for sales packages and saved polygons. It uses only the standard library.

## Install

```
pip install .
pip install ".[test]"   # with pytest
```

## Query strings (`tmn.web.query`)

`parse_query` accepts a query string (a leading `?` is allowed) or a
mapping, and returns a dict of value lists. The `set_*` functions accept
either form and set attributes on a request object.

```python
from tmn.web.query import parse_query, set_pagination, set_order
from tmn.web.schemas import SalesPackageRequestFindAll

query = parse_query("take=20&skip=40&orderBy=name&orderDirection=asc")
request = SalesPackageRequestFindAll()
set_pagination(request, query)
set_order(request, query)
# request.take == 20, request.skip == 40
# request.order_by == "name", request.order_direction == "ASC"
```

- `set_pagination`: without `take` and `skip` the request gets `10` and
  `0`; a value that is not an integer raises `ValueError`.
- `set_order`: sets `order_by` and `order_direction` when present.
  `PagedRequest` (the base of every find-all request) stores the direction
  upper-cased and falls back to `created_at` and `DESC`.
- `set_search`: sets `search` when it is non-empty.
- `set_filters`: sets the building list filters `building_status`,
  `sellable`, `connectivity`, `resource_type`, `cbd_area`, `subdistrict`,
  `citytown`, `province`, `grade_resource` and `building_type` when
  non-empty; `competitor_location` is set to a bool when it reads as one
  (`1`, `t`, `true`, `0`, `f`, `false`, ...), otherwise it is left alone.
- `set_mapping_filters`: sets the map filters, looking first for
  `filter[key]` and then for plain `key`. Both `district_subdistrict` and
  `subdistrict` set `subdistrict`; the latter wins when both are given.

`WebResponse(status, code, data, extras)` is the response envelope and
`Pagination(take, skip, total)` the paging block; both have `to_dict`.
`WebResponse.to_dict` converts nested objects that have `to_dict`, and
lists and mappings of them.

## Schemas

`tmn.web.schemas` holds the types for login, the dashboard report, POI
groups, building restrictions, sales packages and saved polygons. Create
requests have `from_dict` and `validate` (which raises `ValueError` for a
missing field, an empty list, or fewer than three polygon points); update
requests share them. Responses have `to_dict` with the JSON field names.

`tmn.web.building_response` holds `BuildingResponse`,
`BuildingDropdownResponse`, the LCD presence summaries and the mapping
responses. `building_to_response` builds a `BuildingResponse` from an
object or a mapping; `buildings_to_responses(None)` returns `[]`.

`tmn.web.building_request` holds `UpdateBuildingRequest` (its `validate`
accepts `sellable` in `sell`/`not_sell` and `connectivity` in
`online`/`manual`/`not_yet_checked`), `BuildingRequestFindAll`,
`MappingBuildingRequest` and the export bodies.
`build_mapping_request_from_export_body` turns an
`ExportMappingByFilterRequest` into a `MappingBuildingRequest`: lists
become comma-separated values, a non-zero `year` pair becomes `"min,max"`,
`lat`/`lng` fall back to `map_center`, the radius in kilometres becomes
whole metres, a polygon of at least three points becomes a JSON array, and
bounds are never set.

## Services

`SalesPackageService(db, packages, buildings)` in `tmn.services.salespackage`
and `SavedPolygonService(db, polygons)` in `tmn.services.savedpolygon` offer
`create`, `find_all` (returning `(responses, total)`), `find_by_id`,
`update` and `delete`.

Every call runs inside `tmn.services.common.transaction(db)`. `db` either
has `begin()` returning an object with `commit()` and `rollback()`, or has
`commit()` and `rollback()` itself. The transaction is committed on
success and rolled back when anything is raised.

Repositories are passed in and are expected to raise
`RecordNotFoundError` for a missing row. The services then raise:

- `NotFoundError("sales package not found")` or
  `NotFoundError("saved polygon not found")`;
- `BadRequestError("building not found")` when a sales package names an
  unknown building (on update, the package itself is looked up first);
- `BadRequestError("polygon must have at least 3 points")`,
  `BadRequestError("invalid lat at point N")` or
  `BadRequestError("invalid lng at point N")`, checked before the
  repository is consulted.

Errors of the same class with the same message compare equal.

## What it does not do

The package has no HTTP server or routing, no database access and no
repository implementations (only the interfaces the services call), no
login or password checking, and no services for buildings, POIs,
restrictions or the dashboard. The schemas for those are data shapes only.

## Tests

```
pytest
```