import json

import pytest

from tmn.web.building_request import (
    BuildingRequestFindAll,
    ExportMappingByFilterRequest,
    ExportMappingFilters,
    ExportMappingRequest,
    MapCenter,
    MappingBuildingRequest,
    UpdateBuildingRequest,
    build_mapping_request_from_export_body,
)
from tmn.web.query import (
    set_filters,
    set_mapping_filters,
    set_order,
    set_pagination,
    set_search,
)


@pytest.mark.parametrize("sellable", ["", "sell", "not_sell"])
@pytest.mark.parametrize("connectivity", ["", "online", "manual", "not_yet_checked"])
def test_update_building_accepts_known_values(sellable, connectivity):
    request = UpdateBuildingRequest(sellable=sellable, connectivity=connectivity)
    request.validate()
    assert (request.sellable, request.connectivity) == (sellable, connectivity)


def test_update_building_rejects_unknown_sellable():
    with pytest.raises(ValueError, match="sellable"):
        UpdateBuildingRequest(sellable="maybe").validate()


def test_update_building_rejects_unknown_connectivity():
    with pytest.raises(ValueError, match="connectivity"):
        UpdateBuildingRequest(connectivity="offline").validate()


def test_find_all_defaults():
    request = BuildingRequestFindAll()
    assert request.order_by == "created_at"
    assert request.order_direction == "DESC"
    assert request.competitor_location is None
    assert request.search == ""


def test_find_all_from_query():
    request = BuildingRequestFindAll()
    query = (
        "take=5&skip=15&orderBy=name&orderDirection=asc&search=tower"
        "&sellable=sell&competitor_location=true&province=DKI&building_type="
    )
    set_pagination(request, query)
    set_order(request, query)
    set_search(request, query)
    set_filters(request, query)
    assert (request.take, request.skip) == (5, 15)
    assert request.order_by == "name"
    assert request.order_direction == "ASC"
    assert request.search == "tower"
    assert request.sellable == "sell"
    assert request.competitor_location is True
    assert request.province == "DKI"
    assert request.building_type == ""


def test_mapping_request_from_query_prefers_bracket_form():
    request = MappingBuildingRequest()
    set_mapping_filters(
        request, "filter[building_type]=Office,Mall&building_type=Hotel&min_lat=-6.5"
    )
    assert request.building_type == "Office,Mall"
    assert request.min_lat == "-6.5"
    assert request.max_lat == ""


def test_export_mapping_request_from_dict():
    assert ExportMappingRequest.from_dict({"ids": [3, 1, 2]}).ids == [3, 1, 2]
    assert ExportMappingRequest.from_dict({"ids": None}).ids == []


def test_filters_from_dict_defaults():
    filters = ExportMappingFilters.from_dict({})
    assert filters.year == (0, 0)
    assert filters.lat is None
    assert filters.polygon == []
    assert filters.sales_package_ids == []


def test_empty_body_gives_empty_request():
    body = ExportMappingByFilterRequest.from_dict({"filters": {}, "bounds": None})
    assert build_mapping_request_from_export_body(body) == MappingBuildingRequest()


def test_lists_are_joined_with_commas():
    body = ExportMappingByFilterRequest.from_dict(
        {
            "filters": {
                "district_subdistrict": ["Menteng", "Gambir"],
                "building_type": ["Office"],
                "building_grade": ["A", "B"],
                "progress": ["done"],
                "lcd_presence": ["present", "absent"],
                "sellable": ["sell"],
                "connectivity": ["online", "manual"],
                "sales_package_ids": [1, 2, 3],
                "building_restriction_ids": [7],
                "poi_id": 42,
            }
        }
    )
    request = build_mapping_request_from_export_body(body)
    assert request.subdistrict == "Menteng,Gambir"
    assert request.building_type == "Office"
    assert request.building_grade == "A,B"
    assert request.progress == "done"
    assert request.lcd_presence == "present,absent"
    assert request.sellable == "sell"
    assert request.connectivity == "online,manual"
    assert request.sales_package_ids == "1,2,3"
    assert request.building_restriction_ids == "7"
    assert request.poi_id == "42"


def test_year_set_when_either_bound_nonzero():
    body = ExportMappingByFilterRequest(filters=ExportMappingFilters(year=(2000, 2020)))
    assert build_mapping_request_from_export_body(body).year == "2000,2020"
    body = ExportMappingByFilterRequest(filters=ExportMappingFilters(year=(0, 2020)))
    assert build_mapping_request_from_export_body(body).year == "0,2020"


def test_filter_coordinates_win_over_map_center():
    body = ExportMappingByFilterRequest(
        filters=ExportMappingFilters(lat=-6.2, lng=106.8),
        map_center=MapCenter(lat=1.5, lng=2.5),
    )
    request = build_mapping_request_from_export_body(body)
    assert (request.lat, request.lng) == ("-6.2", "106.8")


def test_map_center_used_when_filters_lack_coordinates():
    body = ExportMappingByFilterRequest.from_dict(
        {"filters": {}, "map_center": {"lat": -6.25, "lng": 106.75}}
    )
    request = build_mapping_request_from_export_body(body)
    assert (request.lat, request.lng) == ("-6.25", "106.75")


def test_whole_coordinates_have_no_fraction():
    body = ExportMappingByFilterRequest(filters=ExportMappingFilters(lat=-6.0, lng=106.0))
    request = build_mapping_request_from_export_body(body)
    assert (request.lat, request.lng) == ("-6", "106")


def test_radius_kilometres_become_metres():
    body = ExportMappingByFilterRequest(filters=ExportMappingFilters(radius=1.5))
    assert build_mapping_request_from_export_body(body).radius == "1500"


def test_polygon_needs_three_points():
    two = [MapCenter(-6.1, 106.7), MapCenter(-6.2, 106.8)]
    body = ExportMappingByFilterRequest(filters=ExportMappingFilters(polygon=two))
    assert build_mapping_request_from_export_body(body).polygon == ""


def test_polygon_is_compact_json():
    points = [
        {"lat": -6.1, "lng": 106.7},
        {"lat": -6.2, "lng": 106.8},
        {"lat": -6.3, "lng": 106.9},
    ]
    body = ExportMappingByFilterRequest.from_dict({"filters": {"polygon": points}})
    polygon = build_mapping_request_from_export_body(body).polygon
    assert " " not in polygon
    assert json.loads(polygon) == points


def test_bounds_never_set():
    body = ExportMappingByFilterRequest.from_dict(
        {"filters": {"building_type": ["Office"]}, "bounds": {"north": 1}}
    )
    request = build_mapping_request_from_export_body(body)
    assert body.bounds == {"north": 1}
    assert (request.min_lat, request.max_lat, request.min_lng, request.max_lng) == (
        "",
        "",
        "",
        "",
    )