from types import SimpleNamespace

from tmn.web.building_response import (
    BuildingDropdownResponse,
    BuildingImageResponse,
    BuildingResponse,
    LCDPresenceCitySummary,
    LCDPresenceSummaryResponse,
    LCDPresenceTotals,
    MappingBuildingImageResponse,
    MappingBuildingResponse,
    MappingBuildingsResponse,
    building_to_response,
    buildings_to_responses,
)


def _building(**extra):
    values = dict(
        id=10,
        name="Tower A",
        building_type="Office",
        grade_resource="A",
        latitude=-6.2,
        longitude=106.8,
        competitor_location=True,
        images=[SimpleNamespace(name="front", path="/img/front.jpg")],
    )
    values.update(extra)
    return SimpleNamespace(**values)


def test_building_to_response_copies_fields():
    response = building_to_response(_building(citytown="Jakarta"))
    assert response.id == 10
    assert response.name == "Tower A"
    assert response.building_type == "Office"
    assert response.grade_resource == "A"
    assert response.latitude == -6.2
    assert response.longitude == 106.8
    assert response.competitor_location is True
    assert response.citytown == "Jakarta"
    assert response.images == [BuildingImageResponse(name="front", path="/img/front.jpg")]


def test_building_to_response_defaults_missing_fields():
    response = building_to_response(SimpleNamespace(id=3, name="Solo"))
    assert response == BuildingResponse(id=3, name="Solo")
    assert response.images == []


def test_building_to_response_accepts_mapping():
    record = {"id": 4, "name": "Mapped", "images": [{"name": "side", "path": "/img/side.jpg"}]}
    response = building_to_response(record)
    assert response.id == 4
    assert response.images[0].path == "/img/side.jpg"


def test_buildings_to_responses_none_is_empty():
    assert buildings_to_responses(None) == []


def test_buildings_to_responses_keeps_order():
    responses = buildings_to_responses([_building(id=1), _building(id=2)])
    assert [response.id for response in responses] == [1, 2]


def test_building_response_to_dict_keys():
    data = building_to_response(_building()).to_dict()
    assert data["lcd_presence_status"] == ""
    assert data["images"] == [{"name": "front", "path": "/img/front.jpg"}]
    assert {"external_building_id", "iris_code", "synced_at", "created_at", "updated_at"} <= set(data)


def test_dropdown_to_dict():
    dropdown = BuildingDropdownResponse(id=10, name="Tower A", building_type="Office")
    assert dropdown.to_dict() == {"id": 10, "name": "Tower A", "building_type": "Office"}


def test_lcd_presence_summary_to_dict():
    summary = LCDPresenceSummaryResponse(
        data=[LCDPresenceCitySummary(citytown="Jakarta", total=2, by_status={"yes": 2}, percentages={"yes": 100.0})],
        totals=LCDPresenceTotals(total=2, by_status={"yes": 2}, percentages={"yes": 100.0}),
    )
    data = summary.to_dict()
    assert data["data"] == [
        {"citytown": "Jakarta", "total": 2, "by_status": {"yes": 2}, "percentages": {"yes": 100.0}}
    ]
    assert data["totals"] == {"total": 2, "by_status": {"yes": 2}, "percentages": {"yes": 100.0}}


def test_empty_lcd_presence_summary():
    data = LCDPresenceSummaryResponse().to_dict()
    assert data == {"data": [], "totals": {"total": 0, "by_status": {}, "percentages": {}}}


def test_mapping_buildings_to_dict():
    building = MappingBuildingResponse(
        id=7,
        name="Tower B",
        address="Main St",
        images=[MappingBuildingImageResponse(name="top", path="/img/top.jpg")],
    )
    data = MappingBuildingsResponse(data=[building], totals={"Office": 1}).to_dict()
    assert data["totals"] == {"Office": 1}
    assert data["data"][0]["address"] == "Main St"
    assert data["data"][0]["images"] == [{"name": "top", "path": "/img/top.jpg"}]