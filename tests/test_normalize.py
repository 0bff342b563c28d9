import pytest

from hullify.schemas import VesselPayload
from hullify.services.normalize import normalize


def test_empty_payload_gets_neutral_defaults(today):
    p = normalize({}, today=today)
    assert p.length == 20
    assert p.year == 2005
    assert p.age == today.year - 2005
    assert p.condition is None and p.runs is None and p.trailer is None
    assert p.engine_hours == 0
    assert p.out_of_water_year_plus is False
    assert not p.year_specified and not p.length_specified


def test_none_payload_is_accepted(today):
    assert normalize(None, today=today) == normalize({}, today=today)


@pytest.mark.parametrize("length,expected", [("100", 60), (2, 8), ("24", 24), (33.5, 33.5)])
def test_length_is_clamped(length, expected, today):
    assert normalize({"length": length}, today=today).length == expected


@pytest.mark.parametrize("year,expected", [(1900, 1950), (2100, 2027), ("2015", 2015), (2015.6, 2016)])
def test_year_is_clamped_to_next_model_year(year, expected, today):
    assert normalize({"year": year}, today=today).year == expected


def test_unparseable_numbers_fall_back_to_defaults(today):
    p = normalize({"length": "long", "year": "old", "engineHours": "lots"}, today=today)
    assert (p.length, p.year, p.engine_hours) == (20, 2005, 0)
    assert not p.length_specified


def test_enumerations_match_case_insensitively(today):
    p = normalize({"condition": "needs  work", "runs": "STARTS BUT STALLS", "titleStatus": "bill of sale only"}, today=today)
    assert p.condition == "Needs Work"
    assert p.runs == "Starts but stalls"
    assert p.title_status == "Bill of Sale only"


def test_unknown_enumerations_are_neutral(today):
    p = normalize({"condition": "Broken", "trailer": "maybe"}, today=today)
    assert p.condition is None
    assert p.trailer is None


@pytest.mark.parametrize("raw,expected", [(True, True), ("true", True), ("Yes", True), (1, True), ("no", False), (None, False), (0, False)])
def test_out_of_water_flag(raw, expected, today):
    assert normalize({"outOfWaterYearPlus": raw}, today=today).out_of_water_year_plus is expected


def test_aliases_and_field_names_both_work(today):
    assert normalize({"engineHours": "150"}, today=today).engine_hours == 150
    assert normalize({"engine_hours": 150}, today=today).engine_hours == 150
    assert normalize({"engineHours": -40}, today=today).engine_hours == 0


def test_wrong_shaped_field_is_dropped_not_fatal(today):
    p = normalize({"make": {"brand": "Bayliner"}, "length": 24}, today=today)
    assert p.make is None
    assert p.length == 24


def test_hull_material_is_lowercased(today):
    assert normalize({"hullMaterial": " Wood "}, today=today).hull_material == "wood"


def test_model_instance_passes_through(today):
    payload = VesselPayload(make="Boston Whaler", model="Montauk 170", year=2018)
    p = normalize(payload, today=today)
    assert p.make == "Boston Whaler"
    assert p.year == 2018 and p.year_specified


def test_non_text_enumeration_is_neutral(today):
    p = normalize({"condition": True, "runs": ["Yes"], "length": 24}, today=today)
    assert p.condition is None
    assert p.runs is None
    assert p.length == 24
