"""
Tests for the estimate session (estimate.py) and input schemas (schemas.py).

Tests:
1-5.   Rooms: defaults per unit system, edits, field validation, delete
6-10.  Openings: type defaults (feet and metric), overrides, removal
11-13. Settings: validation, results follow every change
14-16. Unit switching: rescale in place, no-op for same system, round trip
17-18. Worked example, empty estimate
19-23. Schema boundary checks
"""

import pytest
from pydantic import ValidationError

from backend.estimate import EstimateSession
from backend.schemas import (
    EstimateRequest, Opening, PaintSettings, Room, validate_dimension,
)


# ============================================================
# Rooms
# ============================================================

def test_add_room_imperial_defaults(session):
    room = session.add_room()
    assert room["name"] == "Room 1"
    assert (room["length"], room["width"], room["height"]) == (12, 10, 9)
    assert room["openings"] == []
    assert session.add_room("Hall")["name"] == "Hall"
    assert len(session.rooms) == 2


def test_add_room_metric_defaults():
    session = EstimateSession("metric")
    room = session.add_room()
    assert (room["length"], room["width"], room["height"]) == (4, 3, 2.7)


def test_update_room_rejects_bad_dimensions(session):
    """Invalid edits are flagged and the last valid value is kept."""
    room = session.add_room()
    errors = session.update_room(room["id"], length="abc", width="-5", height="0")
    assert errors == {
        "length": "Must be a positive number",
        "width": "Must be a positive number",
        "height": "Must be a positive number",
    }
    assert (room["length"], room["width"], room["height"]) == (12, 10, 9)

    errors = session.update_room(room["id"], length="15.5", name="Den")
    assert errors == {}
    assert room["length"] == 15.5
    assert room["name"] == "Den"
    # 2 * (15.5 + 10) * 9
    assert session.results()["totals"]["wallArea"] == pytest.approx(459)


def test_update_room_unknown_field_and_room(session):
    room = session.add_room()
    assert "colour" in session.update_room(room["id"], colour="teal")
    with pytest.raises(KeyError):
        session.update_room("missing", length=10)


def test_delete_room(session):
    first = session.add_room()
    second = session.add_room()
    session.delete_room(first["id"])
    assert [r["id"] for r in session.rooms] == [second["id"]]
    session.delete_room(second["id"])
    assert session.results() is None


# ============================================================
# Openings
# ============================================================

def test_add_opening_uses_type_defaults(session):
    room = session.add_room()
    window = session.add_opening(room["id"], "window")
    assert window["width"] == 4
    assert window["height"] == 3
    assert window["action"] == "subtract"
    assert window["quantity"] == 1
    assert window["customFaces"] is None

    door = session.add_opening(room["id"], "paintableDoor", quantity=2, customFaces=1)
    assert door["action"] == "add"
    assert door["quantity"] == 2
    assert door["customFaces"] == 1

    c = session.results()["rooms"][0]["calculations"]
    assert c["subtractArea"] == 12
    assert c["addArea"] == 42  # 3 x 7 x 2 doors x 1 face


def test_add_opening_metric_defaults_converted():
    session = EstimateSession("metric")
    room = session.add_room()
    opening = session.add_opening(room["id"], "slidingDoor")
    assert opening["width"] == pytest.approx(6 * 0.3048)
    assert opening["height"] == pytest.approx(7 * 0.3048)


def test_add_opening_action_override_and_bad_values(session):
    room = session.add_room()
    sliding = session.add_opening(room["id"], "slidingDoor", action="add", custom_faces=2)
    assert sliding["action"] == "add"
    assert sliding["customFaces"] == 2
    with pytest.raises(ValidationError):
        session.add_opening(room["id"], "window", width=-1)
    with pytest.raises(ValidationError):
        session.add_opening(room["id"], "trapdoor")
    assert len(room["openings"]) == 1

    removed = session.remove_opening(room["id"], 0)
    assert removed["type"] == "slidingDoor"
    assert room["openings"] == []


def test_remove_opening_bad_index_raises(session):
    room = session.add_room()
    session.add_opening(room["id"], "window")
    with pytest.raises(IndexError):
        session.remove_opening(room["id"], -1)
    with pytest.raises(IndexError):
        session.remove_opening(room["id"], 1)
    assert len(room["openings"]) == 1


def test_update_room_openings_metric_defaults():
    """Openings set through update_room get type defaults in metres too."""
    session = EstimateSession("metric")
    room = session.add_room()
    errors = session.update_room(room["id"], openings=[{"type": "window"}, {"type": "grill", "width": 1}])
    assert errors == {}
    window, grill = room["openings"]
    assert window["width"] == pytest.approx(4 * 0.3048)
    assert window["height"] == pytest.approx(3 * 0.3048)
    assert grill["width"] == 1
    assert session.results()["rooms"][0]["calculations"]["subtractArea"] == pytest.approx(12 * 0.3048 ** 2)


# ============================================================
# Settings
# ============================================================

def test_update_settings_validates(session):
    with pytest.raises(ValidationError):
        session.update_settings(coats=5)
    with pytest.raises(ValidationError):
        session.update_settings(wastage_percent=60)
    with pytest.raises(ValidationError):
        session.update_settings(paint_type="glitter")
    assert session.settings.coats == 2


def test_results_follow_every_change(example_session):
    assert example_session.results()["paint"]["rounded"] == 11

    example_session.update_settings(include_ceiling=False)
    result = example_session.results()
    assert result["totals"]["totalPaintableArea"] == 1123
    # 1123 / 350 * 2 * 1.1 = 7.06
    assert result["paint"]["rounded"] == 8

    example_session.update_settings(coats=3, paint_type="enamel")
    result = example_session.results()
    assert result["coverage"] == 400
    assert result["settings"]["coats"] == 3


def test_results_are_not_cached(session):
    room = session.add_room()
    before = session.results()
    session.update_room(room["id"], height=10)
    after = session.results()
    assert before["totals"]["wallArea"] == 396
    assert after["totals"]["wallArea"] == 440


# ============================================================
# Unit switching
# ============================================================

def test_switch_unit_system_rescales_in_place(example_session):
    example_session.switch_unit_system("metric")
    assert example_session.unit_system == "metric"
    living = example_session.rooms[0]
    assert living["length"] == pytest.approx(6.096)
    assert living["openings"][1]["width"] == pytest.approx(1.8288)

    result = example_session.results()
    assert result["unitSystem"] == "metric"
    assert result["coverage"] == 32.5
    # 1591 sq ft expressed in square metres via the length factor
    assert result["totals"]["totalPaintableArea"] == pytest.approx(1591 * 0.3048 ** 2)


def test_switch_to_same_unit_is_noop(example_session):
    before = [dict(r) for r in example_session.rooms]
    example_session.switch_unit_system("imperial")
    assert example_session.rooms == before
    with pytest.raises(ValueError):
        example_session.switch_unit_system("cubits")


def test_switch_round_trip_keeps_entered_values(example_session):
    example_session.switch_unit_system("metric")
    example_session.switch_unit_system("imperial")
    living, bedroom = example_session.rooms
    assert living["length"] == pytest.approx(20, rel=1e-12)
    assert bedroom["openings"][2]["height"] == pytest.approx(8, rel=1e-12)
    assert example_session.results()["totals"]["totalPaintableArea"] == pytest.approx(1591, rel=1e-12)


# ============================================================
# Example / empty
# ============================================================

def test_load_example(session):
    session.add_room()
    session.switch_unit_system("metric")
    session.load_example()
    assert session.unit_system == "imperial"
    assert [r["name"] for r in session.rooms] == ["Living Room", "Master Bedroom"]
    result = session.results()
    assert result["totals"]["totalPaintableArea"] == 1591
    assert result["paint"]["rounded"] == 11


def test_empty_session_has_no_result(session):
    assert session.results() is None


# ============================================================
# Schemas
# ============================================================

def test_validate_dimension():
    assert validate_dimension("12") is None
    assert validate_dimension(0.1) is None
    for bad in ("", "abc", None, 0, -3, "nan", "inf"):
        assert validate_dimension(bad) == "Must be a positive number"


def test_room_schema_rejects_non_positive():
    with pytest.raises(ValidationError, match="Must be a positive number"):
        Room(length=0, width=10, height=9)
    room = Room(id=7, length="12", width=10, height=9)
    assert room.id == "7"
    assert room.length == 12.0


def test_opening_schema_defaults():
    opening = Opening(type="wardrobe")
    wire = opening.to_wire()
    assert wire == {
        "type": "wardrobe",
        "width": 6.0,
        "height": 8.0,
        "quantity": 1,
        "action": "add",
        "customFaces": None,
    }
    with pytest.raises(ValidationError):
        Opening(type="wardrobe", quantity=0)
    with pytest.raises(ValidationError):
        Opening(type="wardrobe", customFaces=0)


def test_opening_schema_metric_context():
    opening = Opening.model_validate({"type": "slidingDoor"}, context={"unit_system": "metric"})
    assert opening.width == pytest.approx(6 * 0.3048)
    assert opening.height == pytest.approx(7 * 0.3048)
    request = EstimateRequest.model_validate({
        "unitSystem": "metric",
        "rooms": [{"length": 4, "width": 3, "height": 2.7, "openings": [{"type": "window", "height": 1}]}],
    })
    window = request.rooms[0].openings[0]
    assert window.width == pytest.approx(4 * 0.3048)
    assert window.height == 1


def test_estimate_request_defaults():
    request = EstimateRequest.model_validate({"rooms": []})
    rooms, settings, unit_system = request.calculator_inputs()
    assert rooms == []
    assert settings == {"coats": 2, "wastagePercent": 10.0, "includeCeiling": True, "paintType": "interior"}
    assert unit_system == "imperial"
    assert PaintSettings(coats=4).coats == 4
