"""
Unit conversion between the imperial (ft, sq ft) and metric (m, sq m) systems.

Everything goes through metric. Lengths and areas carry their own factors.
"""

import logging

from .calculators.paint import PaintCalculator
from .catalog import OPENING_DIMENSION_FIELDS, ROOM_DIMENSION_FIELDS, get_unit_system

logger = logging.getLogger(__name__)

# Non-numeric stored values become NaN, as in the calculator
_parse_number = PaintCalculator().parse_number


def _key(unit_system) -> str:
    return getattr(unit_system, "value", unit_system)


def convert_length(value: float, from_unit: str, to_unit: str) -> float:
    """Convert a length between unit systems. Identity when the systems match."""
    from_unit, to_unit = _key(from_unit), _key(to_unit)
    if from_unit == to_unit:
        return value
    to_metric = value * get_unit_system(from_unit)["length_to_metric"]
    return to_metric / get_unit_system(to_unit)["length_to_metric"]


def convert_area(value: float, from_unit: str, to_unit: str) -> float:
    """Convert an area between unit systems. Identity when the systems match."""
    from_unit, to_unit = _key(from_unit), _key(to_unit)
    if from_unit == to_unit:
        return value
    to_metric = value * get_unit_system(from_unit)["area_to_metric"]
    return to_metric / get_unit_system(to_unit)["area_to_metric"]


def switch_factor(from_unit: str, to_unit: str) -> float:
    """
    Scalar applied to stored lengths when the active unit system changes.

    imperial -> metric is 0.3048; metric -> imperial is its exact reciprocal
    (3.280839895...), so switching back and forth returns the values entered.
    """
    from_unit, to_unit = _key(from_unit), _key(to_unit)
    if from_unit == to_unit:
        return 1.0
    return (
        get_unit_system(from_unit)["length_to_metric"]
        / get_unit_system(to_unit)["length_to_metric"]
    )


def convert_room(room: dict, from_unit: str, to_unit: str) -> dict:
    """
    Rescale a room's dimensions and its openings' dimensions.

    Returns a new room dict; names, ids, quantities and face counts are kept.
    """
    factor = switch_factor(from_unit, to_unit)
    converted = dict(room)
    for field in ROOM_DIMENSION_FIELDS:
        if room.get(field) is not None:
            converted[field] = _parse_number(room[field]) * factor

    openings = []
    for opening in room.get("openings") or []:
        scaled = dict(opening)
        for field in OPENING_DIMENSION_FIELDS:
            if opening.get(field) is not None:
                scaled[field] = _parse_number(opening[field]) * factor
        openings.append(scaled)
    converted["openings"] = openings
    return converted


def convert_rooms(rooms: list, from_unit: str, to_unit: str) -> list:
    """Rescale every room in a collection."""
    if _key(from_unit) == _key(to_unit):
        return [dict(room) for room in rooms]
    logger.info("Converting %d rooms from %s to %s", len(rooms), _key(from_unit), _key(to_unit))
    return [convert_room(room, from_unit, to_unit) for room in rooms]
