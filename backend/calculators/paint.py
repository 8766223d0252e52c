"""
Paint calculator: rooms + openings + settings -> area breakdown + paint volume.

Pure math, no validation. Inputs are the wire-format dicts (camelCase keys)
that come out of the schemas or the estimate session. Values that do not
parse as numbers become NaN and flow through to the result instead of
raising; catching bad input is the job of the schemas.
"""

import logging
import math

from ..catalog import OPENING_TYPES, get_coverage

logger = logging.getLogger(__name__)

# Per-room area fields, in the order they are totalled and exported
AREA_FIELDS = (
    "wallArea",
    "ceilingArea",
    "subtractArea",
    "addArea",
    "netWallArea",
    "totalPaintableArea",
)


class PaintCalculator:
    """Area and paint-volume arithmetic for a set of rooms."""

    # --- Parsing helpers ---

    def parse_number(self, value, default: float = math.nan) -> float:
        """Parse a numeric value from user input. Unparseable input -> NaN."""
        if value is None:
            return default
        try:
            return float(str(value).strip())
        except (ValueError, TypeError):
            return default

    def parse_int(self, value, default: int = 1) -> int:
        """Parse a count. Missing, zero or unparseable counts fall back to default."""
        if value is None:
            return default
        try:
            parsed = int(float(str(value).strip()))
        except (ValueError, TypeError, OverflowError):
            return default
        return parsed or default

    # --- Areas ---

    def wall_area(self, length, width, height) -> float:
        """Four walls: perimeter x height."""
        perimeter = 2 * (self.parse_number(length) + self.parse_number(width))
        return perimeter * self.parse_number(height)

    def ceiling_area(self, length, width) -> float:
        return self.parse_number(length) * self.parse_number(width)

    def opening_area(self, opening: dict) -> float:
        """
        Area an opening contributes.

        "add" openings are painted surfaces, so every face counts (at least one).
        "subtract" openings are holes in the wall; faces are ignored.
        """
        base_area = self.parse_number(opening.get("width")) * self.parse_number(opening.get("height"))
        quantity = self.parse_int(opening.get("quantity"), default=1)

        faces = opening.get("customFaces")
        if faces is None:
            faces = OPENING_TYPES.get(opening.get("type"), {}).get("faces", 0)

        if opening.get("action") == "add":
            return base_area * quantity * max(self.parse_number(faces, default=0.0), 1)
        return base_area * quantity

    def room_area(self, room: dict, include_ceiling: bool) -> dict:
        """
        Area breakdown for one room.

        Net wall area floors at zero: over-specified openings can't make
        a wall negative.
        """
        wall_area = self.wall_area(room.get("length"), room.get("width"), room.get("height"))
        ceiling_area = self.ceiling_area(room.get("length"), room.get("width")) if include_ceiling else 0.0

        subtract_area = 0.0
        add_area = 0.0
        for opening in room.get("openings") or []:
            area = self.opening_area(opening)
            if opening.get("action") == "subtract":
                subtract_area += area
            elif opening.get("action") == "add":
                add_area += area

        net_wall_area = self._floor_zero(wall_area - subtract_area)
        return {
            "wallArea": wall_area,
            "ceilingArea": ceiling_area,
            "subtractArea": subtract_area,
            "addArea": add_area,
            "netWallArea": net_wall_area,
            "totalPaintableArea": net_wall_area + ceiling_area + add_area,
        }

    def aggregate(self, rooms: list, settings: dict) -> dict:
        """Sum every per-room area field. includeCeiling is global, not per room."""
        include_ceiling = bool(settings.get("includeCeiling"))
        totals = {field: 0.0 for field in AREA_FIELDS}
        for room in rooms:
            room_calc = self.room_area(room, include_ceiling)
            for field in AREA_FIELDS:
                totals[field] += room_calc[field]
        return totals

    # --- Paint volume ---

    def paint_required(self, total_area, coverage, coats, wastage_percent) -> dict:
        """
        Paint volume for an area.

        Always rounds UP: running short of paint mid-job costs more than
        a spare can.
        """
        base = self._divide(self.parse_number(total_area), self.parse_number(coverage))
        with_coats = base * self.parse_number(coats)
        with_wastage = with_coats * (1 + self.parse_number(wastage_percent) / 100)
        if math.isfinite(with_wastage):
            rounded = math.ceil(with_wastage)
        else:
            logger.warning("Paint volume is not finite (%s); check room dimensions", with_wastage)
            rounded = with_wastage
        return {
            "base": base,
            "withCoats": with_coats,
            "withWastage": with_wastage,
            "rounded": rounded,
        }

    # --- Full pipeline ---

    def calculate_all(self, rooms: list, settings: dict, unit_system: str):
        """
        Full CalculationResult for the current rooms, settings and unit system.

        Returns None when there are no rooms, so "nothing computed" is
        distinguishable from a computed zero area.
        """
        if not rooms:
            return None

        include_ceiling = bool(settings.get("includeCeiling"))
        result = {
            "rooms": [{**room, "calculations": self.room_area(room, include_ceiling)} for room in rooms],
            "totals": self.aggregate(rooms, settings),
            "paint": None,
        }

        unit_key = getattr(unit_system, "value", unit_system)
        coverage = get_coverage(settings.get("paintType"), unit_key)
        result["paint"] = self.paint_required(
            result["totals"]["totalPaintableArea"],
            coverage,
            settings.get("coats"),
            settings.get("wastagePercent"),
        )
        result["settings"] = dict(settings)
        result["unitSystem"] = unit_key
        result["coverage"] = coverage

        logger.debug(
            "Calculated %d rooms: %.2f paintable area, %s units recommended",
            len(rooms), result["totals"]["totalPaintableArea"], result["paint"]["rounded"],
        )
        return result

    def _divide(self, numerator: float, denominator: float) -> float:
        # Zero coverage gives inf (or NaN for 0/0) instead of raising
        if denominator == 0:
            if numerator == 0 or math.isnan(numerator):
                return math.nan
            return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
        return numerator / denominator

    def _floor_zero(self, value: float) -> float:
        # NaN propagates
        if math.isnan(value):
            return value
        return max(0, value)
