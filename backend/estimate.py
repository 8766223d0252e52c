"""
EstimateSession: the room collection one estimate form works on.

Holds rooms, paint settings and the active unit system. Every mutation goes
through here; results() recomputes from the current state on each call, so
whatever is shown or exported always matches the inputs.
"""

import copy
import logging
import uuid
from typing import Optional

from pydantic import ValidationError

from .calculators.paint import PaintCalculator
from .catalog import (
    DEFAULT_ROOM_DIMENSIONS, EXAMPLE_ESTIMATE, ROOM_DIMENSION_FIELDS, UnitSystem,
)
from .config import settings as app_settings
from .schemas import Opening, PaintSettings, validate_dimension
from .units import convert_rooms

logger = logging.getLogger(__name__)


class EstimateSession:

    def __init__(self, unit_system: str = None):
        self.unit_system = UnitSystem(unit_system or app_settings.DEFAULT_UNIT_SYSTEM).value
        self.settings = PaintSettings()
        self.rooms: list = []
        self.calculator = PaintCalculator()

    # --- Rooms ---

    def add_room(self, name: Optional[str] = None) -> dict:
        """Append a room with the default dimensions for the active unit system."""
        length, width, height = DEFAULT_ROOM_DIMENSIONS[self.unit_system]
        room = {
            "id": uuid.uuid4().hex,
            "name": name or f"Room {len(self.rooms) + 1}",
            "length": length,
            "width": width,
            "height": height,
            "openings": [],
        }
        self.rooms.append(room)
        return room

    def get_room(self, room_id: str) -> dict:
        for room in self.rooms:
            if room["id"] == room_id:
                return room
        raise KeyError(f"No room with id {room_id}")

    def update_room(self, room_id: str, **changes) -> dict:
        """
        Apply field edits to a room.

        Returns {field: error message} for rejected edits. A rejected
        dimension keeps its last valid value, so it never reaches the
        calculator.
        """
        room = self.get_room(room_id)
        errors = {}
        for field, value in changes.items():
            if field in ROOM_DIMENSION_FIELDS:
                error = validate_dimension(value)
                if error:
                    errors[field] = error
                    continue
                room[field] = float(value)
            elif field == "openings":
                try:
                    room["openings"] = [self._validate_opening(o) for o in value]
                except ValidationError as e:
                    errors[field] = str(e)
            elif field == "name":
                room["name"] = str(value)
            else:
                errors[field] = f"Unknown room field: {field}"
        if errors:
            logger.debug("Rejected edits to room %s: %s", room_id, errors)
        return errors

    def delete_room(self, room_id: str) -> None:
        room = self.get_room(room_id)
        self.rooms.remove(room)

    # --- Openings ---

    def add_opening(self, room_id: str, opening_type: str, **overrides) -> dict:
        """
        Add an opening to a room. Width, height and action default to the
        opening type's values; raises ValidationError on bad overrides.
        """
        room = self.get_room(room_id)
        opening = self._validate_opening({"type": opening_type, **overrides})
        room["openings"].append(opening)
        return opening

    def remove_opening(self, room_id: str, index: int) -> dict:
        room = self.get_room(room_id)
        if not 0 <= index < len(room["openings"]):
            raise IndexError(f"No opening at index {index} in room {room_id}")
        return room["openings"].pop(index)

    def _validate_opening(self, data: dict) -> dict:
        # Catalog sizes are in feet; the context converts them to the session's units
        return Opening.model_validate(data, context={"unit_system": self.unit_system}).to_wire()

    # --- Settings / units ---

    def update_settings(self, **changes) -> PaintSettings:
        """Merge snake_case changes into the paint settings; raises ValidationError."""
        data = self.settings.model_dump()
        data.update(changes)
        self.settings = PaintSettings.model_validate(data)
        return self.settings

    def switch_unit_system(self, unit_system: str) -> None:
        """Rescale every stored dimension into the new unit system."""
        new_unit = UnitSystem(unit_system).value
        if new_unit == self.unit_system:
            return
        self.rooms = convert_rooms(self.rooms, self.unit_system, new_unit)
        logger.info("Switched estimate from %s to %s", self.unit_system, new_unit)
        self.unit_system = new_unit

    def load_example(self) -> None:
        """Replace the current state with the worked example (imperial)."""
        self.rooms = copy.deepcopy(EXAMPLE_ESTIMATE["rooms"])
        self.settings = PaintSettings.model_validate(EXAMPLE_ESTIMATE["settings"])
        self.unit_system = EXAMPLE_ESTIMATE["unitSystem"]

    # --- Results ---

    def results(self):
        """Fresh CalculationResult for the current state, or None with no rooms."""
        return self.calculator.calculate_all(self.rooms, self.settings.to_wire(), self.unit_system)
