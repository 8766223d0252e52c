"""
Request/response models. This is where input gets validated.

Field names are snake_case in Python and camelCase on the wire, matching the
keys the calculator and the exports use.
"""

import math
import uuid
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from .catalog import (
    DEFAULT_SETTINGS, OPENING_TYPES, ROOM_DIMENSION_FIELDS, UNIT_SYSTEMS, OpeningAction, OpeningType,
    PaintType, UnitSystem,
)
from .config import settings as app_settings
from .units import convert_length

POSITIVE_NUMBER_MESSAGE = "Must be a positive number"


def validate_dimension(value) -> Optional[str]:
    """Field-level check for a dimension. Returns an error message or None."""
    try:
        number = float(str(value).strip())
    except (ValueError, TypeError):
        return POSITIVE_NUMBER_MESSAGE
    if not math.isfinite(number) or number <= 0:
        return POSITIVE_NUMBER_MESSAGE
    return None


def _positive(value: float) -> float:
    error = validate_dimension(value)
    if error:
        raise ValueError(error)
    return value


def opening_defaults(data: dict, unit_system=None) -> dict:
    """
    Fill width, height and action from the opening type.

    Catalog sizes are in feet; they are converted into unit_system
    (imperial when not given).
    """
    config = OPENING_TYPES.get(getattr(data.get("type"), "value", data.get("type")))
    unit_key = getattr(unit_system, "value", unit_system) or UnitSystem.IMPERIAL.value
    if config is None or not isinstance(unit_key, str) or unit_key not in UNIT_SYSTEMS:
        return data  # enum validation reports the bad type or unit
    data = dict(data)
    if data.get("width") is None:
        data["width"] = convert_length(config["defaultWidth"], "imperial", unit_key)
    if data.get("height") is None:
        data["height"] = convert_length(config["defaultHeight"], "imperial", unit_key)
    if data.get("action") is None:
        data["action"] = config["action"]
    return data


def _rooms_with_opening_defaults(rooms, unit_system):
    if not isinstance(rooms, list):
        return rooms
    filled = []
    for room in rooms:
        if isinstance(room, dict) and isinstance(room.get("openings"), list):
            openings = [opening_defaults(o, unit_system) if isinstance(o, dict) else o for o in room["openings"]]
            room = {**room, "openings": openings}
        filled.append(room)
    return filled


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, coerce_numbers_to_str=True)

    def to_wire(self) -> dict:
        """Dump with camelCase keys and plain values, ready for the calculator."""
        return self.model_dump(by_alias=True, mode="json")


class Opening(WireModel):
    type: OpeningType
    width: float
    height: float
    quantity: int = Field(1, ge=1)
    action: OpeningAction
    custom_faces: Optional[int] = Field(None, alias="customFaces", ge=1)

    @model_validator(mode="before")
    @classmethod
    def apply_type_defaults(cls, data, info: ValidationInfo):
        """Width, height and action default to the opening type's values."""
        if not isinstance(data, dict):
            return data
        return opening_defaults(data, (info.context or {}).get("unit_system"))

    @field_validator("width", "height")
    @classmethod
    def dimension_positive(cls, v):
        return _positive(v)


class Room(WireModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = ""
    length: float
    width: float
    height: float
    openings: List[Opening] = []

    @field_validator(*ROOM_DIMENSION_FIELDS)
    @classmethod
    def dimension_positive(cls, v):
        return _positive(v)


class PaintSettings(WireModel):
    coats: int = Field(DEFAULT_SETTINGS["coats"], ge=1, le=4)
    wastage_percent: float = Field(DEFAULT_SETTINGS["wastagePercent"], alias="wastagePercent", ge=0, le=50)
    include_ceiling: bool = Field(DEFAULT_SETTINGS["includeCeiling"], alias="includeCeiling")
    paint_type: PaintType = Field(DEFAULT_SETTINGS["paintType"], alias="paintType")


class EstimateRequest(WireModel):
    rooms: List[Room] = []
    settings: PaintSettings = Field(default_factory=PaintSettings)
    unit_system: UnitSystem = Field(
        default_factory=lambda: UnitSystem(app_settings.DEFAULT_UNIT_SYSTEM),
        alias="unitSystem",
    )

    @model_validator(mode="before")
    @classmethod
    def apply_opening_defaults(cls, data):
        """Opening defaults follow the request's unit system."""
        if not isinstance(data, dict) or "rooms" not in data:
            return data
        unit_system = data.get("unitSystem", data.get("unit_system")) or app_settings.DEFAULT_UNIT_SYSTEM
        return {**data, "rooms": _rooms_with_opening_defaults(data["rooms"], unit_system)}

    def calculator_inputs(self):
        """(rooms, settings, unit_system) in the shape PaintCalculator.calculate_all takes."""
        wire = self.to_wire()
        return wire["rooms"], wire["settings"], wire["unitSystem"]


class UnitConversionRequest(WireModel):
    rooms: List[Room] = []
    from_unit: UnitSystem = Field(alias="fromUnit")
    to_unit: UnitSystem = Field(alias="toUnit")

    @model_validator(mode="before")
    @classmethod
    def apply_opening_defaults(cls, data):
        """Rooms arrive in fromUnit, so opening defaults are filled in that system."""
        if not isinstance(data, dict) or "rooms" not in data:
            return data
        unit_system = data.get("fromUnit", data.get("from_unit"))
        return {**data, "rooms": _rooms_with_opening_defaults(data["rooms"], unit_system)}


class UnitConversionResponse(WireModel):
    rooms: List[Room]
    unit_system: UnitSystem = Field(alias="unitSystem")
