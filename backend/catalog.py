"""
Lookup tables for the paint estimator.

Unit systems, opening types, paint types and defaults live here as data.
Keys are the strings used on the wire (camelCase, matching the browser form),
the enums give the schemas something to validate against.
"""

import enum


class UnitSystem(str, enum.Enum):
    IMPERIAL = "imperial"
    METRIC = "metric"


class OpeningAction(str, enum.Enum):
    ADD = "add"
    SUBTRACT = "subtract"


class OpeningType(str, enum.Enum):
    PREFINISHED_DOOR = "prefinishedDoor"
    PAINTABLE_DOOR = "paintableDoor"
    WINDOW = "window"
    SLIDING_DOOR = "slidingDoor"
    WARDROBE = "wardrobe"
    GRILL = "grill"


class PaintType(str, enum.Enum):
    INTERIOR = "interior"
    EXTERIOR = "exterior"
    ENAMEL = "enamel"
    PRIMER = "primer"
    CEILING = "ceiling"


# --- Unit systems ---
# length_to_metric and area_to_metric are independent coefficients.
# Do not derive the area factor by squaring the length factor.

UNIT_SYSTEMS = {
    "imperial": {
        "name": "Imperial",
        "length": "ft",
        "smallLength": "in",
        "area": "sq ft",
        "volume": "gallon",
        "volumeAbbr": "gal",
        "length_to_metric": 0.3048,
        "area_to_metric": 0.092903,
    },
    "metric": {
        "name": "Metric",
        "length": "m",
        "smallLength": "cm",
        "area": "sq m",
        "volume": "litre",
        "volumeAbbr": "L",
        "length_to_metric": 1.0,
        "area_to_metric": 1.0,
    },
}


# --- Opening types ---
# Dimensions are in the imperial unit (ft); faces only matter for "add".

OPENING_TYPES = {
    "prefinishedDoor": {
        "label": "Pre-finished Door",
        "description": "Ready-made door (not painted), area subtracted from walls",
        "action": "subtract",
        "defaultWidth": 3,
        "defaultHeight": 7,
        "faces": 0,
    },
    "paintableDoor": {
        "label": "Paintable Door",
        "description": "Wooden/metal door requiring enamel paint, area added",
        "action": "add",
        "defaultWidth": 3,
        "defaultHeight": 7,
        "faces": 2,
    },
    "window": {
        "label": "Window",
        "description": "Standard window, area subtracted from walls",
        "action": "subtract",
        "defaultWidth": 4,
        "defaultHeight": 3,
        "faces": 0,
    },
    "slidingDoor": {
        "label": "Sliding Door",
        "description": "Glass sliding door, configurable treatment",
        "action": "subtract",
        "defaultWidth": 6,
        "defaultHeight": 7,
        "faces": 0,
    },
    "wardrobe": {
        "label": "Built-in Wardrobe",
        "description": "Built-in storage, configurable (paint or skip)",
        "action": "add",
        "defaultWidth": 6,
        "defaultHeight": 8,
        "faces": 1,
    },
    "grill": {
        "label": "Grill/Gate",
        "description": "Metal grill or gate, configurable treatment",
        "action": "add",
        "defaultWidth": 3,
        "defaultHeight": 7,
        "faces": 2,
    },
}


# --- Paint types ---
# Coverage is area per volume unit: sq ft/gal (imperial), sq m/L (metric).

PAINT_TYPES = {
    "interior": {
        "label": "Interior Wall Paint",
        "coverage": {"imperial": 350, "metric": 32.5},
        "description": "Standard interior latex/emulsion",
    },
    "exterior": {
        "label": "Exterior Paint",
        "coverage": {"imperial": 300, "metric": 28},
        "description": "Weather-resistant exterior paint",
    },
    "enamel": {
        "label": "Enamel Paint",
        "coverage": {"imperial": 400, "metric": 37},
        "description": "For doors, trim, and metal surfaces",
    },
    "primer": {
        "label": "Primer",
        "coverage": {"imperial": 400, "metric": 37},
        "description": "Base coat for better adhesion",
    },
    "ceiling": {
        "label": "Ceiling Paint",
        "coverage": {"imperial": 400, "metric": 37},
        "description": "Flat finish for ceilings",
    },
}


DEFAULT_SETTINGS = {
    "coats": 2,
    "wastagePercent": 10,
    "includeCeiling": True,
    "paintType": "interior",
}

ROOM_DIMENSION_FIELDS = ("length", "width", "height")
OPENING_DIMENSION_FIELDS = ("width", "height")

# New-room dimensions per unit system (length, width, height)
DEFAULT_ROOM_DIMENSIONS = {
    "imperial": (12, 10, 9),
    "metric": (4, 3, 2.7),
}


# --- Worked example (imperial) ---
# Living Room: 630 wall, 300 ceiling, -69 openings -> 861
# Master Bedroom: 468 wall, 168 ceiling, -12 window, +106 door/wardrobe -> 730
# 1591 sq ft at 350 sq ft/gal, 2 coats, 10% wastage -> 11 gal

EXAMPLE_ESTIMATE = {
    "rooms": [
        {
            "id": "1",
            "name": "Living Room",
            "length": 20,
            "width": 15,
            "height": 9,
            "openings": [
                {"type": "prefinishedDoor", "width": 3, "height": 7, "quantity": 1, "action": "subtract"},
                {"type": "window", "width": 6, "height": 4, "quantity": 2, "action": "subtract"},
            ],
        },
        {
            "id": "2",
            "name": "Master Bedroom",
            "length": 14,
            "width": 12,
            "height": 9,
            "openings": [
                {"type": "paintableDoor", "width": 3, "height": 7, "quantity": 1, "action": "add", "customFaces": 2},
                {"type": "window", "width": 4, "height": 3, "quantity": 1, "action": "subtract"},
                {"type": "wardrobe", "width": 8, "height": 8, "quantity": 1, "action": "add", "customFaces": 1},
            ],
        },
    ],
    "settings": dict(DEFAULT_SETTINGS),
    "unitSystem": "imperial",
}


def get_unit_system(unit_system: str) -> dict:
    """Returns the unit system config, or raises ValueError."""
    key = unit_system.value if isinstance(unit_system, UnitSystem) else unit_system
    if key not in UNIT_SYSTEMS:
        raise ValueError(
            f"Unknown unit system: {unit_system}. "
            f"Available: {list(UNIT_SYSTEMS.keys())}"
        )
    return UNIT_SYSTEMS[key]


def get_coverage(paint_type: str, unit_system: str) -> float:
    """Coverage rate for a paint type in a unit system, or raises ValueError."""
    key = paint_type.value if isinstance(paint_type, PaintType) else paint_type
    if key not in PAINT_TYPES:
        raise ValueError(
            f"Unknown paint type: {paint_type}. "
            f"Available: {list(PAINT_TYPES.keys())}"
        )
    unit_key = unit_system.value if isinstance(unit_system, UnitSystem) else unit_system
    get_unit_system(unit_key)
    return PAINT_TYPES[key]["coverage"][unit_key]
