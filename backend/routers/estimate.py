"""
Estimate API - stateless. Every request carries the full estimate input.

GET  /api/estimate/catalog        - unit systems, opening types, paint types, defaults
GET  /api/estimate/example        - worked example input (two rooms, imperial)
POST /api/estimate/calculate      - rooms + settings + unit system -> CalculationResult
POST /api/estimate/convert-units  - rescale room dimensions to another unit system
POST /api/estimate/export/{fmt}   - download csv | json | pdf
"""

import copy
import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from ..calculators.paint import PaintCalculator
from ..catalog import (
    DEFAULT_ROOM_DIMENSIONS, DEFAULT_SETTINGS, EXAMPLE_ESTIMATE, OPENING_TYPES, PAINT_TYPES,
    UNIT_SYSTEMS,
)
from ..export_formatter import EXPORT_FORMATS, build_download
from ..schemas import EstimateRequest, UnitConversionRequest, UnitConversionResponse
from ..units import convert_rooms

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/estimate", tags=["estimate"])

# Stateless - safe to share
calculator = PaintCalculator()


@router.get("/catalog")
def get_catalog():
    """Lookup tables the estimate form is built from."""
    return {
        "unitSystems": UNIT_SYSTEMS,
        "openingTypes": OPENING_TYPES,
        "paintTypes": PAINT_TYPES,
        "defaultSettings": DEFAULT_SETTINGS,
        "defaultRoomDimensions": DEFAULT_ROOM_DIMENSIONS,
    }


@router.get("/example")
def get_example():
    return copy.deepcopy(EXAMPLE_ESTIMATE)


@router.post("/calculate")
def calculate(request: EstimateRequest):
    """
    Run the calculator on the posted estimate.

    result is null when there are no rooms ("nothing computed"),
    as opposed to a computed zero area.
    """
    rooms, settings, unit_system = request.calculator_inputs()
    return {"result": calculator.calculate_all(rooms, settings, unit_system)}


@router.post("/convert-units", response_model=UnitConversionResponse)
def convert_units(request: UnitConversionRequest):
    """Rescale every room and opening dimension into the target unit system."""
    rooms = [room.to_wire() for room in request.rooms]
    converted = convert_rooms(rooms, request.from_unit, request.to_unit)
    return UnitConversionResponse(rooms=converted, unit_system=request.to_unit)


@router.post("/export/{fmt}")
def export_estimate(fmt: str, request: EstimateRequest):
    """
    Calculate and download the estimate as csv, json or pdf.

    Returns: the file as an attachment (paint-estimate.<fmt>)
    """
    if fmt not in EXPORT_FORMATS:
        raise HTTPException(status_code=404, detail=f"Unknown export format: {fmt}")

    rooms, settings, unit_system = request.calculator_inputs()
    result = calculator.calculate_all(rooms, settings, unit_system)
    try:
        content, filename, content_type = build_download(result, fmt)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return Response(
        content=content,
        media_type=content_type,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
        },
    )
