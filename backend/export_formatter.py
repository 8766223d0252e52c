"""
Export formats for a CalculationResult.

to_json -> full result tree, key order preserved, numbers unrounded.
to_csv  -> room table + totals + paint block, areas fixed to 2 decimals.

Both are pure functions of the result. Writing or sending the file is the
caller's job; build_download only bundles content, filename and content type.
"""

import json
import logging
import math

from .catalog import get_unit_system
from .config import settings as app_settings

logger = logging.getLogger(__name__)

CSV_TITLE = "Paint Calculator Estimate"
CSV_ROOM_HEADER = "Room Name,Wall Area,Ceiling Area,Subtract Area,Add Area,Net Paintable Area"

# (label, totals key) in export order
CSV_TOTAL_ROWS = [
    ("Total Wall Area", "wallArea"),
    ("Total Ceiling Area", "ceilingArea"),
    ("Total Subtract Area", "subtractArea"),
    ("Total Add Area", "addArea"),
    ("Net Paintable Area", "totalPaintableArea"),
]

EXPORT_FORMATS = {
    "csv": {"extension": "csv", "content_type": "text/csv"},
    "json": {"extension": "json", "content_type": "application/json"},
    "pdf": {"extension": "pdf", "content_type": "application/pdf"},
}


def format_fixed(value, digits: int = 2) -> str:
    """Fixed-point number; unparseable or non-finite values print as NaN / Infinity."""
    try:
        value = float(value)
    except (ValueError, TypeError):
        return "NaN"
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return f"{value:.{digits}f}"


def format_number(value) -> str:
    """Plain number: 350, 32.5, 10 (no trailing .0 on whole floats)."""
    if isinstance(value, float):
        if not math.isfinite(value):
            return format_fixed(value)
        if value.is_integer():
            return str(int(value))
    return str(value)


def _quote(text) -> str:
    """Quote a CSV field, doubling embedded quotes."""
    return '"' + str(text).replace('"', '""') + '"'


def _finite_or_none(obj):
    """Strict JSON has no NaN/Infinity; they export as null. Whole floats print as 630, not 630.0."""
    if isinstance(obj, float):
        if not math.isfinite(obj):
            return None
        if obj.is_integer():
            return int(obj)
    if isinstance(obj, dict):
        return {k: _finite_or_none(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_finite_or_none(v) for v in obj]
    return obj


def to_json(result: dict) -> str:
    """Full CalculationResult as 2-space indented JSON."""
    return json.dumps(_finite_or_none(result), indent=2, allow_nan=False, ensure_ascii=False)


def to_csv(result: dict) -> str:
    """Tabular CSV report. Section order and labels are fixed."""
    units = get_unit_system(result["unitSystem"])
    area = units["area"]
    volume = units["volumeAbbr"]
    totals = result["totals"]
    settings = result["settings"]
    paint = result["paint"]

    lines = [CSV_TITLE, "", "Room Details", CSV_ROOM_HEADER]
    for room in result["rooms"]:
        c = room["calculations"]
        lines.append(",".join([
            _quote(room.get("name", "")),
            format_fixed(c["wallArea"]),
            format_fixed(c["ceilingArea"]),
            format_fixed(c["subtractArea"]),
            format_fixed(c["addArea"]),
            format_fixed(c["totalPaintableArea"]),
        ]))

    lines += ["", "Totals"]
    for label, key in CSV_TOTAL_ROWS:
        lines.append(f"{label},{format_fixed(totals[key])} {area}")

    lines += [
        "",
        "Paint Required",
        f"Coats,{format_number(settings['coats'])}",
        f"Wastage,{format_number(settings['wastagePercent'])}%",
        f"Coverage,{format_number(result['coverage'])} {area}/{volume}",
        f"Paint Required,{format_fixed(paint['withWastage'])} {volume}",
        f"Recommended Purchase,{format_number(paint['rounded'])} {volume}",
    ]
    return "\n".join(lines) + "\n"


def build_download(result, fmt: str):
    """
    Bundle an export for the download collaborator.

    Returns (content, filename, content_type). content is str for csv/json,
    bytes for pdf. Raises ValueError for unknown formats or an empty estimate.
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(
            f"Unknown export format: {fmt}. Available: {list(EXPORT_FORMATS.keys())}"
        )
    if not result or not result.get("rooms"):
        raise ValueError("Nothing to export: add at least one room first.")

    export_format = EXPORT_FORMATS[fmt]
    if fmt == "csv":
        content = to_csv(result)
    elif fmt == "json":
        content = to_json(result)
    else:
        from .pdf_generator import generate_estimate_pdf
        content = bytes(generate_estimate_pdf(result))

    filename = f"{app_settings.EXPORT_BASENAME}.{export_format['extension']}"
    logger.info("Exported %d rooms as %s", len(result["rooms"]), filename)
    return content, filename, export_format["content_type"]
