"""
PDF Estimate Report.

Printable version of a CalculationResult. Uses fpdf2 (pure Python, no system
dependencies).

Sections, always in this order:
1. Header (title, date, unit system, paint type)
2. Room Breakdown
3. Openings
4. Totals
5. Paint Required
"""

from datetime import datetime

from fpdf import FPDF

from .catalog import OPENING_TYPES, PAINT_TYPES, get_unit_system
from .config import settings as app_settings
from .export_formatter import CSV_TOTAL_ROWS, format_fixed, format_number


def _safe(text: str) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        str(text)
        .replace("\u2212", "-")    # minus sign
        .replace("\u2014", " - ")  # em dash
        .replace("\u2013", "-")    # en dash
        .replace("\u00d7", "x")    # multiplication sign
        .replace("\u201c", '"')    # left double quote
        .replace("\u201d", '"')    # right double quote
        .replace("\u2018", "'")    # left single quote
        .replace("\u2019", "'")    # right single quote
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


class EstimatePDF(FPDF):
    """Custom PDF class for paint estimate reports."""

    def __init__(self, title=""):
        super().__init__()
        self.title_text = title
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        pass  # We handle headers manually per section

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="C")

    def section_header(self, title):
        """Render a section header bar."""
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(45, 55, 72)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def table_header(self, cols):
        """Render a table header row. cols: [(label, width), ...]"""
        self.set_font("Helvetica", "B", 8)
        self.set_fill_color(240, 240, 240)
        for i, (label, width) in enumerate(cols):
            align = "L" if i == 0 else "R"
            self.cell(width, 6, label, border="B", fill=True, align=align)
        self.ln()

    def table_row(self, values, widths, bold=False):
        """Render a table data row. First column left-aligned, numbers right."""
        self.set_font("Helvetica", "B" if bold else "", 8)
        for i, (val, width) in enumerate(zip(values, widths)):
            align = "L" if i == 0 else "R"
            self.cell(width, 5.5, _safe(val), align=align)
        self.ln()

    def label_row(self, label, value):
        """Render a label/value pair on one line."""
        self.set_font("Helvetica", "", 9)
        self.cell(70, 6, _safe(label))
        self.set_font("Helvetica", "B", 9)
        self.cell(0, 6, _safe(value), new_x="LMARGIN", new_y="NEXT")


def generate_estimate_pdf(result: dict, title: str = None) -> bytes:
    """
    Generate a PDF report for a CalculationResult.

    Args:
        result: CalculationResult dict from PaintCalculator.calculate_all
        title: Report title (defaults to REPORT_TITLE from config)

    Returns:
        PDF bytes
    """
    title = title or app_settings.REPORT_TITLE
    units = get_unit_system(result["unitSystem"])
    area = units["area"]
    volume = units["volumeAbbr"]
    settings = result["settings"]
    paint = result["paint"]
    paint_config = PAINT_TYPES.get(settings.get("paintType"), {})

    pdf = EstimatePDF(title=title)
    pdf.alias_nb_pages()
    pdf.add_page()

    # ── SECTION 1: Header ──
    pdf.set_font("Helvetica", "B", 20)
    pdf.cell(0, 10, _safe(title), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(0, 5, f"Date: {datetime.now().strftime('%B %d, %Y')}", new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 5, f"Units: {units['name']} ({units['length']}, {area})", new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 5, _safe(f"Paint: {paint_config.get('label', settings.get('paintType', ''))}"),
             new_x="LMARGIN", new_y="NEXT")
    pdf.ln(6)

    # ── SECTION 2: Room Breakdown ──
    pdf.section_header("ROOM BREAKDOWN")
    cols = [("Room", 50), ("Wall", 25), ("Ceiling", 25), ("Subtract", 25), ("Add", 25), ("Paintable", 40)]
    widths = [c[1] for c in cols]
    pdf.table_header(cols)
    for room in result["rooms"]:
        c = room["calculations"]
        pdf.table_row([
            room.get("name", ""),
            format_fixed(c["wallArea"]),
            format_fixed(c["ceilingArea"]),
            format_fixed(c["subtractArea"]),
            format_fixed(c["addArea"]),
            format_fixed(c["totalPaintableArea"]),
        ], widths)
    pdf.ln(4)

    # ── SECTION 3: Openings ──
    pdf.section_header("OPENINGS")
    cols = [("Room / Opening", 70), ("Size", 40), ("Qty", 20), ("Treatment", 30), ("Faces", 30)]
    widths = [c[1] for c in cols]
    pdf.table_header(cols)
    any_openings = False
    for room in result["rooms"]:
        for opening in room.get("openings") or []:
            any_openings = True
            config = OPENING_TYPES.get(opening.get("type"), {})
            faces = opening.get("customFaces")
            if faces is None:
                faces = config.get("faces", 0)
            pdf.table_row([
                f"{room.get('name', '')}: {config.get('label', opening.get('type', ''))}",
                f"{format_fixed(opening.get('width'))} x {format_fixed(opening.get('height'))} {units['length']}",
                format_number(opening.get("quantity", 1)),
                opening.get("action", ""),
                format_number(faces) if opening.get("action") == "add" else "-",
            ], widths)
    if not any_openings:
        pdf.set_font("Helvetica", "I", 8)
        pdf.cell(0, 5.5, "No openings.", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    # ── SECTION 4: Totals ──
    pdf.section_header("TOTALS")
    for label, key in CSV_TOTAL_ROWS:
        pdf.label_row(label, f"{format_fixed(result['totals'][key])} {area}")
    pdf.ln(4)

    # ── SECTION 5: Paint Required ──
    pdf.section_header("PAINT REQUIRED")
    pdf.label_row("Coats", format_number(settings.get("coats")))
    pdf.label_row("Wastage", f"{format_number(settings.get('wastagePercent'))}%")
    pdf.label_row("Coverage", f"{format_number(result['coverage'])} {area}/{volume}")
    pdf.label_row("Paint Required", f"{format_fixed(paint['withWastage'])} {volume}")
    pdf.label_row("Recommended Purchase", f"{format_number(paint['rounded'])} {volume}")

    return pdf.output()
