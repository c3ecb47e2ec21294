# stock_tracker/utils/pdf.py

import logging
from pathlib import Path
from typing import Optional

from stock_tracker.config import settings
from stock_tracker.schemas.reports import ExportResult, ReportDocument
from stock_tracker.utils.report import report_storage_name

logger = logging.getLogger(__name__)

# Paths configuration
FONT_REGULAR_FILE = "DejaVuSans.ttf"
FONT_BOLD_FILE = "DejaVuSans-Bold.ttf"

# Built-in reportlab fonts used when DejaVu is not shipped
FONT_REGULAR_NAME = "Helvetica"
FONT_BOLD_NAME = "Helvetica-Bold"

def storage_dir() -> Path:
    path = Path(settings.REPORT_STORAGE_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path

def get_pdf_path(report: ReportDocument) -> Path:
    """Returns the file path of the PDF for the given report."""
    return storage_dir() / report_storage_name(report)

_fonts_inited = False
def _init_fonts():
    """Registers DejaVu fonts (accented characters) when they are available."""
    global _fonts_inited, FONT_REGULAR_NAME, FONT_BOLD_NAME
    if _fonts_inited:
        return

    from reportlab.pdfbase import pdfmetrics
    from reportlab.pdfbase.ttfonts import TTFont

    _fonts_inited = True
    font_dir = Path(settings.FONT_DIR)
    regular = font_dir / FONT_REGULAR_FILE
    bold = font_dir / FONT_BOLD_FILE
    if not regular.exists():
        logger.info("Font file not found at %s, using built-in Helvetica", regular)
        return

    pdfmetrics.registerFont(TTFont("DejaVuSans", str(regular)))
    FONT_REGULAR_NAME = "DejaVuSans"
    if bold.exists():
        pdfmetrics.registerFont(TTFont("DejaVuSans-Bold", str(bold)))
        FONT_BOLD_NAME = "DejaVuSans-Bold"
    else:
        FONT_BOLD_NAME = FONT_REGULAR_NAME

def _money(value: Optional[float], currency: str) -> str:
    if value is None:
        return "-"
    return f"{value:,.2f} {currency}"

def generate_report_pdf(report: ReportDocument, out_path: Path) -> None:
    """
    Renders the stock report on A4 pages:
    - Title and generation date
    - Headline metrics (2x2 grid)
    - Product table, continued on new pages as needed
    """
    from reportlab.lib.pagesizes import A4
    from reportlab.pdfgen import canvas
    from reportlab.lib.units import mm

    _init_fonts()
    out_path.parent.mkdir(parents=True, exist_ok=True)

    c = canvas.Canvas(str(out_path), pagesize=A4)
    width, height = A4

    def draw_text(x, y, text, font=None, size=10, align="left", color=(0, 0, 0)):
        c.setFillColorRGB(*color)
        c.setFont(font or FONT_REGULAR_NAME, size)
        text_str = str(text) if text is not None else ""
        if align == "right":
            c.drawRightString(x, y, text_str)
        elif align == "center":
            c.drawCentredString(x, y, text_str)
        else:
            c.drawString(x, y, text_str)
        c.setFillColorRGB(0, 0, 0)

    # --- 1. HEADER ---
    y = height - 20 * mm
    draw_text(20 * mm, y, "Stock report", font=FONT_BOLD_NAME, size=20)
    y -= 8 * mm
    draw_text(20 * mm, y, report.generated_at.strftime("%d %B %Y"), size=10, color=(0.5, 0.5, 0.5))
    if report.warehouse_id is not None:
        draw_text(190 * mm, y, f"Warehouse: {report.warehouse_id}", size=10, align="right")
    if report.generated_by:
        y -= 5 * mm
        draw_text(190 * mm, y, f"Generated by: {report.generated_by}", size=9, align="right")

    y -= 6 * mm
    c.setLineWidth(0.5)
    c.line(20 * mm, y, 190 * mm, y)
    y -= 12 * mm

    # --- 2. HEADLINE METRICS ---
    draw_text(20 * mm, y, "Overview", font=FONT_BOLD_NAME, size=14)
    y -= 10 * mm

    cards = [
        ("Total products", str(report.total_products)),
        ("Out of stock", str(report.out_of_stock)),
        ("Low stock", str(report.low_stock)),
        ("Total value", _money(report.total_value, report.currency)),
    ]
    for idx, (label, value) in enumerate(cards):
        col = idx % 2
        row = idx // 2
        x = 20 * mm + col * 87 * mm
        card_y = y - row * 22 * mm
        c.setFillColorRGB(0.97, 0.97, 0.98)
        c.rect(x, card_y - 12 * mm, 83 * mm, 18 * mm, fill=1, stroke=0)
        c.setFillColorRGB(0, 0, 0)
        draw_text(x + 4 * mm, card_y - 2 * mm, value, font=FONT_BOLD_NAME, size=14)
        draw_text(x + 4 * mm, card_y - 8 * mm, label, size=9, color=(0.5, 0.5, 0.5))
    y -= 2 * 22 * mm + 6 * mm

    # --- 3. PRODUCT TABLE ---
    draw_text(20 * mm, y, "Products", font=FONT_BOLD_NAME, size=14)
    y -= 10 * mm

    def draw_table_header(current_y):
        c.setFillColorRGB(0.2, 0.6, 0.86)
        c.rect(20 * mm, current_y - 2 * mm, 170 * mm, 8 * mm, fill=1, stroke=0)
        c.setFillColorRGB(1, 1, 1)
        c.setFont(FONT_BOLD_NAME, 9)
        c.drawString(22 * mm, current_y, "Name")
        c.drawString(95 * mm, current_y, "Type")
        c.drawRightString(160 * mm, current_y, f"Price ({report.currency})")
        c.drawRightString(185 * mm, current_y, "Stock")
        c.setFillColorRGB(0, 0, 0)
        return current_y - 8 * mm

    y = draw_table_header(y)
    c.setFont(FONT_REGULAR_NAME, 9)
    for row in report.rows:
        c.drawString(22 * mm, y, str(row.name)[:40])
        c.drawString(95 * mm, y, str(row.type)[:30])
        c.drawRightString(160 * mm, y, "-" if row.price is None else f"{row.price:,.2f}")
        c.drawRightString(185 * mm, y, str(row.quantity))

        c.setLineWidth(0.1)
        c.line(20 * mm, y - 2 * mm, 190 * mm, y - 2 * mm)
        y -= 6 * mm

        # New page handling
        if y < 20 * mm:
            c.showPage()
            y = draw_table_header(height - 20 * mm)
            c.setFont(FONT_REGULAR_NAME, 9)

    if not report.rows:
        draw_text(22 * mm, y, "No products in this warehouse", size=9, color=(0.5, 0.5, 0.5))

    c.showPage()
    c.save()

def export_document(report: ReportDocument, out_path: Optional[Path] = None) -> ExportResult:
    """
    Export sink: writes the report as a PDF and reports the outcome.
    Failures are returned, never raised; the report itself is left untouched.
    """
    try:
        path = out_path or get_pdf_path(report)
        generate_report_pdf(report, path)
    except ImportError:
        logger.error("reportlab is not installed. Run: python -m pip install reportlab")
        return ExportResult(ok=False, reason="PDF export is unavailable: reportlab is not installed")
    except Exception as e:
        logger.exception("Report export failed: %s", e)
        return ExportResult(ok=False, reason=f"Could not generate PDF: {e}")

    logger.info("Report exported to %s", path)
    return ExportResult(ok=True, location=str(path))
