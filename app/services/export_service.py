"""Spreadsheet export of inventory records."""

import io
import logging
import re
import time
from typing import Iterable, List, Optional, Tuple

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from app.models.product import Product

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SHEET_TITLE = "Products"

# (header, product attribute, column width)
EXPORT_COLUMNS: List[Tuple[str, str, int]] = [
    ("ID", "id", 25),
    ("Product Name", "name", 25),
    ("Quantity", "quantity", 12),
    ("Price", "price", 12),
    ("Company", "company", 20),
    ("Product Type", "type", 20),
    ("Description", "description", 35),
]

HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(fill_type="solid", fgColor="FF4472C4")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def build_workbook(products: Iterable[Product]) -> Workbook:
    """Lay out products on a single styled worksheet."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE

    sheet.append([header for header, _, _ in EXPORT_COLUMNS])
    for index, (_, _, width) in enumerate(EXPORT_COLUMNS, start=1):
        sheet.column_dimensions[get_column_letter(index)].width = width
    for cell in sheet[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL

    for product in products:
        sheet.append([getattr(product, attr) for _, attr, _ in EXPORT_COLUMNS])

    return workbook


def render_xlsx(products: Iterable[Product]) -> bytes:
    """Serialize products to .xlsx bytes."""
    buffer = io.BytesIO()
    build_workbook(products).save(buffer)
    return buffer.getvalue()


def export_filename(company: Optional[str] = None, timestamp_ms: Optional[int] = None) -> str:
    """Attachment name: inventory_<company|all>_<epoch ms>.xlsx."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    label = _UNSAFE_FILENAME_CHARS.sub("_", company) if company else "all"
    return f"inventory_{label}_{timestamp_ms}.xlsx"
