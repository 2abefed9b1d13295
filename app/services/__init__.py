"""Services module for work that sits between routers and storage."""

from app.services.export_service import (
    XLSX_MEDIA_TYPE,
    build_workbook,
    export_filename,
    render_xlsx,
)

__all__ = [
    "XLSX_MEDIA_TYPE",
    "build_workbook",
    "export_filename",
    "render_xlsx",
]
