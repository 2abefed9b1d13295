"""Spreadsheet export endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from app.auth import User, get_current_user
from app.models.product import ExportRequest
from app.services.export_service import XLSX_MEDIA_TYPE, export_filename, render_xlsx
from app.storage.product_store import get_product_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Export"])


@router.post(
    "/export",
    summary="Export products to Excel",
    description="Download products as .xlsx, optionally only one company's.",
    response_class=Response,
    responses={200: {"content": {XLSX_MEDIA_TYPE: {}}}},
)
async def export_products(
    payload: Optional[ExportRequest] = None,
    user: User = Depends(get_current_user),
) -> Response:
    """Export products as a spreadsheet attachment."""
    company = payload.company if payload else None

    try:
        products = await get_product_store().list_by_company(company)
        content = render_xlsx(products)
    except Exception as e:
        logger.error(f"Export error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error exporting data",
        )

    filename = export_filename(company)
    logger.info(f"{user.username} exported {len(products)} products ({company or 'all'})")

    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
