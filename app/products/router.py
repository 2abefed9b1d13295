"""Product API router.

Reads are open to every signed-in role; writes require a role other than
``viewer``.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.auth import User, get_current_user, get_editor_user
from app.models.product import (
    Product,
    ProductCreate,
    ProductUpdate,
    QuantityUpdate,
    MessageResponse,
)
from app.storage.product_store import get_product_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Product not found",
    )


def _server_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )


@router.get(
    "/products",
    response_model=List[Product],
    summary="List products",
    description="List all products, optionally filtered by company and name.",
)
async def list_products(
    company: Optional[str] = Query(None, description="Company contains (case-insensitive)"),
    search: Optional[str] = Query(None, description="Product name contains (case-insensitive)"),
    user: User = Depends(get_current_user),
) -> List[Product]:
    """List products."""
    try:
        return await get_product_store().list_products(company=company, search=search)
    except Exception as e:
        logger.error(f"Error fetching products: {e}")
        raise _server_error("Error fetching products")


@router.get(
    "/products/{product_id}",
    response_model=Product,
    summary="Get product",
)
async def get_product(
    product_id: str,
    user: User = Depends(get_current_user),
) -> Product:
    """Get a single product."""
    try:
        product = await get_product_store().get_product(product_id)
    except Exception as e:
        logger.error(f"Error fetching product {product_id}: {e}")
        raise _server_error("Error fetching product")

    if not product:
        raise _not_found()
    return product


@router.post(
    "/products",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Add product",
    description="Create a product (not available to viewers).",
)
async def create_product(
    payload: ProductCreate,
    user: User = Depends(get_editor_user),
) -> Product:
    """Add a new product."""
    try:
        product = await get_product_store().create_product(payload)
    except Exception as e:
        logger.error(f"Error creating product: {e}")
        raise _server_error("Error creating product")

    logger.info(f"{user.username} added product {product.id}")
    return product


@router.put(
    "/products/{product_id}",
    response_model=Product,
    summary="Update product",
    description="Update product fields; omitted fields are left unchanged.",
)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    user: User = Depends(get_editor_user),
) -> Product:
    """Update a product."""
    try:
        product = await get_product_store().update_product(product_id, payload.changes())
    except Exception as e:
        logger.error(f"Error updating product {product_id}: {e}")
        raise _server_error("Error updating product")

    if not product:
        raise _not_found()
    return product


@router.patch(
    "/products/{product_id}/quantity",
    response_model=Product,
    summary="Set stock level",
)
async def update_quantity(
    product_id: str,
    payload: QuantityUpdate,
    user: User = Depends(get_editor_user),
) -> Product:
    """Update just the quantity of a product."""
    try:
        product = await get_product_store().set_quantity(product_id, payload.quantity)
    except Exception as e:
        logger.error(f"Error updating quantity for {product_id}: {e}")
        raise _server_error("Error updating quantity")

    if not product:
        raise _not_found()
    return product


@router.delete(
    "/products/{product_id}",
    response_model=MessageResponse,
    summary="Delete product",
)
async def delete_product(
    product_id: str,
    user: User = Depends(get_editor_user),
) -> MessageResponse:
    """Delete a product."""
    try:
        deleted = await get_product_store().delete_product(product_id)
    except Exception as e:
        logger.error(f"Error deleting product {product_id}: {e}")
        raise _server_error("Error deleting product")

    if not deleted:
        raise _not_found()

    logger.info(f"{user.username} deleted product {product_id}")
    return MessageResponse(message="Product deleted successfully")


@router.get(
    "/companies",
    response_model=List[str],
    summary="List companies",
    description="Distinct company names across all products, sorted.",
)
async def list_companies(user: User = Depends(get_current_user)) -> List[str]:
    """List known companies."""
    try:
        return await get_product_store().list_companies()
    except Exception as e:
        logger.error(f"Error fetching companies: {e}")
        raise _server_error("Error fetching companies")
