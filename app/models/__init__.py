"""Pydantic models for data validation and serialization."""

from .product import (
    ProductCreate,
    ProductUpdate,
    QuantityUpdate,
    Product,
    ExportRequest,
    MessageResponse,
)

__all__ = [
    "ProductCreate",
    "ProductUpdate",
    "QuantityUpdate",
    "Product",
    "ExportRequest",
    "MessageResponse",
]
