"""Inventory endpoints: product CRUD and spreadsheet export."""

from app.products.router import router as products_router
from app.products.export import router as export_router

__all__ = ["products_router", "export_router"]
