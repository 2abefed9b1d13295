"""Storage module for data persistence."""

from app.storage.database import Database, get_database, init_database, close_database
from app.storage.product_store import ProductStore, get_product_store
from app.storage.user_store import (
    UserAccount,
    UserStore,
    UserExistsError,
    InvalidRoleError,
    get_user_store,
)

__all__ = [
    "Database",
    "get_database",
    "init_database",
    "close_database",
    "ProductStore",
    "get_product_store",
    "UserAccount",
    "UserStore",
    "UserExistsError",
    "InvalidRoleError",
    "get_user_store",
]
