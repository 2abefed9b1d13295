"""Product storage.

Keeps inventory records in the ``products`` table of whichever database
``get_database()`` selects.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from app.models.product import Product, ProductCreate
from app.storage.database import get_database

logger = logging.getLogger(__name__)

# Columns a client may change after creation
UPDATABLE_FIELDS = ("name", "quantity", "price", "company", "type", "description")


def _contains_pattern(text: str) -> str:
    """LIKE pattern matching ``text`` literally anywhere, lower-cased."""
    escaped = text.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ProductStore:
    """Manages inventory records."""

    def __init__(self):
        """Initialize product store."""
        self.db = get_database()

    async def list_products(
        self,
        company: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Product]:
        """List products in insertion order.

        Args:
            company: Case-insensitive substring filter on company
            search: Case-insensitive substring filter on product name

        Returns:
            List of Product objects
        """
        clauses = []
        params = []
        if company:
            clauses.append("LOWER(company) LIKE ? ESCAPE '\\'")
            params.append(_contains_pattern(company))
        if search:
            clauses.append("LOWER(name) LIKE ? ESCAPE '\\'")
            params.append(_contains_pattern(search))

        query = "SELECT * FROM products"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY created_at, id"

        async with self.db.connection() as conn:
            cursor = await conn.execute(query, tuple(params))
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def list_by_company(self, company: Optional[str] = None) -> List[Product]:
        """Products for export: exact company match, or everything when None."""
        async with self.db.connection() as conn:
            if company:
                cursor = await conn.execute(
                    "SELECT * FROM products WHERE company = ? ORDER BY created_at, id",
                    (company,),
                )
            else:
                cursor = await conn.execute(
                    "SELECT * FROM products ORDER BY created_at, id",
                )
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def get_product(self, product_id: str) -> Optional[Product]:
        """Get a single product.

        Args:
            product_id: Product identifier

        Returns:
            Product if found, None otherwise
        """
        async with self.db.connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE id = ?",
                (product_id,),
            )
            row = await cursor.fetchone()
            return self._row_to_product(row) if row else None

    async def create_product(self, data: ProductCreate) -> Product:
        """Insert a new product and return it with its generated id."""
        product_id = str(uuid.uuid4())
        now = datetime.utcnow().isoformat()

        async with self.db.connection() as conn:
            await conn.execute(
                """
                INSERT INTO products
                    (id, name, quantity, price, company, type, description, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    product_id,
                    data.name,
                    data.quantity,
                    data.price,
                    data.company,
                    data.type,
                    data.description,
                    now,
                    now,
                ),
            )
            await conn.commit()

        logger.info(f"Created product {product_id} ({data.name})")

        return Product(
            id=product_id,
            created_at=now,
            updated_at=now,
            **data.model_dump(),
        )

    async def update_product(self, product_id: str, changes: dict) -> Optional[Product]:
        """Apply a partial update.

        Args:
            product_id: Product identifier
            changes: Mapping of column name to new value; unknown keys are ignored

        Returns:
            The updated Product, or None if it does not exist
        """
        fields = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        fields["updated_at"] = datetime.utcnow().isoformat()

        assignments = ", ".join(f"{column} = ?" for column in fields)
        params = tuple(fields.values()) + (product_id,)

        async with self.db.connection() as conn:
            cursor = await conn.execute(
                f"UPDATE products SET {assignments} WHERE id = ?",
                params,
            )
            await conn.commit()
            if cursor.rowcount == 0:
                return None

        logger.info(f"Updated product {product_id}: {', '.join(sorted(fields))}")
        return await self.get_product(product_id)

    async def set_quantity(self, product_id: str, quantity: int) -> Optional[Product]:
        """Set the stock level of a product."""
        return await self.update_product(product_id, {"quantity": quantity})

    async def delete_product(self, product_id: str) -> bool:
        """Delete a product.

        Returns:
            True if deleted, False if not found
        """
        async with self.db.connection() as conn:
            cursor = await conn.execute(
                "DELETE FROM products WHERE id = ?",
                (product_id,),
            )
            await conn.commit()
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted product {product_id}")
        return deleted

    async def list_companies(self) -> List[str]:
        """Distinct company names, sorted."""
        async with self.db.connection() as conn:
            cursor = await conn.execute(
                "SELECT DISTINCT company FROM products ORDER BY company",
            )
            rows = await cursor.fetchall()
            return [row["company"] for row in rows]

    def _row_to_product(self, row) -> Product:
        """Convert database row to Product object."""
        return Product(
            id=row["id"],
            name=row["name"],
            quantity=row["quantity"],
            price=row["price"],
            company=row["company"],
            type=row["type"],
            description=row["description"] or "",
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


# Singleton instance
_store: Optional[ProductStore] = None


def get_product_store() -> ProductStore:
    """Get the singleton product store instance."""
    global _store
    if _store is None:
        _store = ProductStore()
    return _store
