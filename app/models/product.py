"""Product data models for inventory records."""

from pydantic import BaseModel, Field, field_validator
from typing import Optional

# Stock levels are stored in a 32-bit INTEGER column
MAX_QUANTITY = 2_147_483_647


def _require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class ProductCreate(BaseModel):
    """Request body for adding a product.

    Every field except ``description`` is required. Numeric fields accept
    numeric strings, which is what HTML forms submit.
    """

    name: str = Field(..., description="Product name")
    quantity: int = Field(..., ge=0, le=MAX_QUANTITY, description="Units in stock")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Unit price")
    company: str = Field(..., description="Supplier or brand")
    type: str = Field(..., description="Product category")
    description: str = Field("", description="Free-form notes")

    @field_validator("name", "company", "type")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return _require_text(v)

    @field_validator("description", mode="before")
    @classmethod
    def description_default(cls, v):
        return "" if v is None else v

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Cordless Drill",
                "quantity": 12,
                "price": 89.99,
                "company": "Makita",
                "type": "Power Tools",
                "description": "18V, two batteries",
            }
        }


class ProductUpdate(BaseModel):
    """Request body for editing a product. Omitted fields keep their value."""

    name: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0, le=MAX_QUANTITY)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    company: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name", "company", "type")
    @classmethod
    def text_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _require_text(v)

    def changes(self) -> dict:
        """Fields the client actually supplied."""
        return self.model_dump(exclude_none=True)


class QuantityUpdate(BaseModel):
    """Request body for the stock-level shortcut."""

    quantity: int = Field(..., ge=0, le=MAX_QUANTITY, description="New units in stock")


class Product(BaseModel):
    """A stored inventory record as returned by the API."""

    id: str = Field(..., alias="_id", description="Product identifier")
    name: str
    quantity: int
    price: float
    company: str
    type: str
    description: str = ""
    created_at: str
    updated_at: str

    class Config:
        populate_by_name = True


class ExportRequest(BaseModel):
    """Request body for spreadsheet export."""

    company: Optional[str] = Field(None, description="Only export this company's products")

    @field_validator("company")
    @classmethod
    def blank_means_all(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
