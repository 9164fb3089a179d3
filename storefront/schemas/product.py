from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


class ProductCreate(BaseModel):
    name: str = Field(..., description="Product name", example="USB-C Cable")
    description: Optional[str] = Field(None, description="Product description", example="1m braided cable")
    price_cents: int = Field(..., description="Price in cents", example=1299)
    category_id: int = Field(..., description="Owning category ID", example=1)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, description="Product name", example="USB-C Cable (2m)")
    description: Optional[str] = Field(None, description="Product description")
    price_cents: Optional[int] = Field(None, description="Price in cents", example=1599)
    category_id: Optional[int] = Field(None, description="Owning category ID", example=2)

    @field_validator("name", "price_cents", "category_id")
    @classmethod
    def reject_null(cls, value, info):
        # Omit a field to leave it unchanged; these columns cannot be cleared
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class ProductResponse(BaseModel):
    id: int = Field(..., description="Product ID", example=7)
    name: str = Field(..., description="Product name", example="USB-C Cable")
    description: Optional[str] = Field(None, description="Product description")
    price_cents: int = Field(..., description="Price in cents", example=1299)
    category_id: int = Field(..., description="Owning category ID", example=1)
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 7,
                "name": "USB-C Cable",
                "description": "1m braided cable",
                "price_cents": 1299,
                "category_id": 1,
                "created_at": "2024-01-15T10:31:00Z",
                "updated_at": "2024-01-15T10:31:00Z"
            }
        }
