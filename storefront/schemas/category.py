from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from storefront.schemas.product import ProductResponse


class CategoryCreate(BaseModel):
    name: str = Field(..., description="Category name", example="Electronics")


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, description="Category name", example="Home & Garden")

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        if value is None:
            raise ValueError("name cannot be null")
        return value


class CategoryResponse(BaseModel):
    id: int = Field(..., description="Category ID", example=1)
    name: str = Field(..., description="Category name", example="Electronics")
    created_at: datetime = Field(..., description="Creation timestamp")

    class Config:
        from_attributes = True


class CategoryWithProductsResponse(CategoryResponse):
    products: List[ProductResponse] = Field(default_factory=list, description="Products in this category")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Electronics",
                "created_at": "2024-01-15T10:30:00Z",
                "products": [
                    {
                        "id": 7,
                        "name": "USB-C Cable",
                        "description": "1m braided cable",
                        "price_cents": 1299,
                        "category_id": 1,
                        "created_at": "2024-01-15T10:31:00Z",
                        "updated_at": "2024-01-15T10:31:00Z"
                    }
                ]
            }
        }
