from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
from .common import not_null

class ProductBase(BaseModel):
    name: str = Field(..., min_length=2)
    description: Optional[str] = None
    price: float = Field(..., gt=0)
    category: str = Field(..., min_length=1)
    sku: Optional[str] = None
    image: Optional[str] = None
    stock_quantity: int = Field(0, ge=0)
    min_stock_level: int = Field(0, ge=0)
    in_stock: bool = True

class ProductCreate(ProductBase):
    store_id: int = Field(..., description="Owning store, fixed for the life of the product")

# store_id is deliberately absent: a product never moves between stores
class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2)
    description: Optional[str] = None
    price: Optional[float] = Field(None, gt=0)
    category: Optional[str] = Field(None, min_length=1)
    sku: Optional[str] = None
    image: Optional[str] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)
    in_stock: Optional[bool] = None

    @field_validator("name", "price", "category", "stock_quantity", "min_stock_level", "in_stock")
    @classmethod
    def check_not_null(cls, value):
        return not_null(value)

class ProductBulkUpdate(BaseModel):
    product_ids: List[int] = Field(..., min_length=1)
    updates: ProductUpdate

    @model_validator(mode="after")
    def check_updates_not_empty(self):
        if not self.updates.model_dump(exclude_unset=True):
            raise ValueError("updates must contain at least one field")
        return self

class Product(ProductBase):
    id: int
    store_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class ProductBulkUpdateResult(BaseModel):
    updated_count: int
    products: List[Product]

class ProductCategoryCount(BaseModel):
    category: str
    count: int
