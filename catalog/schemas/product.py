# -*- coding: utf-8 -*-
"""
Pydantic schemas for the Product entity.

Only shapes and types live here, in strict mode: `price` must be a JSON
number and `name` a JSON string. Value rules (non-empty name, non-negative
price) are enforced by `ProductService` so they hold for every caller.
"""

from pydantic import BaseModel, ConfigDict, Field


# Base schema for Product
class ProductBase(BaseModel):
    name: str = Field(..., strict=True)
    price: float = Field(..., strict=True)


# Body for POST /products
class ProductCreate(ProductBase):
    pass


# Body for PUT /products/{id}; a full replace, so both fields are required
class ProductUpdate(ProductBase):
    pass


# Response schema
class ProductRead(ProductBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
