# -*- coding: utf-8 -*-
"""
FastAPI routes for the Product CRUD.

Handlers only parse bodies and pick success codes; errors raised by the
service are mapped to status codes by the handlers in `catalog.app`.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from catalog.database import get_db
from catalog.repositories.product_repository import ProductRepository
from catalog.schemas.product import ProductCreate, ProductRead, ProductUpdate
from catalog.services.product_service import ProductService

router = APIRouter(
    tags=["Products"],
    responses={404: {"description": "Product not found"}},
)


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)


def get_product_service(
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductService:
    return ProductService(repository)


# --- CRUD Endpoints ---

@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(product: ProductCreate, service: ProductService = Depends(get_product_service)):
    """
    Creates a new product.
    """
    return service.create(product.name, product.price)


@router.get("", response_model=List[ProductRead])
def read_products(service: ProductService = Depends(get_product_service)):
    """
    Lists every product, in storage order.
    """
    return service.list_all()


# product_id stays a str so malformed ids reach ProductService and come back as 400
@router.get("/{product_id}", response_model=ProductRead)
def read_product(product_id: str, service: ProductService = Depends(get_product_service)):
    """
    Returns a single product by id.
    """
    return service.get(product_id)


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: str,
    product: ProductUpdate,
    service: ProductService = Depends(get_product_service),
):
    """
    Replaces the name and price of an existing product.
    """
    return service.update(product_id, product.name, product.price)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: str, service: ProductService = Depends(get_product_service)):
    service.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
