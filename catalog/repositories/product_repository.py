# -*- coding: utf-8 -*-
"""
Persistence gateway for products.

All store access for the Product table goes through `ProductRepository`.
SQLAlchemy exceptions never leave this module: integrity and data errors become
`ConstraintViolation`, anything else becomes `StoreUnavailable`. No retries.
"""

import logging
from contextlib import contextmanager
from typing import List

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.errors import ConstraintViolation, NotFound, StoreUnavailable
from catalog.models.product import Product

# ids are stored as signed 64-bit integers at most
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


class ProductRepository:
    """CRUD over the `products` table using one request-scoped session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _store_errors(self, action: str):
        try:
            yield
        except (IntegrityError, DataError) as e:
            self.db.rollback()
            logging.warning(f"Constraint violation while trying to {action}: {e.orig}")
            raise ConstraintViolation("Product violates a storage constraint") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logging.error(f"Store error while trying to {action}: {e}")
            raise StoreUnavailable("Product store is unavailable") from e

    def _get_or_raise(self, product_id: int) -> Product:
        if not MIN_ID <= product_id <= MAX_ID:
            raise NotFound(f"Product {product_id} not found")
        db_product = self.db.get(Product, product_id)
        if db_product is None:
            raise NotFound(f"Product {product_id} not found")
        return db_product

    def insert(self, name: str, price: float) -> Product:
        with self._store_errors("insert product"):
            db_product = Product(name=name, price=price)
            self.db.add(db_product)
            self.db.commit()
            self.db.refresh(db_product)
        return db_product

    def list_all(self) -> List[Product]:
        with self._store_errors("list products"):
            return self.db.query(Product).all()

    def get_by_id(self, product_id: int) -> Product:
        with self._store_errors(f"get product {product_id}"):
            return self._get_or_raise(product_id)

    def update(self, product_id: int, name: str, price: float) -> Product:
        with self._store_errors(f"update product {product_id}"):
            db_product = self._get_or_raise(product_id)
            db_product.name = name
            db_product.price = price
            self.db.commit()
            self.db.refresh(db_product)
        return db_product

    def delete_by_id(self, product_id: int) -> None:
        with self._store_errors(f"delete product {product_id}"):
            db_product = self._get_or_raise(product_id)
            self.db.delete(db_product)
            self.db.commit()
