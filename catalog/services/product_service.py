# -*- coding: utf-8 -*-
"""
Product service: request validation in front of the repository.

Holds no state between calls. Bad input is rejected with `InvalidInput`
before the repository is touched; repository errors pass through unchanged.
"""

import logging
import math
import re
from typing import List

from catalog.errors import InvalidInput
from catalog.models.product import Product
from catalog.repositories.product_repository import ProductRepository

# ASCII digits only: no whitespace, underscores or other Unicode digits
_ID_PATTERN = re.compile(r"-?[0-9]+")


def parse_product_id(raw) -> int:
    """Turn a path segment into a product id, or raise InvalidInput."""
    if isinstance(raw, bool):
        raise InvalidInput(f"Invalid product id: {raw!r}")
    if isinstance(raw, int):
        return raw
    if not isinstance(raw, str) or not _ID_PATTERN.fullmatch(raw):
        raise InvalidInput(f"Invalid product id: {raw!r}")
    return int(raw)


def validate_product(name, price) -> None:
    if not isinstance(name, str) or not name.strip():
        raise InvalidInput("Product name must be a non-empty string")
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise InvalidInput("Product price must be a number")
    if not math.isfinite(price):
        raise InvalidInput("Product price must be a finite number")
    if price < 0:
        raise InvalidInput("Product price must not be negative")


class ProductService:

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def create(self, name: str, price: float) -> Product:
        validate_product(name, price)
        product = self.repository.insert(name, price)
        logging.info(f"Product {product.id} created")
        return product

    def list_all(self) -> List[Product]:
        return self.repository.list_all()

    def get(self, product_id) -> Product:
        return self.repository.get_by_id(parse_product_id(product_id))

    def update(self, product_id, name: str, price: float) -> Product:
        """Full replace of name and price. Raises NotFound for unknown ids."""
        pid = parse_product_id(product_id)
        validate_product(name, price)
        product = self.repository.update(pid, name, price)
        logging.info(f"Product {pid} updated")
        return product

    def delete(self, product_id) -> None:
        pid = parse_product_id(product_id)
        self.repository.delete_by_id(pid)
        logging.info(f"Product {pid} deleted")
