# -*- coding: utf-8 -*-
"""
SQLAlchemy model for the Product entity.
"""
from sqlalchemy import CheckConstraint, Column, Float, Integer, Text

from catalog.database import Base


class Product(Base):
    __tablename__ = 'products'
    # last line of defense; ProductService validates first
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("name <> ''", name="ck_products_name_not_empty"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    price = Column(Float, nullable=False)

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} price={self.price}>"
