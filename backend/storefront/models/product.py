from sqlalchemy import CheckConstraint, Column, Integer, Numeric, String

from storefront.db import Base


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_product_price_non_negative"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(256), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)

    def __repr__(self):
        return f"<Product id={self.id} name={self.name} price={self.price}>"
