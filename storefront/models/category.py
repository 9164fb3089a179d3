from sqlalchemy import Column, Integer, Text, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from storefront.db.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Deleting a category that still owns products is refused, never cascaded
    products = relationship(
        "Product",
        back_populates="category",
        order_by="Product.id",
        passive_deletes="all",
    )
