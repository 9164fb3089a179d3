from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from storefront.models.category import Category
from storefront.models.product import Product
from storefront.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """Service layer for product operations"""

    def __init__(self, db: Session):
        self.db = db

    def _ensure_category_exists(self, category_id: int) -> None:
        category = self.db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise ValueError(f"Category not found: {category_id}")

    def list_products(self, category_id: Optional[int] = None) -> List[Product]:
        """List all products, optionally restricted to one category"""
        query = self.db.query(Product)

        if category_id is not None:
            query = query.filter(Product.category_id == category_id)

        return query.order_by(Product.id).all()

    def get_product_by_id(self, product_id: int) -> Product:
        """Get a product by ID"""
        product = self.db.query(Product).filter(Product.id == product_id).first()

        if not product:
            raise ValueError("Product not found")

        return product

    def create_product(self, product_data: ProductCreate) -> Product:
        """Create a new product"""
        self._ensure_category_exists(product_data.category_id)

        product = Product(
            name=product_data.name,
            description=product_data.description,
            price_cents=product_data.price_cents,
            category_id=product_data.category_id,
        )

        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)

        logger.info(f"Created product {product.id} in category {product.category_id}")
        return product

    def update_product(self, product_id: int, product_data: ProductUpdate) -> Product:
        """Update a product; only fields present in the request change"""
        product = self.get_product_by_id(product_id)

        if product_data.category_id is not None:
            self._ensure_category_exists(product_data.category_id)

        update_data = product_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(product, field, value)

        self.db.commit()
        self.db.refresh(product)

        logger.info(f"Updated product {product.id}: {sorted(update_data)}")
        return product

    def delete_product(self, product_id: int) -> None:
        product = self.get_product_by_id(product_id)

        self.db.delete(product)
        self.db.commit()

        logger.info(f"Deleted product {product_id}")
