from sqlalchemy.orm import Session, selectinload
from typing import List
import logging

from storefront.models.category import Category
from storefront.models.product import Product
from storefront.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryNotEmptyError(Exception):
    """Raised when deleting a category that still owns products"""


class CategoryService:
    """Service layer for category operations"""

    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> List[Category]:
        """List all categories with their products eagerly loaded"""
        return (
            self.db.query(Category)
            .options(selectinload(Category.products))
            .order_by(Category.id)
            .all()
        )

    def get_category_by_id(self, category_id: int) -> Category:
        """Get a category by ID"""
        category = (
            self.db.query(Category)
            .options(selectinload(Category.products))
            .filter(Category.id == category_id)
            .first()
        )

        if not category:
            raise ValueError("Category not found")

        return category

    def create_category(self, category_data: CategoryCreate) -> Category:
        category = Category(name=category_data.name)

        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)

        logger.info(f"Created category {category.id} ({category.name})")
        return category

    def update_category(self, category_id: int, category_data: CategoryUpdate) -> Category:
        category = self.get_category_by_id(category_id)

        update_data = category_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(category, field, value)

        self.db.commit()
        self.db.refresh(category)

        logger.info(f"Updated category {category.id}: {sorted(update_data)}")
        return category

    def delete_category(self, category_id: int) -> None:
        category = self.db.query(Category).filter(Category.id == category_id).first()

        if not category:
            raise ValueError("Category not found")

        product_count = self.db.query(Product).filter(Product.category_id == category_id).count()
        if product_count:
            raise CategoryNotEmptyError(
                f"Category {category_id} still has {product_count} product(s)"
            )

        self.db.delete(category)
        self.db.commit()

        logger.info(f"Deleted category {category_id}")
