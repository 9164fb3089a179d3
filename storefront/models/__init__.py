# Package exports - these allow cleaner imports like:
# from storefront.models import Product, Category
# Importing both also registers them on Base.metadata before mappers configure
from storefront.models.product import Product
from storefront.models.category import Category
