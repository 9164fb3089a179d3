# Package exports - these allow cleaner imports like:
# from storefront.services import CategoryService, ProductService
from storefront.services.category_service import CategoryService, CategoryNotEmptyError
from storefront.services.product_service import ProductService
