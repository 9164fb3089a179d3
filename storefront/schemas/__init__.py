# Package exports - these allow cleaner imports like:
# from storefront.schemas import ProductCreate, ProductResponse
from storefront.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from storefront.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse, CategoryWithProductsResponse
