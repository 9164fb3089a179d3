from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional
from storefront.db.database import get_db
from storefront.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from storefront.services.product_service import ProductService

router = APIRouter(
    prefix="/product",
    tags=["Products"]
)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency to get product service"""
    return ProductService(db)


@router.api_route(
    "",
    methods=["GET", "HEAD"],
    response_model=List[ProductResponse],
    summary="List products",
    description="""
    Get every product, ordered by ID.

    **Filtering:**
    - `category_id`: only return products owned by this category
    """,
    responses={
        200: {"description": "List of products"}
    }
)
def list_products(
    category_id: Optional[int] = Query(None, description="Filter by owning category ID"),
    product_service: ProductService = Depends(get_product_service)
):
    return product_service.list_products(category_id=category_id)


@router.api_route(
    "/{product_id}",
    methods=["GET", "HEAD"],
    response_model=ProductResponse,
    summary="Get product by ID",
    responses={
        200: {"description": "Product found"},
        404: {"description": "Product not found"}
    }
)
def get_product(
    product_id: int,
    product_service: ProductService = Depends(get_product_service)
):
    try:
        return product_service.get_product_by_id(product_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
    description="""
    Create a product inside an existing category.

    **Requirements:**
    - `category_id` must reference an existing category
    """,
    responses={
        201: {"description": "Product created successfully"},
        404: {"description": "Category not found"},
        422: {"description": "Malformed or mistyped request body"}
    }
)
def create_product(
    product_data: ProductCreate,
    product_service: ProductService = Depends(get_product_service)
):
    try:
        return product_service.create_product(product_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Update a product",
    description="""
    Update an existing product.

    **Partial Updates:**
    Only provided fields will be updated. Omitted fields remain unchanged.
    """,
    responses={
        200: {"description": "Product updated successfully"},
        404: {"description": "Product or category not found"},
        422: {"description": "Malformed or mistyped request body"}
    }
)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    product_service: ProductService = Depends(get_product_service)
):
    try:
        return product_service.update_product(product_id, product_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a product",
    responses={
        204: {"description": "Product deleted successfully"},
        404: {"description": "Product not found"}
    }
)
def delete_product(
    product_id: int,
    product_service: ProductService = Depends(get_product_service)
):
    try:
        product_service.delete_product(product_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
