from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import List
from storefront.db.database import get_db
from storefront.schemas.category import CategoryCreate, CategoryUpdate, CategoryWithProductsResponse
from storefront.services.category_service import CategoryService, CategoryNotEmptyError

router = APIRouter(
    prefix="/category",
    tags=["Categories"]
)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    """Dependency to get category service"""
    return CategoryService(db)


@router.api_route(
    "",
    methods=["GET", "HEAD"],
    response_model=List[CategoryWithProductsResponse],
    summary="List all categories",
    description="""
    Get every category, ordered by ID, each with its products embedded.

    **Response:**
    - `products` is always present and may be an empty array
    - Every call re-reads the database; there is no caching
    """,
    responses={
        200: {"description": "List of categories with their products"}
    }
)
def list_categories(
    category_service: CategoryService = Depends(get_category_service)
):
    """List all categories with nested products"""
    return category_service.list_categories()


@router.api_route(
    "/{category_id}",
    methods=["GET", "HEAD"],
    response_model=CategoryWithProductsResponse,
    summary="Get category by ID",
    responses={
        200: {"description": "Category found"},
        404: {"description": "Category not found"}
    }
)
def get_category(
    category_id: int,
    category_service: CategoryService = Depends(get_category_service)
):
    """Get a category with its products"""
    try:
        return category_service.get_category_by_id(category_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.post(
    "",
    response_model=CategoryWithProductsResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
    responses={
        201: {"description": "Category created successfully"},
        422: {"description": "Malformed or mistyped request body"}
    }
)
def create_category(
    category_data: CategoryCreate,
    category_service: CategoryService = Depends(get_category_service)
):
    return category_service.create_category(category_data)


@router.put(
    "/{category_id}",
    response_model=CategoryWithProductsResponse,
    summary="Update a category",
    description="""
    Update an existing category.

    **Partial Updates:**
    Only provided fields will be updated. Omitted fields remain unchanged.
    """,
    responses={
        200: {"description": "Category updated successfully"},
        404: {"description": "Category not found"}
    }
)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    category_service: CategoryService = Depends(get_category_service)
):
    try:
        return category_service.update_category(category_id, category_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a category",
    description="""
    Delete a category. A category that still owns products cannot be deleted;
    move or delete its products first.
    """,
    responses={
        204: {"description": "Category deleted successfully"},
        404: {"description": "Category not found"},
        409: {"description": "Category still has products"}
    }
)
def delete_category(
    category_id: int,
    category_service: CategoryService = Depends(get_category_service)
):
    try:
        category_service.delete_category(category_id)
    except CategoryNotEmptyError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
