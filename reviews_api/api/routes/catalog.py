"""Create and list users, products and comment reviews."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request, status

from reviews_api.api import deps
from reviews_api.core.constants import KIND_PRODUCTS, KIND_REVIEWS, KIND_USERS
from reviews_api.core.exceptions import ValidationError
from reviews_api.services.catalog_service import CatalogService

router = APIRouter(tags=["Catalog"])


async def read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as e:
        raise ValidationError("Request body must be valid JSON.") from e


@router.post("/users", status_code=status.HTTP_201_CREATED)
def create_user(
    body: Any = Depends(read_json_body),
    service: CatalogService = Depends(deps.get_catalog_service),
) -> Dict[str, Any]:
    return service.create(KIND_USERS, body)


@router.get("/users")
def list_users(service: CatalogService = Depends(deps.get_catalog_service)) -> List[Dict[str, Any]]:
    return service.list_documents(KIND_USERS)


@router.post("/products", status_code=status.HTTP_201_CREATED)
def create_product(
    body: Any = Depends(read_json_body),
    service: CatalogService = Depends(deps.get_catalog_service),
) -> Dict[str, Any]:
    return service.create(KIND_PRODUCTS, body)


@router.get("/products")
def list_products(service: CatalogService = Depends(deps.get_catalog_service)) -> List[Dict[str, Any]]:
    return service.list_documents(KIND_PRODUCTS)


@router.post("/reviews", status_code=status.HTTP_201_CREATED)
def create_review(
    body: Any = Depends(read_json_body),
    service: CatalogService = Depends(deps.get_catalog_service),
) -> Dict[str, Any]:
    return service.create(KIND_REVIEWS, body)


@router.get("/reviews")
def list_reviews(service: CatalogService = Depends(deps.get_catalog_service)) -> List[Dict[str, Any]]:
    """Reviews with ``userId`` and ``productId`` replaced by the referenced records."""
    return service.list_reviews()


@router.get("/data")
def dump_data(service: CatalogService = Depends(deps.get_catalog_service)) -> Dict[str, Any]:
    """Users, products and joined reviews in one payload."""
    return service.dump()
