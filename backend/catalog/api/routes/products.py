"""Product Routes — CRUD endpoints over the catalog.

Invariants:
    - Routes never contain pricing or validation logic (CatalogService owns it)
    - POST answers 201 with a Location header for the new product
    - PUT and DELETE answer 204 with no body
    - Domain failures raise CatalogError; the global handler renders them

Design Decisions:
    - get_catalog_service dependency builds one store + service per request
      session, so tests can override get_db alone
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.domain_types import ProductId
from catalog.infrastructure.database import get_db
from catalog.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from catalog.services.catalog_service import CatalogService
from catalog.services.product_store import SqlAlchemyProductStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/products", tags=["products"])


def get_catalog_service(db: AsyncSession = Depends(get_db)) -> CatalogService:
    return CatalogService(SqlAlchemyProductStore(db))


@router.get("", response_model=list[ProductResponse])
async def list_products(service: CatalogService = Depends(get_catalog_service)):
    """List all products."""
    return await service.list_products()


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int, service: CatalogService = Depends(get_catalog_service),
):
    """Get a product by id."""
    return await service.get_product(ProductId(product_id))


@router.post(
    "", response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductCreate,
    response: Response,
    service: CatalogService = Depends(get_catalog_service),
):
    """Create a product. Price is computed server-side."""
    created = await service.create_product(body.to_domain())
    response.headers["Location"] = f"{router.prefix}/{created.id}"
    return created


@router.put("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_product(
    product_id: int,
    body: ProductUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    """Replace all fields of an existing product."""
    await service.update_product(ProductId(product_id), body.to_domain())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int, service: CatalogService = Depends(get_catalog_service),
):
    """Delete a product."""
    await service.delete_product(ProductId(product_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
