"""Products API — JSON access to the listing pipeline and the create write path.

Invariants:
    - GET resolves through the same logic stage as the HTML page
    - ProviderUnavailableError propagates to the global handler (503 envelope)
    - POST never raises on a failed write: the MutationResult is returned as-is

Design Decisions:
    - Failed mutation answered with 503 + {success: false}: the body stays the
      same shape for both outcomes so callers only check `success`
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from storefront.api.dependencies import (
    get_create_product_handler, get_product_provider,
)
from storefront.api.routes.products_page import raw_query_params
from storefront.schemas.product import (
    MutationResultResponse, ProductCreate, ProductListResponse,
)
from storefront.services.create_product import CreateProductHandler
from storefront.services.product_provider import ProductProvider
from storefront.services.resolve_products import resolve_products

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    request: Request,
    provider: ProductProvider = Depends(get_product_provider),
):
    """Resolve one listing page from the query string."""
    payload = await resolve_products(raw_query_params(request), provider)
    return ProductListResponse.from_payload(payload)


@router.post(
    "", response_model=MutationResultResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductCreate,
    handler: CreateProductHandler = Depends(get_create_product_handler),
):
    """Create a product; cached listings are marked stale on success."""
    result = await handler.apply(body)
    response = MutationResultResponse(
        success=result.success,
        product_id=result.product_id,
        error_code=result.error_code,
    )
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )
    return response
