"""Products Page — streamed HTML shell and the results fragment for in-place search.

Invariants:
    - GET /products returns the frame with the loading placeholder before the
      logic stage settles; the settled boundary is streamed into the same response
    - Client disconnect cancels the pending logic stage (no cache write)
    - GET /products/results renders only the boundary content (view or error fragment)

Design Decisions:
    - StreamingResponse over Suspense-style client hydration: the shell chunk
      is flushed immediately, the patch chunk swaps the boundary with a <template>
    - Buffering disabled for proxies (same headers as any streamed response)
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, StreamingResponse

from storefront.api.dependencies import get_product_provider
from storefront.core.errors import StorefrontError
from storefront.presentation.address import AddressState
from storefront.presentation.products_view import ProductsView, render_error
from storefront.services.product_provider import ProductProvider
from storefront.services.products_shell import ProductsShell
from storefront.services.resolve_products import resolve_products

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/products", tags=["products-page"])

PAGE_PATH = "/products"

_STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
}


def raw_query_params(request: Request) -> dict[str, list[str]]:
    """Multi-valued view of the request query, as the codec expects it."""
    params = request.query_params
    return {key: params.getlist(key) for key in params.keys()}


@router.get("", response_class=HTMLResponse)
async def products_page(
    request: Request,
    provider: ProductProvider = Depends(get_product_provider),
):
    """Products page — frame now, listing when resolved."""
    address = AddressState(PAGE_PATH, raw_query_params(request))

    async def resolver(raw):
        return await resolve_products(raw, provider)

    shell = ProductsShell(address, resolver)
    shell.start()
    return StreamingResponse(
        shell.stream(),
        media_type="text/html; charset=utf-8",
        headers=_STREAM_HEADERS,
    )


@router.get("/results", response_class=HTMLResponse)
async def products_results(
    request: Request,
    provider: ProductProvider = Depends(get_product_provider),
):
    """Boundary fragment for the search box: resolved view or error placeholder."""
    raw = raw_query_params(request)
    try:
        payload = await resolve_products(raw, provider)
    except StorefrontError as e:
        logger.error(
            f"Products fragment failed: {e.message}",
            extra={"error_code": e.code, "path": request.url.path},
        )
        return HTMLResponse(render_error(), status_code=e.http_status)

    view = ProductsView(payload, AddressState(PAGE_PATH, raw))
    html = view.render()
    view.close()
    return HTMLResponse(html)
