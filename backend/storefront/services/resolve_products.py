"""Resolve Products — the logic stage: decode raw params, then fetch one page.

Invariants:
    - decode strictly precedes fetch; exactly one fetch per resolve call
    - Provider failures propagate unchanged (no retry, no partial result)
    - This is the only suspension point of the products page pipeline
"""

import logging

from storefront.core.domain_types import RenderPayload
from storefront.core.product_params import RawParams, decode_with_report
from storefront.services.product_provider import ProductProvider

logger = logging.getLogger(__name__)


async def resolve_products(
    raw: RawParams, provider: ProductProvider,
) -> RenderPayload:
    """Resolve raw query params into a render-ready payload."""
    params, defaulted = decode_with_report(raw)
    if defaulted:
        logger.debug(
            "Query params replaced by defaults",
            extra={"defaulted": list(defaulted)},
        )
    records = await provider.fetch(params)
    return RenderPayload(records=tuple(records), params=params)
