"""Products View — synchronous renderer for a resolved products listing.

Invariants:
    - render() never awaits and never calls the provider or the write path
    - Empty records render the explicit empty-state message, not an empty grid
    - Displayed search value is always the bound q (updated before any re-fetch)
"""

from dataclasses import replace

from storefront.core.domain_types import RenderPayload
from storefront.core.product_params import to_query_string
from storefront.presentation.address import AddressState
from storefront.presentation.query_binding import QueryStateBinding
from storefront.presentation.template_env import render_template

EMPTY_MESSAGE = "No products found matching your search."
ERROR_TITLE = "Error Loading Products"
ERROR_MESSAGE = "Something went wrong while fetching the data. Please try again."

LOADING_CARD_COUNT = 8


class ProductsView:
    """Listing grid plus the search box bound to the address q param."""

    def __init__(self, payload: RenderPayload, address: AddressState):
        self.payload = payload
        self.address = address
        self.search = QueryStateBinding(address)

    @property
    def q(self) -> str:
        return self.search.value

    def on_search_input(self, value: str) -> None:
        self.search.set(value)

    def close(self) -> None:
        self.search.unmount()

    def _page_href(self, page: int) -> str:
        params = replace(self.payload.params, page=page)
        qs = to_query_string(params)
        return f"{self.address.path}?{qs}" if qs else self.address.path

    def render(self) -> str:
        page = self.payload.params.page
        return render_template(
            "products_view.html.j2",
            q=self.q,
            products=self.payload.records,
            empty_message=EMPTY_MESSAGE,
            page=page,
            prev_href=self._page_href(page - 1) if page > 1 else None,
            next_href=self._page_href(page + 1),
        )


def render_loading() -> str:
    return render_template("products_loading.html.j2", cards=LOADING_CARD_COUNT)


def render_error() -> str:
    return render_template(
        "products_error.html.j2", title=ERROR_TITLE, message=ERROR_MESSAGE,
    )
