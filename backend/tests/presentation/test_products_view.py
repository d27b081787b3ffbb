"""Tests for ProductsView and QueryStateBinding — sync render, two-way q binding."""

from storefront.core.domain_types import ProductId, ProductRecord, RenderPayload
from storefront.core.product_params import QueryParameterSet
from storefront.presentation.address import AddressState
from storefront.presentation.products_view import (
    EMPTY_MESSAGE, ERROR_MESSAGE, ERROR_TITLE, ProductsView,
    render_error, render_loading,
)
from storefront.presentation.query_binding import QueryStateBinding


def _payload(count=2, q="", page=1):
    records = tuple(
        ProductRecord(
            id=ProductId(i), name=f"Product {i}", price=100 + i,
            description="desc",
        )
        for i in range(1, count + 1)
    )
    return RenderPayload(records=records, params=QueryParameterSet(q=q, page=page))


# -- QueryStateBinding ----------------------------------------------------------

def test_binding_initializes_from_address():
    binding = QueryStateBinding(AddressState("/products", {"q": "lamps"}))
    assert binding.value == "lamps"


def test_binding_defaults_to_empty_string():
    assert QueryStateBinding(AddressState()).value == ""


def test_binding_set_pushes_to_address():
    address = AddressState()
    binding = QueryStateBinding(address)

    binding.set("chairs")

    assert binding.value == "chairs"
    assert address.get("q") == "chairs"


def test_binding_resyncs_on_external_address_change():
    address = AddressState()
    binding = QueryStateBinding(address)

    address.update({"q": "tables"})

    assert binding.value == "tables"


def test_binding_local_value_updated_before_listeners_run():
    address = AddressState()
    binding = QueryStateBinding(address)
    observed = []
    address.subscribe(lambda params: observed.append(binding.value))

    binding.set("desks")

    assert observed == ["desks"]


def test_unmounted_binding_stops_resyncing():
    address = AddressState()
    binding = QueryStateBinding(address)
    binding.unmount()

    address.update({"q": "later"})

    assert binding.value == ""


# -- ProductsView ---------------------------------------------------------------

def test_render_lists_every_record():
    html = ProductsView(_payload(count=3), AddressState()).render()
    assert html.count('class="product-card"') == 3
    assert "Product 3" in html
    assert "$103" in html


def test_empty_records_render_empty_state_message():
    html = ProductsView(_payload(count=0), AddressState()).render()
    assert EMPTY_MESSAGE in html
    assert "products-grid" not in html


def test_search_box_shows_bound_value():
    view = ProductsView(_payload(q="shoes"), AddressState("/products", {"q": "shoes"}))
    assert 'value="shoes"' in view.render()


def test_search_input_updates_displayed_value_synchronously():
    address = AddressState()
    view = ProductsView(_payload(), address)

    view.on_search_input("boots")

    assert view.q == "boots"
    assert 'value="boots"' in view.render()
    assert address.get("q") == "boots"


def test_user_text_is_escaped():
    address = AddressState("/products", {"q": "<script>x</script>"})
    html = ProductsView(_payload(), address).render()
    assert "<script>x</script>" not in html
    assert "&lt;script&gt;" in html


def test_first_page_has_no_previous_link():
    html = ProductsView(_payload(page=1), AddressState()).render()
    assert 'rel="prev"' not in html
    assert 'href="/products?page=2"' in html


def test_page_links_keep_query():
    address = AddressState("/products", {"q": "hats", "page": "2"})
    html = ProductsView(_payload(q="hats", page=2), address).render()
    assert 'href="/products?q=hats"' in html
    assert 'href="/products?q=hats&amp;page=3"' in html


def test_loading_placeholder_has_fixed_card_count():
    html = render_loading()
    assert 'aria-busy="true"' in html
    assert html.count('class="skeleton-card"') == 8


def test_error_placeholder_is_generic():
    html = render_error()
    assert ERROR_TITLE in html
    assert ERROR_MESSAGE in html
