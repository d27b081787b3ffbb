"""Tests for ProductsShell and ProductsNavigation — pending first, one terminal outcome."""

import asyncio

import pytest

from storefront.core.boundary import BoundaryStatus, Failed, Pending, Resolved
from storefront.core.domain_types import RenderPayload
from storefront.core.product_params import QueryParameterSet
from storefront.presentation.address import AddressState
from storefront.presentation.products_view import ERROR_TITLE
from storefront.services.product_provider import listing_cache_key
from storefront.services.products_shell import ProductsNavigation, ProductsShell
from storefront.services.resolve_products import resolve_products


def _resolver(provider):
    async def resolve(raw):
        return await resolve_products(raw, provider)
    return resolve


async def test_render_before_settle_shows_pending_placeholder(provider):
    shell = ProductsShell(AddressState("/products", {"q": "shoes"}), _resolver(provider))
    shell.start()

    html = shell.render()

    assert isinstance(shell.state, Pending)
    assert 'data-state="pending"' in html
    assert 'aria-busy="true"' in html
    assert "product-card" not in html
    shell.cancel()


async def test_settle_resolves_and_renders_view(provider):
    shell = ProductsShell(AddressState("/products", {"q": "shoes"}), _resolver(provider))
    shell.start()

    state = await shell.settle()

    assert isinstance(state, Resolved)
    assert isinstance(state.payload, RenderPayload)
    html = shell.render()
    assert 'data-state="resolved"' in html
    assert html.count('class="product-card"') == 8
    assert "Product 1 (shoes)" in html


async def test_provider_failure_renders_failed_placeholder(provider, store, unavailable):
    store.fail_with = unavailable
    shell = ProductsShell(AddressState(), _resolver(provider))

    state = await shell.settle()

    assert isinstance(state, Failed)
    assert state.error is unavailable
    html = shell.render()
    assert ERROR_TITLE in html
    assert "product-card" not in html
    assert "catalog backend unreachable" not in html


async def test_settle_is_idempotent(provider, store):
    shell = ProductsShell(AddressState(), _resolver(provider))
    first = await shell.settle()
    second = await shell.settle()
    assert first is second
    assert len(store.calls) == 1


async def test_concurrent_settles_share_one_resolve(provider, store):
    shell = ProductsShell(AddressState(), _resolver(provider))
    shell.start()
    a, b = await asyncio.gather(shell.settle(), shell.settle())
    assert a is b
    assert len(store.calls) == 1


async def test_stream_yields_pending_frame_before_outcome(provider):
    shell = ProductsShell(AddressState("/products", {"page": "2"}), _resolver(provider))
    shell.start()

    chunks = [chunk async for chunk in shell.stream()]

    assert len(chunks) == 3
    assert 'data-state="pending"' in chunks[0]
    assert 'aria-busy="true"' in chunks[0]
    assert 'products-boundary-resolved' in chunks[1]
    assert "Product 9" in chunks[1]
    assert chunks[2].rstrip().endswith("</html>")


async def test_stream_after_settle_labels_opening_frame_pending(provider):
    shell = ProductsShell(AddressState(), _resolver(provider))
    shell.start()
    await shell.settle()

    chunks = [chunk async for chunk in shell.stream()]

    assert 'data-state="pending"' in chunks[0]
    assert 'data-state="resolved"' not in chunks[0]
    assert 'products-boundary-resolved' in chunks[1]


async def test_stream_failure_patch_is_error_placeholder(provider, store, unavailable):
    store.fail_with = unavailable
    shell = ProductsShell(AddressState(), _resolver(provider))

    chunks = [chunk async for chunk in shell.stream()]

    assert 'data-state="pending"' in chunks[0]
    assert 'products-boundary-failed' in chunks[1]
    assert ERROR_TITLE in chunks[1]
    assert "product-card" not in "".join(chunks)


async def test_abandoned_shell_leaves_no_cache_entry(provider, store, cache):
    store.gate = asyncio.Event()
    shell = ProductsShell(AddressState(), _resolver(provider))
    shell.start()
    await store.started.wait()

    shell.cancel()
    with pytest.raises(asyncio.CancelledError):
        await shell.settle()

    assert isinstance(shell.state, Pending)
    assert await cache.get(listing_cache_key(QueryParameterSet())) is None


async def test_stream_closed_early_cancels_logic_stage(provider, store):
    store.gate = asyncio.Event()
    shell = ProductsShell(AddressState(), _resolver(provider))
    shell.start()
    stream = shell.stream()

    first = await stream.__anext__()
    assert 'data-state="pending"' in first
    pending = asyncio.ensure_future(stream.__anext__())
    await store.started.wait()
    pending.cancel()
    with pytest.raises(asyncio.CancelledError):
        await pending

    assert shell.state.status == BoundaryStatus.PENDING
    assert shell._task.cancelled()


# -- ProductsNavigation ---------------------------------------------------------

async def test_search_edit_shows_new_value_while_refetch_pending(provider, store):
    navigation = ProductsNavigation(AddressState(), _resolver(provider))
    await navigation.current.settle()
    view = navigation.current.view

    store.gate = asyncio.Event()
    view.on_search_input("shoes")

    # displayed value updated synchronously, before the new resolve completes
    assert view.q == "shoes"
    assert 'value="shoes"' in view.render()
    assert isinstance(navigation.current.state, Pending)
    assert navigation.address.get("q") == "shoes"

    store.gate.set()
    state = await navigation.current.settle()
    assert isinstance(state, Resolved)
    assert state.payload.params.q == "shoes"
    assert all("shoes" in r.name for r in state.payload.records)
    navigation.close()


async def test_rapid_edits_cancel_superseded_render(provider, store):
    navigation = ProductsNavigation(AddressState(), _resolver(provider))
    await navigation.current.settle()
    view = navigation.current.view

    store.gate = asyncio.Event()
    store.started.clear()
    view.on_search_input("s")
    superseded = navigation.current
    await store.started.wait()
    view.on_search_input("sh")
    store.gate.set()

    with pytest.raises(asyncio.CancelledError):
        await superseded.settle()
    state = await navigation.current.settle()
    assert state.payload.params.q == "sh"
    navigation.close()


async def test_external_address_change_starts_new_render(provider):
    address = AddressState()
    navigation = ProductsNavigation(address, _resolver(provider))
    first = navigation.current

    address.update({"page": "3"})

    assert navigation.current is not first
    state = await navigation.current.settle()
    assert state.payload.params.page == 3
    navigation.close()
