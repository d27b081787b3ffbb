"""Tests for resolve_products — decode then fetch, failures propagate unchanged."""

import pytest

from storefront.core.errors import ProviderUnavailableError
from storefront.core.product_params import QueryParameterSet
from storefront.services.resolve_products import resolve_products


async def test_resolves_payload_with_decoded_params(provider):
    payload = await resolve_products({"q": ["shoes"], "page": ["2"]}, provider)
    assert payload.params == QueryParameterSet(q="shoes", page=2)
    assert [r.id for r in payload.records] == list(range(9, 17))
    assert all("shoes" in r.name for r in payload.records)


async def test_malformed_params_resolve_with_defaults(provider, store):
    payload = await resolve_products({"page": "banana", "junk": "1"}, provider)
    assert payload.params == QueryParameterSet()
    assert store.calls == [("", 1)]


async def test_exactly_one_fetch_per_resolve(provider, store):
    await resolve_products({}, provider)
    assert len(store.calls) == 1


async def test_payload_records_are_immutable_tuple(provider):
    payload = await resolve_products({}, provider)
    assert isinstance(payload.records, tuple)
    assert not payload.is_empty


async def test_provider_failure_propagates_without_fallback(provider, store, unavailable):
    store.fail_with = unavailable
    with pytest.raises(ProviderUnavailableError) as exc_info:
        await resolve_products({"q": "x"}, provider)
    assert exc_info.value is unavailable
    assert len(store.calls) == 1
