"""Tests for the Storefront error hierarchy — codes, statuses, response envelope."""

from storefront.core.errors import (
    DatabaseError, ErrorCategory, ErrorContext, MutationFailedError,
    ProviderUnavailableError,
)


def test_provider_unavailable_is_503_external():
    err = ProviderUnavailableError("backend down")
    assert err.http_status == 503
    assert err.code == "PROVIDER_UNAVAILABLE"
    assert err.category == ErrorCategory.EXTERNAL_API


def test_mutation_failed_is_database_category():
    err = MutationFailedError("insert rejected")
    assert err.code == "MUTATION_FAILED"
    assert err.category == ErrorCategory.DATABASE


def test_response_envelope_carries_context():
    err = ProviderUnavailableError(
        "down", ErrorContext(resource="products", query="shoes", page=2),
    )
    body = err.to_response()["error"]
    assert body["code"] == "PROVIDER_UNAVAILABLE"
    assert body["context"] == {"resource": "products", "query": "shoes", "page": 2}



def test_database_error_keeps_operation():
    err = DatabaseError("connection refused", "session")
    assert err.http_status == 503
    assert err.operation == "session"
    assert "Database session failed" in err.message
