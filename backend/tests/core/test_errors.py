"""Error hierarchy tests — codes, HTTP statuses, and response envelope shape."""

from catalog.core.errors import (
    CatalogError,
    CatalogValidationError,
    DuplicateNameError,
    ErrorCategory,
    ResourceNotFoundError,
    SlugConflictError,
    StorageError,
)


def test_duplicate_name_is_conflict_with_scope():
    err = DuplicateNameError("coffee", {"en": "Latte"})
    assert err.code == "DUPLICATE_NAME"
    assert err.http_status == 409
    assert err.category == ErrorCategory.CONFLICT
    body = err.to_response()["error"]
    assert body["context"]["scope"] == {"category": "coffee", "name": {"en": "Latte"}}


def test_not_found_carries_resource_identity():
    err = ResourceNotFoundError("Product", "latte")
    assert err.code == "NOT_FOUND"
    assert err.http_status == 404
    assert err.to_response()["error"]["context"]["resource_id"] == "latte"


def test_validation_error_records_field():
    err = CatalogValidationError("price must be a non-negative number", "price")
    assert err.code == "VALIDATION_ERROR"
    assert err.http_status == 400
    assert err.field == "price"
    assert err.to_response()["error"]["context"]["scope"] == {"field": "price"}


def test_slug_conflict_is_a_storage_error():
    err = SlugConflictError("latte")
    assert isinstance(err, StorageError)
    assert isinstance(err, CatalogError)
    assert err.code == "STORAGE_ERROR"
    assert err.slug == "latte"


def test_response_envelope_shape():
    body = StorageError("timeout", "exists_slug").to_response()["error"]
    assert set(body) == {"code", "message", "category", "severity", "timestamp", "context"}
    assert body["severity"] == "critical"
    assert body["message"] == "Storage exists_slug failed: timeout"
