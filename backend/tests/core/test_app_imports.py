"""Import smoke tests — the application and its typed seams load on the supported interpreters."""

import importlib
import inspect

import pytest


@pytest.mark.parametrize("module", [
    "catalog.core.repository_protocols",
    "catalog.infrastructure.product_repository",
    "catalog.services.product_service",
    "catalog.main",
])
def test_module_imports(module):
    assert importlib.import_module(module)


def test_app_registers_catalog_routes():
    from catalog.main import app

    paths = {route.path for route in app.routes}
    assert "/api/v1/products" in paths
    assert "/api/v1/products/{slug}" in paths
    assert "/api/v1/home-content" in paths


def test_list_annotations_resolve_to_builtin():
    from catalog.core.repository_protocols import ProductRepository
    from catalog.infrastructure.product_repository import SqlProductRepository

    featured = inspect.signature(ProductRepository.list_featured)
    assert featured.return_annotation == list[dict]
    summaries = inspect.signature(SqlProductRepository.summaries_by_ids)
    assert summaries.parameters["product_ids"].annotation.__origin__ is list
