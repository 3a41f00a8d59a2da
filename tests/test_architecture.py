"""Architectural boundary tests using pytest-archon.

- Domain layer has no dependencies on application or adapters
- Application services don't depend on adapters
- Adapters depend on the domain only
"""

from pytest_archon import archrule


def test_domain_models_have_no_dependencies() -> None:
    """Domain models should only import the standard library and other domain models."""
    (
        archrule("domain models", comment="Domain models should be independent")
        .match("mvg_nearby.domain.models*")
        .should_not_import("mvg_nearby.adapters*")
        .should_not_import("mvg_nearby.application*")
        .should_not_import("mvg_nearby.domain.contracts*")
        .should_not_import("mvg_nearby.domain.ports*")
        .check("mvg_nearby")
    )


def test_domain_does_not_import_outer_layers() -> None:
    """Nothing in the domain should reach into application or adapters."""
    (
        archrule("domain", comment="Domain is the innermost layer")
        .match("mvg_nearby.domain*")
        .should_not_import("mvg_nearby.adapters*")
        .should_not_import("mvg_nearby.application*")
        .should_not_import("mvg_nearby.cli")
        .should_not_import("mvg_nearby.main")
        .check("mvg_nearby")
    )


def test_domain_has_no_third_party_http_dependencies() -> None:
    """Domain code should not know about the HTTP client library."""
    (
        archrule("domain purity", comment="HTTP belongs to adapters")
        .match("mvg_nearby.domain*")
        .should_not_import("aiohttp*")
        .check("mvg_nearby", only_direct_imports=True)
    )


def test_application_services_dont_import_adapters() -> None:
    """Application services should not depend on adapters (infrastructure layer)."""
    (
        archrule(
            "application services", comment="Application services should not depend on adapters"
        )
        .match("mvg_nearby.application*")
        .should_not_import("mvg_nearby.adapters*")
        .should_not_import("aiohttp*")
        .check("mvg_nearby", only_direct_imports=True)
    )


def test_adapters_dont_import_application() -> None:
    """Adapters should not import application services (to avoid cycles)."""
    (
        archrule("adapters", comment="Adapters implement domain ports only")
        .match("mvg_nearby.adapters*")
        .should_not_import("mvg_nearby.application*")
        .should_not_import("mvg_nearby.cli")
        .should_not_import("mvg_nearby.main")
        .check("mvg_nearby", only_direct_imports=True)
    )
