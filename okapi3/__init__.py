"""OpenAPI 3 object model, spec merging and route-based operation building."""

__version__ = "0.1.0"
__all__ = ["openapi3", "merge", "docs", "routes", "operations"]