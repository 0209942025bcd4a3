"""
Storefront Core

Data-shaping components shared by the admin and storefront surfaces:
- catalog.tree: flat categories to an ordered forest
- catalog.facets: attribute values to selectable facets
- cart: persisted cart store with Decimal totals

Note: Imports are lazy so that importing the package doesn't pull in
the Redis client until a cart store actually needs it.
"""

__all__ = [
    "build_category_tree",
    "resolve_facets",
    "select_facet_value",
    "CartStore",
    "CartLine",
    "create_cart_store",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "build_category_tree":
        from storefront.catalog.tree import build_category_tree
        return build_category_tree
    elif name == "resolve_facets":
        from storefront.catalog.facets import resolve_facets
        return resolve_facets
    elif name == "select_facet_value":
        from storefront.catalog.facets import select_facet_value
        return select_facet_value
    elif name == "CartStore":
        from storefront.cart import CartStore
        return CartStore
    elif name == "CartLine":
        from storefront.cart import CartLine
        return CartLine
    elif name == "create_cart_store":
        from storefront.cart import create_cart_store
        return create_cart_store
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
