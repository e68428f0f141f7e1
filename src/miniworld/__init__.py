"""MiniWorld baby-products storefront."""
