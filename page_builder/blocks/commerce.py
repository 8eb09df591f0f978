"""Blocs e-commerce — grilles produits, produits mis en avant, recherche."""
from .base import BlockProps


class ProductsGridProps(BlockProps):
    limit: int = 12
    columns: int = 4
    show_category: bool = True
    show_wishlist: bool = True
    show_cart_button: bool = True
    show_view_details: bool = False
    hide_stock_out: bool = False


class FeaturedProductsProps(ProductsGridProps):
    limit: int = 6
    columns: int = 3


class ProductSearchProps(BlockProps):
    placeholder: str = "Search products..."
