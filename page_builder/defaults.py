"""
Pages par défaut de la boutique.

Une page système (home, cart, checkout, product) encore jamais enregistrée
s'ouvre sur ces composants ; toute autre page démarre vide. Les noeuds sont
créés depuis le catalogue, chaque appel produit donc des ids neufs.
"""
from typing import Callable, Dict

from .blocks import create_node
from .core.schemas import Document, Roots
from .layout.grid import GridCell, with_cell


def _title_section(title: str, subtitle: str) -> Roots:
    return (
        create_node("section", padding="40px 0", background="#ffffff").model_copy(update={"children": (
            create_node("heading", text=title, level="h1", align="center", font_size="2.5rem")
            .model_copy(update={"content": title}),
            create_node("text", text=subtitle, align="center").model_copy(update={"content": subtitle}),
        )}),
    )


_FEATURES = [
    ("FREE SHIPPING", "Orders Over ৳2,000"),
    ("24/7 SUPPORT", "We're here to help"),
    ("SECURED PAYMENT", "Safe & Fast"),
    ("FREE RETURNS", "Easy & Free"),
]


def home_page() -> Roots:
    banner = create_node(
        "banner",
        title="50% OFF",
        subtitle="Spring / Summer Season - STARTING AT ৳1,999",
        height="400px",
        gradient="gradient-dark",
    )
    heading = create_node(
        "heading", text="Featured Products", level="h2", align="center", font_size="2.5rem",
    ).model_copy(update={"content": "Featured Products"})
    products = create_node("products-grid", limit=12, columns=4)
    featured = create_node("section", padding="64px 0", background="#f5f5f5", align="left")

    cards = tuple(
        with_cell(
            create_node("card", title=title, content=text, align="center", radius="12px", shadow="md"),
            GridCell(column_start=i + 1),
        )
        for i, (title, text) in enumerate(_FEATURES)
    )
    grid = create_node("grid", columns=len(cards), rows=1, gap="32px")
    services = create_node("section", padding="64px 0", background="#ffffff", align="center")

    return (
        banner,
        featured.model_copy(update={"children": (heading, products)}),
        services.model_copy(update={"children": (grid.model_copy(update={"children": cards}),)}),
    )


def cart_page() -> Roots:
    return _title_section("Shopping Cart", "Your cart items will appear here")


def checkout_page() -> Roots:
    return _title_section("Checkout", "Complete your order")


def product_page() -> Roots:
    return _title_section("Product Details", "Product information will appear here")


DEFAULT_PAGES: Dict[str, Callable[[], Roots]] = {
    "home": home_page,
    "cart": cart_page,
    "checkout": checkout_page,
    "product": product_page,
}


def default_components(page_id: str) -> Roots:
    """Composants de départ d'une page ; () pour une page inconnue."""
    factory = DEFAULT_PAGES.get(page_id)
    return factory() if factory else ()


def default_document(page_id: str, title: str = "") -> Document:
    return Document(
        page_id=page_id,
        title=title or page_id.capitalize() or "Untitled Page",
        components=default_components(page_id),
    )
