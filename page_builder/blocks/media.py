"""Blocs média — vidéo, slider, bannière."""
from typing import Tuple

from ..core.ids import new_id
from ..core.schemas import Node
from .base import BlockProps


class VideoProps(BlockProps):
    src: str = ""
    width: str = "100%"
    height: str = "400px"
    autoplay: bool = False


class SliderProps(BlockProps):
    autoplay: bool = True
    speed: int = 5000
    show_arrows: bool = True
    show_dots: bool = True


class BannerProps(BlockProps):
    title: str = "Banner Title"
    subtitle: str = "Banner subtitle"
    image: str = ""
    height: str = "400px"


_DEFAULT_SLIDES = [
    ("Welcome to Our Store", "Discover amazing products at unbeatable prices", "gradient-orange"),
    ("New Collection", "Shop the latest trends and styles", "gradient-primary"),
    ("Special Offers", "Limited time deals you don't want to miss", "gradient-warm"),
]


def slider_children(props: dict) -> Tuple[Node, ...]:
    """Trois bannières de démonstration, chacune avec un id frais."""
    return tuple(
        Node(
            id=new_id(),
            type="banner",
            props=BannerProps(title=title, subtitle=subtitle, height="500px", gradient=gradient).to_props(),
        )
        for title, subtitle, gradient in _DEFAULT_SLIDES
    )
