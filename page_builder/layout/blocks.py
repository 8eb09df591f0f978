"""Resize libre d'un bloc : la boîte finale est committée dans son style."""
from dataclasses import dataclass, field
from typing import Dict, Sequence

from ..config import BLOCK_MIN_SIZE_PX
from ..core.schemas import Node, Roots
from ..engine.mutations import update
from .grid import ResizeHandle


@dataclass
class BlockResize:
    node_id: str
    handle: ResizeHandle
    start_x: float
    start_y: float
    start_width: float
    start_height: float
    start_left: float = 0.0
    start_top: float = 0.0
    box: Dict[str, float] = field(init=False)

    def __post_init__(self):
        self.handle = ResizeHandle(self.handle)
        self.box = {
            "width": self.start_width,
            "height": self.start_height,
            "left": self.start_left,
            "top": self.start_top,
        }

    def move(self, x: float, y: float) -> Dict[str, float]:
        dx, dy = x - self.start_x, y - self.start_y
        edge = self.handle.value
        width, height = self.start_width, self.start_height
        left, top = self.start_left, self.start_top
        if "right" in edge:
            width = self.start_width + dx
        if "left" in edge:
            width = self.start_width - dx
            left = self.start_left + dx
        if "bottom" in edge:
            height = self.start_height + dy
        if "top" in edge:
            height = self.start_height - dy
            top = self.start_top + dy
        self.box = {
            "width": max(BLOCK_MIN_SIZE_PX, width),
            "height": max(BLOCK_MIN_SIZE_PX, height),
            "left": left,
            "top": top,
        }
        return dict(self.box)

    def release(self) -> Dict[str, str]:
        """Patch de style : width toujours, height au-delà du minimum, offsets non nuls."""
        style = {"width": f"{self.box['width']:g}px"}
        if self.box["height"] > BLOCK_MIN_SIZE_PX:
            style["height"] = f"{self.box['height']:g}px"
        if "left" in self.handle.value and self.box["left"] != 0:
            style["left"] = f"{self.box['left']:g}px"
        if "top" in self.handle.value and self.box["top"] != 0:
            style["top"] = f"{self.box['top']:g}px"
        return style

    def commit(self, roots: Sequence[Node]) -> Roots:
        return update(roots, self.node_id, {"style": self.release()})
