"""Positioned draw instructions and the per-page schema builder."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union


DEFAULT_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
BLACK = "#000000"
LIGHT_GREY = "#E5E5E5"
BRAND_COLOR = "#B06A2B"


@dataclass(frozen=True)
class TextElement:
    """A text field; its content comes from the page inputs unless fixed."""
    name: str
    x: float
    y: float
    width: float
    height: float
    font_size: float = 9
    font_name: str = DEFAULT_FONT
    font_color: str = BLACK
    alignment: str = "left"  # "left", "center", "right"
    content: Optional[str] = None
    type: str = "text"

    @property
    def is_bold(self) -> bool:
        return self.font_name.endswith("-Bold")

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "name": self.name,
            "type": self.type,
            "position": {"x": self.x, "y": self.y},
            "width": self.width,
            "height": self.height,
            "fontSize": self.font_size,
            "fontName": self.font_name,
            "fontColor": self.font_color,
            "alignment": self.alignment,
        }
        if self.content is not None:
            data["content"] = self.content
        return data


@dataclass(frozen=True)
class RectangleElement:
    """A filled background rectangle, optionally with rounded corners."""
    name: str
    x: float
    y: float
    width: float
    height: float
    color: str = LIGHT_GREY
    radius: float = 0.0
    type: str = "rectangle"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "position": {"x": self.x, "y": self.y},
            "width": self.width,
            "height": self.height,
            "color": self.color,
            "radius": self.radius,
        }


@dataclass(frozen=True)
class LineElement:
    """A horizontal rule of the given length."""
    name: str
    x: float
    y: float
    width: float
    color: str = BLACK
    type: str = "line"

    @property
    def height(self) -> float:
        return 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "position": {"x": self.x, "y": self.y},
            "width": self.width,
            "height": 0,
            "color": self.color,
        }


@dataclass(frozen=True)
class ImageElement:
    """An image field whose data URI comes from the page inputs."""
    name: str
    x: float
    y: float
    width: float
    height: float
    opacity: float = 1.0
    type: str = "image"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "position": {"x": self.x, "y": self.y},
            "width": self.width,
            "height": self.height,
            "opacity": self.opacity,
        }


PositionedElement = Union[TextElement, RectangleElement, LineElement, ImageElement]


class SchemaBuilder:
    """
    Collects one page's elements together with its inputs map.

    Text and image elements are registered with their content in the
    same call, so every named field always has an inputs entry.
    """

    def __init__(self):
        self.elements: List[PositionedElement] = []
        self.inputs: Dict[str, str] = {}

    def _add(self, element: PositionedElement) -> PositionedElement:
        if any(existing.name == element.name for existing in self.elements):
            raise ValueError(f"Duplicate element name on page: {element.name}")
        self.elements.append(element)
        return element

    def text(
        self,
        name: str,
        value: str,
        x: float,
        y: float,
        width: float,
        height: float = 5,
        font_size: float = 9,
        bold: bool = False,
        alignment: str = "left",
        color: str = BLACK,
    ) -> TextElement:
        element = TextElement(
            name=name,
            x=x,
            y=y,
            width=width,
            height=height,
            font_size=font_size,
            font_name=BOLD_FONT if bold else DEFAULT_FONT,
            font_color=color,
            alignment=alignment,
        )
        self._add(element)
        self.inputs[name] = "" if value is None else str(value)
        return element

    def rectangle(
        self,
        name: str,
        x: float,
        y: float,
        width: float,
        height: float,
        color: str = LIGHT_GREY,
        radius: float = 0.0,
    ) -> RectangleElement:
        element = RectangleElement(name, x, y, width, height, color=color, radius=radius)
        self._add(element)
        return element

    def line(self, name: str, x: float, y: float, width: float, color: str = BLACK) -> LineElement:
        element = LineElement(name, x, y, width, color=color)
        self._add(element)
        return element

    def image(
        self,
        name: str,
        data: str,
        x: float,
        y: float,
        width: float,
        height: float,
        opacity: float = 1.0,
    ) -> ImageElement:
        element = ImageElement(name, x, y, width, height, opacity=opacity)
        self._add(element)
        self.inputs[name] = data or ""
        return element


def text_field_names(elements: List[PositionedElement]) -> List[str]:
    """Names of all text elements in a page schema."""
    return [e.name for e in elements if isinstance(e, TextElement)]


def element_from_dict(data: Dict[str, Any]) -> PositionedElement:
    """Rebuild a typed element from its serialized dict form."""
    kind = data.get("type")
    pos = data.get("position", {})
    x, y = float(pos.get("x", 0)), float(pos.get("y", 0))
    if kind == "text":
        return TextElement(
            name=data["name"],
            x=x,
            y=y,
            width=float(data.get("width", 0)),
            height=float(data.get("height", 0)),
            font_size=float(data.get("fontSize", 9)),
            font_name=data.get("fontName", DEFAULT_FONT),
            font_color=data.get("fontColor", BLACK),
            alignment=data.get("alignment", "left"),
            content=data.get("content"),
        )
    if kind == "rectangle":
        return RectangleElement(
            name=data["name"],
            x=x,
            y=y,
            width=float(data.get("width", 0)),
            height=float(data.get("height", 0)),
            color=data.get("color", LIGHT_GREY),
            radius=float(data.get("radius", 0)),
        )
    if kind == "line":
        return LineElement(
            name=data["name"],
            x=x,
            y=y,
            width=float(data.get("width", 0)),
            color=data.get("color", BLACK),
        )
    if kind == "image":
        return ImageElement(
            name=data["name"],
            x=x,
            y=y,
            width=float(data.get("width", 0)),
            height=float(data.get("height", 0)),
            opacity=float(data.get("opacity", 1.0)),
        )
    raise ValueError(f"Unknown element type: {kind!r}")
