"""
HTML Region Rasterizer

Paints a region of the storefront HTML view into a Pillow image, as a
browser screenshot of that region would look. Understands the markup the
storefront view produces: headings, paragraphs, fixed-height images, the
product grid (data-columns) and product cards. Other elements are treated
as plain block containers.
"""

import logging
import math
from typing import Dict, List, Optional, Tuple

from bs4 import Comment, NavigableString, Tag
from PIL import Image, ImageDraw, ImageFont

from ..common.constants import SNAPSHOT_BACKGROUND, SNAPSHOT_SCALE, SNAPSHOT_VIEWPORT_WIDTH
from .errors import RasterizationError
from .images import ImageLoader

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

HEADING_SIZES = {"h1": 32, "h2": 24, "h3": 20, "h4": 18}
BODY_SIZE = 16
SMALL_SIZE = 14
LINE_SPACING = 1.4
PADDING = 16
BLOCK_GAP = 12
CARD_GAP = 16
SKIPPED_TAGS = {"script", "style", "head", "meta", "link", "title", "noscript"}

TEXT_COLOR = (17, 24, 39)
MUTED_COLOR = (107, 114, 128)
PRICE_COLOR = (0, 100, 0)
PLACEHOLDER_COLOR = (229, 231, 235)


def wrap_words(text: str, font: ImageFont.ImageFont, max_width: float) -> List[str]:
    """Word-wrap text to a pixel width; an over-long word gets its own line."""
    words = text.split()
    if not words:
        return []

    lines: List[str] = []
    current: List[str] = []

    for word in words:
        candidate = " ".join(current + [word])
        if font.getlength(candidate) <= max_width:
            current.append(word)
            continue

        if current:
            lines.append(" ".join(current))
            current = [word]
        else:
            lines.append(word)

    if current:
        lines.append(" ".join(current))

    return lines


class HtmlRegionRasterizer:
    """
    Rasterizes a BeautifulSoup element at a given scale.

    Layout runs in CSS pixels at viewport width; painting multiplies every
    coordinate by the scale factor.

    Usage:
        rasterizer = HtmlRegionRasterizer(viewport_width=1024)
        image = rasterizer.rasterize(soup.find(id="shop-page"), scale=2)
    """

    def __init__(
        self,
        image_loader: Optional[ImageLoader] = None,
        viewport_width: int = SNAPSHOT_VIEWPORT_WIDTH,
    ):
        self.image_loader = image_loader or ImageLoader()
        self.viewport_width = viewport_width
        self._fonts: Dict[int, ImageFont.ImageFont] = {}
        self._images: Dict[str, Optional[Image.Image]] = {}

    def rasterize(
        self,
        element: Tag,
        scale: int = SNAPSHOT_SCALE,
        background: str = SNAPSHOT_BACKGROUND,
    ) -> Image.Image:
        """
        Render an element and its descendants to an RGB image.

        Args:
            element: Region to capture
            scale: Device pixel ratio
            background: Opaque fill colour behind the content

        Returns:
            Image of viewport_width * scale pixels wide

        Raises:
            RasterizationError: If layout or painting fails
        """
        try:
            ops: list = []
            content_width = self.viewport_width - 2 * PADDING
            bottom = self._layout_element(element, PADDING, PADDING, content_width, scale, ops)

            height = max(1, math.ceil((bottom + PADDING) * scale))
            image = Image.new("RGB", (self.viewport_width * scale, height), background)
            self._paint(image, ops, scale)
            return image
        except RasterizationError:
            raise
        except Exception as e:
            raise RasterizationError(f"Could not rasterize element: {e}") from e

    def _font(self, size: int) -> ImageFont.ImageFont:
        if size not in self._fonts:
            self._fonts[size] = ImageFont.load_default(size=size)
        return self._fonts[size]

    def _load_image(self, src: str) -> Optional[Image.Image]:
        if src not in self._images:
            self._images[src] = self.image_loader.load(src)
        return self._images[src]

    def _layout_children(self, node: Tag, x: float, y: float, width: float, scale: int, ops: list) -> float:
        for child in node.children:
            if isinstance(child, Comment):
                continue
            if isinstance(child, NavigableString):
                text = " ".join(child.split())
                if text:
                    y = self._layout_text(text, x, y, width, BODY_SIZE, TEXT_COLOR, scale, ops) + BLOCK_GAP
                continue
            if isinstance(child, Tag):
                y = self._layout_element(child, x, y, width, scale, ops)
        return y

    def _layout_element(self, tag: Tag, x: float, y: float, width: float, scale: int, ops: list) -> float:
        name = tag.name
        classes = tag.get("class") or []

        if name in SKIPPED_TAGS:
            return y

        if name in HEADING_SIZES:
            text = tag.get_text(" ", strip=True)
            return self._layout_text(text, x, y, width, HEADING_SIZES[name], TEXT_COLOR, scale, ops) + BLOCK_GAP

        if name == "p":
            text = tag.get_text(" ", strip=True)
            if "price" in classes:
                size, color = BODY_SIZE, PRICE_COLOR
            elif "description" in classes:
                size, color = SMALL_SIZE, MUTED_COLOR
            else:
                size, color = BODY_SIZE, TEXT_COLOR
            return self._layout_text(text, x, y, width, size, color, scale, ops) + BLOCK_GAP

        if name == "img":
            return self._layout_image(tag, x, y, width, ops) + BLOCK_GAP

        if "product-grid" in classes:
            return self._layout_grid(tag, x, y, width, scale, ops)

        return self._layout_children(tag, x, y, width, scale, ops)

    def _layout_text(self, text: str, x: float, y: float, width: float, size: int,
                     color: RGB, scale: int, ops: list) -> float:
        font = self._font(size * scale)
        line_height = size * LINE_SPACING
        for line in wrap_words(text, font, width * scale):
            ops.append(("text", x, y, line, font, color))
            y += line_height
        return y

    def _layout_image(self, tag: Tag, x: float, y: float, width: float, ops: list) -> float:
        box_width = min(float(tag.get("width") or width), width)
        box_height = float(tag.get("height") or box_width / 2)
        src = tag.get("src") or ""

        image = self._load_image(src) if src else None
        if image is None:
            ops.append(("rect", x, y, box_width, box_height, PLACEHOLDER_COLOR))
        else:
            ops.append(("image", x, y, box_width, box_height, image))
        return y + box_height

    def _layout_grid(self, tag: Tag, x: float, y: float, width: float, scale: int, ops: list) -> float:
        cols = int(tag.get("data-columns") or 3)
        cell_width = (width - (cols - 1) * CARD_GAP) / cols
        cards = [child for child in tag.children if isinstance(child, Tag)]

        for start in range(0, len(cards), cols):
            row_bottom = y
            for col, card in enumerate(cards[start:start + cols]):
                card_x = x + col * (cell_width + CARD_GAP)
                row_bottom = max(row_bottom, self._layout_children(card, card_x, y, cell_width, scale, ops))
            y = row_bottom + CARD_GAP
        return y

    def _paint(self, image: Image.Image, ops: list, scale: int) -> None:
        draw = ImageDraw.Draw(image)
        for op in ops:
            kind, x, y = op[0], op[1] * scale, op[2] * scale
            if kind == "text":
                _, _, _, line, font, color = op
                draw.text((x, y), line, font=font, fill=color)
            elif kind == "rect":
                w, h, color = op[3] * scale, op[4] * scale, op[5]
                draw.rectangle([x, y, x + w - 1, y + h - 1], fill=color)
            else:
                size = (max(1, round(op[3] * scale)), max(1, round(op[4] * scale)))
                image.paste(op[5].resize(size), (round(x), round(y)))
