"""
Catalog Layout Engine

Computes the paginated layout of a shop's PDF catalog: title, description,
banner, a "Products" section laid out as a grid, and a footer on every page.

All coordinates are millimetres measured from the top-left corner of the
page, y growing downward. Rendering to PDF happens separately (catalog_pdf).
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence, Tuple, Union

from PIL import Image
from reportlab.lib.pagesizes import landscape, portrait
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit

from ..common.constants import (
    BANNER_GAP,
    BANNER_HEIGHT,
    CELL_HEIGHT_TEXT_ONLY,
    CELL_HEIGHT_WITH_IMAGES,
    COLOR_BLACK,
    COLOR_FOOTER,
    COLOR_MUTED,
    COLOR_PRICE,
    DESCRIPTION_FONT_SIZE,
    DESCRIPTION_LINE_ADVANCE,
    FONT_NAME,
    FOOTER_BOTTOM_OFFSET,
    FOOTER_FONT_SIZE,
    GRID_GUTTER,
    LINE_HEIGHT_FACTOR,
    PAGE_MARGIN,
    PAGE_SIZES_MM,
    PRICE_BOTTOM_OFFSET,
    PRICE_FONT_SIZE,
    PRODUCT_DESCRIPTION_FONT_SIZE,
    PRODUCT_NAME_FONT_SIZE,
    PRODUCT_NAME_LINE_ADVANCE,
    PRODUCT_NAME_OFFSET,
    SECTION_GAP,
    SECTION_HEADER_ADVANCE,
    SECTION_HEADER_FONT_SIZE,
    SECTION_HEADER_ROOM,
    SECTION_HEADER_TEXT,
    THUMBNAIL_SIZE,
    THUMBNAIL_TEXT_OFFSET,
    TITLE_ADVANCE,
    TITLE_FONT_SIZE,
)
from ..common.text_utils import format_date, format_price
from ..models import ExportOptions, Product, Shop, active_products
from .images import ImageLoader

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

MM_PER_POINT = 25.4 / 72


def page_dimensions(options: ExportOptions) -> Tuple[float, float]:
    """Page (width, height) in millimetres for a format and orientation."""
    size = PAGE_SIZES_MM[options.page_format]
    if options.orientation == "landscape":
        return landscape(size)
    return portrait(size)


def line_height(font_size: float) -> float:
    """Distance between baselines of wrapped lines, in millimetres."""
    return font_size * LINE_HEIGHT_FACTOR * MM_PER_POINT


def wrap_text(text: str, font_size: float, max_width: float) -> List[str]:
    """Word-wrap text to a width in millimetres using Helvetica metrics."""
    return simpleSplit(text, FONT_NAME, font_size, max(max_width, 1.0) * mm) or [""]


@dataclass
class TextBlock:
    """One or more lines of text; y is the baseline of the first line."""
    x: float
    y: float
    lines: List[str]
    font_size: float
    color: RGB
    role: str

    @property
    def leading(self) -> float:
        return line_height(self.font_size)


@dataclass
class ImageBox:
    """An image forced into a fixed box (aspect ratio is not kept)."""
    x: float
    y: float
    width: float
    height: float
    image: Image.Image
    role: str


Element = Union[TextBlock, ImageBox]


@dataclass
class ProductCell:
    """Where a product landed in the grid."""
    product_id: str
    page: int       # 1-based page number
    row: int        # row on that page
    col: int
    x: float
    y: float
    width: float
    height: float


@dataclass
class CatalogPage:
    number: int
    elements: List[Element] = field(default_factory=list)

    def add(self, element: Element) -> None:
        self.elements.append(element)

    def by_role(self, role: str) -> List[Element]:
        return [e for e in self.elements if e.role == role]


@dataclass
class CatalogLayout:
    """Complete, paginated catalog ready for rendering."""
    width: float
    height: float
    pages: List[CatalogPage] = field(default_factory=list)
    cells: List[ProductCell] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def add_page(self) -> CatalogPage:
        page = CatalogPage(number=len(self.pages) + 1)
        self.pages.append(page)
        return page

    def by_role(self, role: str) -> List[Element]:
        return [e for page in self.pages for e in page.by_role(role)]


class CatalogLayoutEngine:
    """
    Lays out a shop and its active products into catalog pages.

    Image failures are per-item: the image is left out and layout
    continues. Shop and product objects are only read, never modified.

    Usage:
        engine = CatalogLayoutEngine()
        layout = engine.build(shop, products, ExportOptions(page_format="letter"))
    """

    def __init__(self, image_loader: Optional[ImageLoader] = None):
        self.image_loader = image_loader or ImageLoader()

    def build(
        self,
        shop: Shop,
        products: Sequence[Product],
        options: Optional[ExportOptions] = None,
        generated_on: Optional[date] = None,
    ) -> CatalogLayout:
        """
        Compute the catalog layout.

        Args:
            shop: Shop snapshot
            products: Products in display order (inactive ones are dropped)
            options: Export options (defaults: images, A4, portrait)
            generated_on: Date printed in the footer (defaults to today)

        Returns:
            CatalogLayout with every page, element and product cell
        """
        options = options or ExportOptions()
        generated_on = generated_on or date.today()

        page_width, page_height = page_dimensions(options)
        margin = PAGE_MARGIN
        content_width = page_width - 2 * margin
        bottom = page_height - margin

        layout = CatalogLayout(width=page_width, height=page_height)
        page = layout.add_page()
        y = margin

        page.add(TextBlock(margin, y, [shop.name], TITLE_FONT_SIZE, COLOR_BLACK, "title"))
        y += TITLE_ADVANCE

        if shop.description:
            lines = wrap_text(shop.description, DESCRIPTION_FONT_SIZE, content_width)
            page.add(TextBlock(margin, y, lines, DESCRIPTION_FONT_SIZE, COLOR_MUTED, "description"))
            y += len(lines) * DESCRIPTION_LINE_ADVANCE + SECTION_GAP

        if options.include_images and shop.banner_image_url:
            banner = self.image_loader.load(shop.banner_image_url)
            if banner is None:
                logger.warning("Skipping banner image for shop %s", shop.id)
            else:
                if y + BANNER_HEIGHT > bottom:
                    page = layout.add_page()
                    y = margin
                page.add(ImageBox(margin, y, content_width, BANNER_HEIGHT, banner, "banner"))
                y += BANNER_HEIGHT + BANNER_GAP

        products = active_products(products)
        if products:
            if y + SECTION_HEADER_ROOM > bottom:
                page = layout.add_page()
                y = margin

            page.add(TextBlock(margin, y, [SECTION_HEADER_TEXT], SECTION_HEADER_FONT_SIZE,
                               COLOR_BLACK, "section_header"))
            y += SECTION_HEADER_ADVANCE

            self._layout_grid(layout, page, y, shop, products, options, content_width)

        self._add_footers(layout, generated_on)
        logger.debug("Laid out %d products on %d pages for shop %s",
                     len(layout.cells), layout.page_count, shop.id)
        return layout

    def _layout_grid(
        self,
        layout: CatalogLayout,
        page: CatalogPage,
        y: float,
        shop: Shop,
        products: List[Product],
        options: ExportOptions,
        content_width: float,
    ) -> None:
        margin = PAGE_MARGIN
        bottom = layout.height - margin

        cols = shop.grid_columns
        cell_width = (content_width - (cols - 1) * GRID_GUTTER) / cols
        cell_height = CELL_HEIGHT_WITH_IMAGES if options.include_images else CELL_HEIGHT_TEXT_ONLY

        current_col = 0
        current_row = 0

        for product in products:
            x = margin + current_col * (cell_width + GRID_GUTTER)
            cell_y = y + current_row * (cell_height + GRID_GUTTER)

            # Page break restarts the grid at row 0, column 0
            if cell_y + cell_height > bottom:
                page = layout.add_page()
                y = margin
                current_row = 0
                current_col = 0
                cell_y = y

            with_image = options.include_images and bool(product.image_url)
            if with_image:
                thumbnail = self.image_loader.load(product.image_url)
                if thumbnail is None:
                    logger.warning("Skipping image for product %s", product.id)
                else:
                    page.add(ImageBox(x, cell_y, THUMBNAIL_SIZE, THUMBNAIL_SIZE, thumbnail, "thumbnail"))

            text_x = x + THUMBNAIL_TEXT_OFFSET if with_image else x
            text_width = cell_width - THUMBNAIL_TEXT_OFFSET if with_image else cell_width

            name_lines = wrap_text(product.name, PRODUCT_NAME_FONT_SIZE, text_width)
            page.add(TextBlock(text_x, cell_y + PRODUCT_NAME_OFFSET, name_lines,
                               PRODUCT_NAME_FONT_SIZE, COLOR_BLACK, "product_name"))

            if product.description:
                desc_lines = wrap_text(product.description, PRODUCT_DESCRIPTION_FONT_SIZE, text_width)
                desc_y = cell_y + PRODUCT_NAME_OFFSET + len(name_lines) * PRODUCT_NAME_LINE_ADVANCE
                page.add(TextBlock(text_x, desc_y, desc_lines, PRODUCT_DESCRIPTION_FONT_SIZE,
                                   COLOR_MUTED, "product_description"))

            page.add(TextBlock(text_x, cell_y + cell_height - PRICE_BOTTOM_OFFSET,
                               [f"${format_price(product.price)}"], PRICE_FONT_SIZE,
                               COLOR_PRICE, "price"))

            layout.cells.append(ProductCell(
                product_id=product.id,
                page=page.number,
                row=current_row,
                col=current_col,
                x=x,
                y=cell_y,
                width=cell_width,
                height=cell_height,
            ))

            current_col += 1
            if current_col >= cols:
                current_col = 0
                current_row += 1

    def _add_footers(self, layout: CatalogLayout, generated_on: date) -> None:
        """Second pass: stamp every page once the page count is known."""
        total = layout.page_count
        stamp = format_date(generated_on)
        for page in layout.pages:
            text = f"Generated on {stamp} - Page {page.number} of {total}"
            page.add(TextBlock(PAGE_MARGIN, layout.height - FOOTER_BOTTOM_OFFSET, [text],
                               FOOTER_FONT_SIZE, COLOR_FOOTER, "footer"))
