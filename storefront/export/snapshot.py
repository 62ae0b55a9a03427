"""
Snapshot Export

Exports "what the user currently sees": one region of the storefront HTML
view is rasterized into a single tall image, which is then tiled across
A4 pages by redrawing the full image at increasing upward offsets and
letting each page clip it.
"""

import logging
import os
from io import BytesIO
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..common.constants import (
    SNAPSHOT_BACKGROUND,
    SNAPSHOT_IMAGE_WIDTH,
    SNAPSHOT_PAGE_HEIGHT,
    SNAPSHOT_SCALE,
)
from .errors import ElementNotFoundError, ExportError, RasterizationError
from .rasterizer import HtmlRegionRasterizer

logger = logging.getLogger(__name__)


def tile_offsets(image_height: float, page_height: float = SNAPSHOT_PAGE_HEIGHT) -> List[float]:
    """
    Vertical offsets (mm, top of image relative to top of page) per page.

    The first page shows the image at 0. Another page is added while the
    height left after the previous page is >= 0, so an image exactly one
    page tall still yields a second (empty) page.

    Example:
        >>> tile_offsets(600, 295)
        [0.0, -295.0, -590.0]
    """
    offsets = [0.0]
    height_left = float(image_height) - page_height
    while height_left >= 0:
        offsets.append(height_left - image_height)
        height_left -= page_height
    return offsets


def find_region(page_html: str, element_id: str) -> Tag:
    """
    Locate an element by id in an HTML document.

    Raises:
        ElementNotFoundError: If no element carries that id
    """
    soup = BeautifulSoup(page_html, "lxml")
    element = soup.find(id=element_id)
    if element is None:
        raise ElementNotFoundError(f"Element not found: {element_id}")
    return element


class SnapshotExporter:
    """
    Exports a rendered view region as a tiled, image-only PDF.

    Usage:
        exporter = SnapshotExporter()
        data = exporter.export_view(page_html, "shop-page")
        exporter.export_view_to_file(page_html, "shop-page", "output/acme.pdf")
    """

    def __init__(
        self,
        rasterizer: Optional[HtmlRegionRasterizer] = None,
        scale: int = SNAPSHOT_SCALE,
        background: str = SNAPSHOT_BACKGROUND,
    ):
        self.rasterizer = rasterizer or HtmlRegionRasterizer()
        self.scale = scale
        self.background = background

    def export_view(self, page_html: str, element_id: str) -> bytes:
        """
        Capture an element of the page and tile it into a PDF.

        Args:
            page_html: Rendered storefront HTML
            element_id: id attribute of the region to capture

        Returns:
            PDF document bytes

        Raises:
            ElementNotFoundError: If the region does not exist
            RasterizationError: If the region could not be rendered
        """
        region = find_region(page_html, element_id)

        try:
            raster = self.rasterizer.rasterize(region, scale=self.scale, background=self.background)
        except ExportError:
            logger.error("Error exporting current view: rasterization of #%s failed", element_id)
            raise
        except Exception as e:
            logger.error("Error exporting current view: %s", e)
            raise RasterizationError(f"Could not rasterize #{element_id}: {e}") from e

        image_width = SNAPSHOT_IMAGE_WIDTH
        image_height = raster.height * image_width / raster.width
        page_height = A4[1]

        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4, invariant=1)
        reader = ImageReader(raster)

        offsets = tile_offsets(image_height)
        for position in offsets:
            pdf.drawImage(
                reader,
                0,
                page_height - (position + image_height) * mm,
                width=image_width * mm,
                height=image_height * mm,
            )
            pdf.showPage()

        pdf.save()
        logger.debug("Snapshot of #%s: %dx%d px over %d pages",
                     element_id, raster.width, raster.height, len(offsets))
        return buffer.getvalue()

    def export_view_to_file(self, page_html: str, element_id: str, filename: str) -> Path:
        """
        Capture an element and save the PDF under the given file name.

        Returns:
            Path of the written file
        """
        data = self.export_view(page_html, element_id)

        path = Path(filename)
        if path.parent != Path('.'):
            os.makedirs(path.parent, exist_ok=True)
        path.write_bytes(data)

        logger.info("View exported to %s (%d bytes)", path, len(data))
        return path
