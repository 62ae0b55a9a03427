"""
Catalog PDF Exporter

Renders a CatalogLayout to PDF bytes with reportlab and writes the
catalog file (<shop-slug>_catalog.pdf).
"""

import logging
import os
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Optional, Sequence

from PIL import Image
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..common.constants import FONT_NAME
from ..common.text_utils import catalog_filename
from ..models import ExportOptions, Product, Shop
from .errors import ExportError
from .images import ImageLoader
from .layout import CatalogLayout, CatalogLayoutEngine, ImageBox, TextBlock

logger = logging.getLogger(__name__)

JPEG_QUALITY = 80


def _jpeg_reader(image: Image.Image) -> ImageReader:
    buffer = BytesIO()
    image.save(buffer, format="JPEG", quality=JPEG_QUALITY)
    buffer.seek(0)
    return ImageReader(buffer)


def _draw_text(pdf: canvas.Canvas, block: TextBlock, page_height: float) -> None:
    r, g, b = block.color
    pdf.setFont(FONT_NAME, block.font_size)
    pdf.setFillColorRGB(r / 255, g / 255, b / 255)
    for i, line in enumerate(block.lines):
        baseline = block.y + i * block.leading
        pdf.drawString(block.x * mm, (page_height - baseline) * mm, line)


def _draw_image(pdf: canvas.Canvas, box: ImageBox, page_height: float) -> None:
    pdf.drawImage(
        _jpeg_reader(box.image),
        box.x * mm,
        (page_height - box.y - box.height) * mm,
        width=box.width * mm,
        height=box.height * mm,
    )


def render_layout(layout: CatalogLayout) -> bytes:
    """
    Draw every page of a layout into a PDF document.

    Output is byte-for-byte reproducible for the same layout
    (reportlab invariant mode fixes timestamps and document IDs).
    """
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(layout.width * mm, layout.height * mm), invariant=1)

    for page in layout.pages:
        for element in page.elements:
            if isinstance(element, ImageBox):
                _draw_image(pdf, element, layout.height)
            else:
                _draw_text(pdf, element, layout.height)
        pdf.showPage()

    pdf.save()
    return buffer.getvalue()


class CatalogPDFExporter:
    """
    Exports a shop's catalog as a structured PDF.

    Usage:
        exporter = CatalogPDFExporter()
        data = exporter.export(shop, products, ExportOptions(include_images=False))
        path = exporter.export_to_file(shop, products, output_dir="output")
    """

    def __init__(self, image_loader: Optional[ImageLoader] = None):
        self.engine = CatalogLayoutEngine(image_loader)

    def export(
        self,
        shop: Shop,
        products: Sequence[Product],
        options: Optional[ExportOptions] = None,
        generated_on: Optional[date] = None,
    ) -> bytes:
        """
        Build the catalog PDF.

        Args:
            shop: Shop snapshot
            products: Products in display order
            options: Export options
            generated_on: Footer date (defaults to today)

        Returns:
            PDF document bytes

        Raises:
            ExportError: If the document could not be written
        """
        layout = self.engine.build(shop, products, options, generated_on)
        try:
            return render_layout(layout)
        except Exception as e:
            logger.error("Error generating PDF for shop %s: %s", shop.id, e)
            raise ExportError(f"Could not generate catalog PDF: {e}") from e

    def export_to_file(
        self,
        shop: Shop,
        products: Sequence[Product],
        options: Optional[ExportOptions] = None,
        output_dir: str = "output",
        generated_on: Optional[date] = None,
    ) -> Path:
        """
        Build the catalog PDF and save it as <shop-slug>_catalog.pdf.

        Returns:
            Path of the written file
        """
        data = self.export(shop, products, options, generated_on)

        os.makedirs(output_dir, exist_ok=True)
        path = Path(output_dir) / catalog_filename(shop.name)
        path.write_bytes(data)

        logger.info("Catalog exported to %s (%d bytes)", path, len(data))
        return path
