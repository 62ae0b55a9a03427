"""
Catalog export.

Modules:
    layout      - Catalog layout engine (pagination, product grid, footers)
    catalog_pdf - Structured PDF rendering and file export
    images      - Image fetching/decoding with per-item failure handling
    rasterizer  - HTML view region to image
    snapshot    - Tiled PDF of a rasterized view region
    errors      - Export exceptions
"""

from .catalog_pdf import CatalogPDFExporter, render_layout
from .errors import ElementNotFoundError, ExportError, RasterizationError
from .images import ImageLoader
from .layout import CatalogLayout, CatalogLayoutEngine, ProductCell
from .rasterizer import HtmlRegionRasterizer
from .snapshot import SnapshotExporter, tile_offsets

__all__ = [
    # Structured export
    'CatalogLayoutEngine',
    'CatalogLayout',
    'ProductCell',
    'CatalogPDFExporter',
    'render_layout',
    'ImageLoader',
    # Snapshot export
    'HtmlRegionRasterizer',
    'SnapshotExporter',
    'tile_offsets',
    # Errors
    'ExportError',
    'ElementNotFoundError',
    'RasterizationError',
]
