"""
Shared constants for the project.

Catalog geometry is expressed in millimetres, matching the PDF page units.
"""

# Page sizes in millimetres (portrait)
PAGE_SIZES_MM = {
    "a4": (210.0, 297.0),
    "letter": (215.9, 279.4),
}
PAGE_FORMATS = tuple(PAGE_SIZES_MM)
ORIENTATIONS = ("portrait", "landscape")

# Catalog layout
PAGE_MARGIN = 20.0
TITLE_FONT_SIZE = 24
TITLE_ADVANCE = 15.0
DESCRIPTION_FONT_SIZE = 12
DESCRIPTION_LINE_ADVANCE = 6.0
SECTION_GAP = 10.0
BANNER_HEIGHT = 40.0
BANNER_GAP = 15.0
SECTION_HEADER_ROOM = 20.0
SECTION_HEADER_FONT_SIZE = 18
SECTION_HEADER_ADVANCE = 15.0
SECTION_HEADER_TEXT = "Products"

GRID_GUTTER = 10.0
CELL_HEIGHT_WITH_IMAGES = 80.0
CELL_HEIGHT_TEXT_ONLY = 40.0
THUMBNAIL_SIZE = 30.0
THUMBNAIL_TEXT_OFFSET = 35.0

PRODUCT_NAME_FONT_SIZE = 12
PRODUCT_NAME_OFFSET = 8.0
PRODUCT_NAME_LINE_ADVANCE = 5.0
PRODUCT_DESCRIPTION_FONT_SIZE = 10
PRICE_FONT_SIZE = 14
PRICE_BOTTOM_OFFSET = 5.0

FOOTER_FONT_SIZE = 8
FOOTER_BOTTOM_OFFSET = 10.0

# Line spacing of multi-line text, as a multiple of the font size
LINE_HEIGHT_FACTOR = 1.15

# RGB colours
COLOR_BLACK = (0, 0, 0)
COLOR_MUTED = (100, 100, 100)
COLOR_PRICE = (0, 100, 0)
COLOR_FOOTER = (150, 150, 150)

FONT_NAME = "Helvetica"

# Snapshot export
SNAPSHOT_SCALE = 2
SNAPSHOT_BACKGROUND = "#ffffff"
SNAPSHOT_IMAGE_WIDTH = 210.0
SNAPSHOT_PAGE_HEIGHT = 295.0
SNAPSHOT_VIEWPORT_WIDTH = 1024

# Grid / banner bounds
GRID_COLUMN_CHOICES = (3, 4, 5)
BANNER_HEIGHT_MIN = 150
BANNER_HEIGHT_MAX = 600
DEFAULT_BANNER_HEIGHT = 200

# Blob storage buckets
PRODUCT_IMAGES_BUCKET = "product-images"
BANNER_IMAGES_BUCKET = "banner-images"
IMAGE_BUCKETS = (PRODUCT_IMAGES_BUCKET, BANNER_IMAGES_BUCKET)

# Auto-save
DEFAULT_AUTOSAVE_DELAY_MS = 1000

# Network
DEFAULT_IMAGE_TIMEOUT = 30
