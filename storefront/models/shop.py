"""
Shop and product data models.

Pure data classes mirroring the record store rows.
No business logic - only data structure definitions and field validation.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from ..common.constants import (
    BANNER_HEIGHT_MAX,
    BANNER_HEIGHT_MIN,
    DEFAULT_BANNER_HEIGHT,
    GRID_COLUMN_CHOICES,
    ORIENTATIONS,
    PAGE_FORMATS,
)


def _to_decimal(value: Any) -> Decimal:
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid price: {value!r}") from None
    if not price.is_finite():
        raise ValueError(f"Invalid price: {value!r}")
    return price


@dataclass
class Shop:
    """
    A user's storefront.

    Only one shop exists per user. Layout settings (banner height, grid
    columns) always hold exactly one valid value.
    """

    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    banner_image_url: Optional[str] = None
    banner_height: int = DEFAULT_BANNER_HEIGHT   # pixels
    grid_columns: int = 3                        # 3, 4 or 5
    created_at: str = ""
    updated_at: str = ""

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.name:
            raise ValueError("Shop name is required")
        if self.grid_columns not in GRID_COLUMN_CHOICES:
            raise ValueError(
                f"grid_columns must be one of {GRID_COLUMN_CHOICES}, got {self.grid_columns}"
            )
        if not BANNER_HEIGHT_MIN <= self.banner_height <= BANNER_HEIGHT_MAX:
            raise ValueError(
                f"banner_height must be between {BANNER_HEIGHT_MIN} and "
                f"{BANNER_HEIGHT_MAX}, got {self.banner_height}"
            )

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Shop":
        """Build a Shop from a record store row."""
        return cls(
            id=str(record.get("id", "")),
            user_id=str(record.get("user_id", "")),
            name=record.get("name") or "",
            description=record.get("description") or None,
            banner_image_url=record.get("banner_image_url") or None,
            banner_height=int(record.get("banner_height") or DEFAULT_BANNER_HEIGHT),
            grid_columns=int(record.get("grid_columns") or 3),
            created_at=record.get("created_at") or "",
            updated_at=record.get("updated_at") or "",
        )

    def to_record(self) -> Dict[str, Any]:
        """Writable columns (no id or timestamps)."""
        return {
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "banner_image_url": self.banner_image_url,
            "banner_height": self.banner_height,
            "grid_columns": self.grid_columns,
        }


@dataclass
class Product:
    """A catalog item belonging to a shop."""

    id: str
    shop_id: str
    name: str
    price: Decimal
    description: Optional[str] = None
    image_url: Optional[str] = None
    position: int = 0
    is_active: bool = True      # soft-delete marker
    created_at: str = ""
    updated_at: str = ""

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.name:
            raise ValueError("Product name is required")
        self.price = _to_decimal(self.price)
        if self.price < 0:
            raise ValueError(f"Product price must be non-negative, got {self.price}")

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Product":
        """Build a Product from a record store row."""
        return cls(
            id=str(record.get("id", "")),
            shop_id=str(record.get("shop_id", "")),
            name=record.get("name") or "",
            price=record.get("price", 0),
            description=record.get("description") or None,
            image_url=record.get("image_url") or None,
            position=int(record.get("position") or 0),
            is_active=bool(record.get("is_active", True)),
            created_at=record.get("created_at") or "",
            updated_at=record.get("updated_at") or "",
        )

    def to_record(self) -> Dict[str, Any]:
        """Writable columns (no id or timestamps)."""
        return {
            "shop_id": self.shop_id,
            "name": self.name,
            "description": self.description,
            "price": float(self.price),
            "image_url": self.image_url,
            "position": self.position,
            "is_active": self.is_active,
        }


@dataclass
class ExportOptions:
    """Per-call catalog export settings."""

    include_images: bool = True
    page_format: str = "a4"         # "a4" or "letter"
    orientation: str = "portrait"   # "portrait" or "landscape"

    def __post_init__(self):
        self.page_format = self.page_format.lower()
        self.orientation = self.orientation.lower()
        if self.page_format not in PAGE_FORMATS:
            raise ValueError(f"Unsupported page format: {self.page_format}")
        if self.orientation not in ORIENTATIONS:
            raise ValueError(f"Unsupported orientation: {self.orientation}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExportOptions":
        return cls(
            include_images=bool(data.get("include_images", True)),
            page_format=str(data.get("page_format", "a4")),
            orientation=str(data.get("orientation", "portrait")),
        )


def active_products(products: Iterable[Product]) -> List[Product]:
    """Drop soft-deleted products, keeping list order."""
    return [p for p in products if p.is_active]
