"""
Text Utilities

Helper functions for formatting prices, dates, names and file names.
"""

import re
import secrets
import string
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def catalog_filename(shop_name: str) -> str:
    """
    Build the download file name for a shop's PDF catalog.

    Every character outside [a-z0-9] (case-insensitive) is replaced by an
    underscore, one for one, and the result is lowercased.

    Example:
        >>> catalog_filename("My Shop! 123")
        'my_shop__123_catalog.pdf'
    """
    base = re.sub(r'[^a-z0-9]', '_', shop_name, flags=re.IGNORECASE).lower()
    return f"{base}_catalog.pdf"


def format_price(price: Number) -> str:
    """
    Format a price with exactly two decimals, rounding half up.

    Floats are converted through str() so 2.675 rounds to 2.68.

    Example:
        >>> format_price(9)
        '9.00'
        >>> format_price("9.999")
        '10.00'
    """
    if not isinstance(price, Decimal):
        price = Decimal(str(price))
    return str(price.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_date(value: date) -> str:
    """Format a date as M/D/YYYY (no zero padding)."""
    return f"{value.month}/{value.day}/{value.year}"


def slugify(text: str) -> str:
    """
    Generate a URL slug: lowercase, spaces to hyphens, other symbols dropped.

    Example:
        >>> slugify("Acme Store!")
        'acme-store'
    """
    text = text.lower().replace(' ', '-')
    return re.sub(r'[^\w-]+', '', text)


def truncate_text(text: str, max_length: int) -> str:
    """Cut text to max_length characters, appending '...' when shortened."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def get_initials(name: str) -> str:
    """Return up to two uppercase initials from a name."""
    initials = ''.join(word[0] for word in name.split(' ') if word)
    return initials.upper()[:2]


def is_valid_email(email: str) -> bool:
    """Loose email format check (something@something.tld)."""
    return bool(EMAIL_PATTERN.match(email or ''))


def generate_id(length: int = 26) -> str:
    """Random lowercase alphanumeric identifier."""
    alphabet = string.ascii_lowercase + string.digits
    return ''.join(secrets.choice(alphabet) for _ in range(length))
