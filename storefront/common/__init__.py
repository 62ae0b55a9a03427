# Common utilities
from .config_loader import (
    BackendSettings,
    load_autosave_delay_ms,
    load_backend_settings,
    load_config,
    load_export_defaults,
    load_image_timeout,
    load_settings,
    load_snapshot_settings,
)
from .log_config import setup_logging
from .text_utils import (
    catalog_filename,
    format_date,
    format_price,
    generate_id,
    get_initials,
    is_valid_email,
    slugify,
    truncate_text,
)
