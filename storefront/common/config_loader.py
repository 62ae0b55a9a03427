"""
Configuration Loader

Loads YAML configuration files (export defaults, auto-save delay, image
timeouts, snapshot rasterization) and backend credentials from the environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .constants import (
    DEFAULT_AUTOSAVE_DELAY_MS,
    DEFAULT_IMAGE_TIMEOUT,
    SNAPSHOT_SCALE,
    SNAPSHOT_VIEWPORT_WIDTH,
)

DEFAULT_CONFIG_FILE = 'storefront.yaml'


@dataclass
class BackendSettings:
    """Supabase project URL and public (anon) API key."""
    url: str = ""
    anon_key: str = ""

    @property
    def configured(self) -> bool:
        return bool(self.url and self.anon_key)


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'storefront.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_settings() -> Dict[str, Any]:
    """Load the main storefront settings file."""
    return load_config(DEFAULT_CONFIG_FILE)


def load_export_defaults(settings: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load default catalog export options.

    Returns:
        Dictionary with include_images, page_format and orientation

    Example:
        {'include_images': True, 'page_format': 'a4', 'orientation': 'portrait'}
    """
    if settings is None:
        settings = load_settings()
    return dict(settings.get('export', {}))


def load_autosave_delay_ms(settings: Optional[Dict[str, Any]] = None) -> int:
    """Debounce delay for auto-save in milliseconds."""
    if settings is None:
        settings = load_settings()
    return int(settings.get('autosave', {}).get('delay_ms', DEFAULT_AUTOSAVE_DELAY_MS))


def load_image_timeout(settings: Optional[Dict[str, Any]] = None) -> float:
    """Timeout in seconds for fetching a remote image."""
    if settings is None:
        settings = load_settings()
    return float(settings.get('images', {}).get('timeout', DEFAULT_IMAGE_TIMEOUT))


def load_backend_settings(env_file: Optional[str] = None) -> BackendSettings:
    """
    Read Supabase credentials from the environment.

    A .env file (explicit path, or discovered from the CWD) is loaded first;
    variables already set in the environment take precedence.

    Returns:
        BackendSettings, possibly unconfigured (empty strings)
    """
    load_dotenv(env_file)
    return BackendSettings(
        url=os.environ.get('SUPABASE_URL', '').rstrip('/'),
        anon_key=os.environ.get('SUPABASE_ANON_KEY', ''),
    )


def load_snapshot_settings(settings: Optional[Dict[str, Any]] = None) -> Dict[str, int]:
    """
    Load snapshot rasterization settings.

    Returns:
        Dictionary with viewport_width (CSS pixels) and scale
    """
    if settings is None:
        settings = load_settings()
    snapshot = settings.get('snapshot', {})
    return {
        'viewport_width': int(snapshot.get('viewport_width', SNAPSHOT_VIEWPORT_WIDTH)),
        'scale': int(snapshot.get('scale', SNAPSHOT_SCALE)),
    }
