"""Core utilities for the storefront API."""

from storefront.core.config import AuthConfig, MediaConfig, StoreConfig
from storefront.core.logging import Logger, color_palette, log

__all__ = ["StoreConfig", "AuthConfig", "MediaConfig", "Logger", "log", "color_palette"]
