"""Shared utilities."""
from src.estatehub.utils.logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
