"""
Utility modules for configuration, logging, record decoding and layout metrics
"""

from .config import load_config, save_config, get_default_config
from .logger import setup_logger
from .metrics import LayoutMetrics
from .records import item_from_record, items_from_records

__all__ = [
    "load_config",
    "save_config",
    "get_default_config",
    "setup_logger",
    "LayoutMetrics",
    "item_from_record",
    "items_from_records",
]
