"""Saved game loaders for Hive."""

from .auto_loader import AutoSelectLoader
from .base_loader import ReplayLoader
from .csv_loader import HistoryCsvLoader
from .history_string_loader import HistoryStringLoader

__all__ = ["AutoSelectLoader", "HistoryCsvLoader", "HistoryStringLoader", "ReplayLoader"]
