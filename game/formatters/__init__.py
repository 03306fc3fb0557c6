"""Notation converters for Hive boards and histories."""

from .duodecimal import decimal_to_duo, duo_to_decimal
from .event_formatter import EventFormatter
from .spiral_formatter import SpiralFormatter

__all__ = ["EventFormatter", "SpiralFormatter", "decimal_to_duo", "duo_to_decimal"]
