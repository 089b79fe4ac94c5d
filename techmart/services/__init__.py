# Services Module
from .money import format_amount, format_money, to_decimal

__all__ = ["format_amount", "format_money", "to_decimal"]
