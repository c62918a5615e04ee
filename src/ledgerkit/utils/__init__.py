"""Utility functions for ledgerkit."""

from ledgerkit.utils.amount_parser import format_amount, parse_amount
from ledgerkit.utils.date_parser import day_range, parse_date

__all__ = ["parse_amount", "format_amount", "parse_date", "day_range"]
