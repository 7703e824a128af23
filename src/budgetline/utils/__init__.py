"""Utility functions for budgetline."""

from budgetline.utils.amount_parser import parse_amount, parse_whole_number
from budgetline.utils.text import normalize_header

__all__ = ["parse_amount", "parse_whole_number", "normalize_header"]
