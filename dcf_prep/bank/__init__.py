"""Question bank loading and validation."""

from .loader import load_question_bank, parse_question_bank
from .validator import BankReport, BankRules, ensure_valid_bank, validate_bank

__all__ = [
    "load_question_bank",
    "parse_question_bank",
    "BankRules",
    "BankReport",
    "validate_bank",
    "ensure_valid_bank",
]
