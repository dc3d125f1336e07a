"""Data-driven rule tables for the line scanner."""

from .base import Rule, RuleCatalog
from .performance import PERFORMANCE_CATALOG, PERFORMANCE_RULES
from .security import SECURITY_CATALOG, SECURITY_RULES

__all__ = [
    "Rule",
    "RuleCatalog",
    "SECURITY_RULES",
    "SECURITY_CATALOG",
    "PERFORMANCE_RULES",
    "PERFORMANCE_CATALOG",
]
