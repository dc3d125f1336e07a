"""Performance rule table.

Line-level heuristics for:
- Database access (SELECT *, leading-wildcard LIKE, JOIN-heavy queries)
- Memory (timers and listeners that are never released, large preallocations)
- CPU (nested loops, unbounded loops, repeated sorting)
- Network (chained, sequential and looped remote calls)
"""

import re

from ..models import PerformanceCategory, Severity
from .base import Rule, RuleCatalog


def _io(name: str, message: str, regex: re.Pattern) -> Rule:
    return Rule(
        name=name,
        category=PerformanceCategory.io,
        severity=Severity.medium,
        message=message,
        description="Database query optimization needed",
        suggestion="Optimize query structure and indexing",
        regex=regex,
        estimated_impact="Database performance impact",
    )


def _memory(name: str, message: str, regex: re.Pattern) -> Rule:
    return Rule(
        name=name,
        category=PerformanceCategory.memory,
        severity=Severity.medium,
        message=message,
        description="Potential memory leak or excessive allocation",
        suggestion="Ensure proper cleanup and resource management",
        regex=regex,
        estimated_impact="Memory usage impact",
    )


def _cpu(name: str, message: str, regex: re.Pattern, severity: Severity = Severity.high) -> Rule:
    return Rule(
        name=name,
        category=PerformanceCategory.cpu,
        severity=severity,
        message=message,
        description="CPU-intensive operation detected",
        suggestion="Consider algorithm optimization or caching",
        regex=regex,
        estimated_impact="CPU performance impact",
    )


def _network(name: str, message: str, regex: re.Pattern) -> Rule:
    return Rule(
        name=name,
        category=PerformanceCategory.network,
        severity=Severity.medium,
        message=message,
        description="Network performance could be optimized",
        suggestion="Consider parallel requests or request batching",
        regex=regex,
        estimated_impact="Network latency impact",
    )


PERFORMANCE_RULES: list[Rule] = [
    # --- io ---
    _io("select_star", "SELECT * queries can be inefficient", re.compile(r"SELECT\s+\*\s+FROM", re.IGNORECASE)),
    _io(
        "leading_wildcard_like", "Leading wildcard LIKE queries are slow",
        re.compile(r"""LIKE\s+['"]%""", re.IGNORECASE),
    ),
    _io(
        "multiple_joins", "Multiple JOINs can impact performance",
        re.compile(r"\bJOIN\b.*\bJOIN\b", re.IGNORECASE),
    ),
    # --- memory ---
    _memory("uncleared_timer", "Timer not cleared", re.compile(r"\b(?:setInterval|setTimeout)\b")),
    _memory("unremoved_listener", "Event listener not removed", re.compile(r"\baddEventListener\b")),
    _memory("large_array_allocation", "Large array allocation", re.compile(r"new\s+Array\(\d{4,}\)")),
    # --- cpu ---
    _cpu(
        "triple_nested_loop", "Triple nested loop detected",
        re.compile(r"for\s*\([^)]*\)\s*\{\s*for\s*\([^)]*\)\s*\{\s*for"),
    ),
    _cpu("infinite_loop", "Infinite loop detected", re.compile(r"while\s*\(\s*true\s*\)|while\s+True\s*:")),
    _cpu("repeated_sort", "Multiple sorts on same data", re.compile(r"\.sort\(\s*\).*\.sort\(\s*\)")),
    _cpu(
        "dom_query_in_loop", "DOM query inside loop",
        re.compile(r"\b(?:for|while)\b.*document\.(?:getElementById|querySelector(?:All)?)\s*\("),
        severity=Severity.medium,
    ),
    _cpu(
        "chained_replace", "Multiple string replacements",
        re.compile(r"(?:\.replace\(.*){3,}"),
        severity=Severity.low,
    ),
    # --- network ---
    _network("chained_fetch", "Chained API calls", re.compile(r"fetch\(.*\)\.then\(.*\)\.then\(.*\)\.then")),
    _network("sequential_requests", "Sequential API calls", re.compile(r"axios\.get.*await.*axios\.get")),
    _network("request_in_loop", "API calls in loop", re.compile(r"for.*await.*fetch|for.*await.*axios")),
]

PERFORMANCE_CATALOG = RuleCatalog("performance", PERFORMANCE_RULES)
