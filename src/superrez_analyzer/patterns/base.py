"""Rule and RuleCatalog types shared by the rule tables."""

import re
from typing import Iterable, Iterator, NamedTuple, Optional

from ..models import IssueCategory, Severity


class Rule(NamedTuple):
    """A line pattern with the finding it produces."""

    name: str
    category: IssueCategory
    severity: Severity
    message: str
    description: str
    suggestion: str
    regex: re.Pattern
    # Not evaluated on lines that start with a comment marker
    skip_comments: bool = False
    # Only evaluated for files with these extensions; None = all files
    extensions: Optional[frozenset[str]] = None
    estimated_impact: Optional[str] = None


class RuleCatalog:
    """An immutable, ordered table of rules belonging to one analyzer."""

    def __init__(self, name: str, rules: Iterable[Rule]):
        self._name = name
        self._rules = tuple(rules)

    @property
    def name(self) -> str:
        return self._name

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def categories(self) -> set[IssueCategory]:
        return {rule.category for rule in self._rules}

    def for_extension(self, extension: str) -> tuple[Rule, ...]:
        """Rules that apply to files with the given extension, in table order."""
        extension = extension.lower()
        return tuple(
            rule for rule in self._rules
            if rule.extensions is None or extension in rule.extensions
        )

    def __repr__(self) -> str:
        return f"RuleCatalog({self._name!r}, {len(self._rules)} rules)"
