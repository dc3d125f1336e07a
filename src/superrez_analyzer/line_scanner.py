"""Apply a rule catalog to file content line by line."""

from pathlib import PurePosixPath

from .models import Issue
from .patterns import RuleCatalog

COMMENT_PREFIXES = ("//", "#", "/*", "*")


def is_commented_out(line: str) -> bool:
    """Check if a line starts with a comment marker."""
    return line.strip().startswith(COMMENT_PREFIXES)


def scan_lines(content: str, catalog: RuleCatalog, file: str = "") -> list[Issue]:
    """Match every applicable rule against every line of ``content``.

    A line that matches several rules yields one issue per rule. Rules marked
    ``skip_comments`` are not evaluated on commented-out lines.
    Lines are split on ``\n`` only, so numbering agrees with the
    function-length check.

    Args:
        content: Full text of the file.
        catalog: Rules to evaluate, in table order.
        file: Root-relative path attached to each issue; its extension selects
            extension-scoped rules.

    Returns:
        Issues in line order, then rule order.
    """
    rules = catalog.for_extension(PurePosixPath(file).suffix)
    issues = []

    for line_num, line in enumerate(content.split("\n"), start=1):
        line = line.removesuffix("\r")
        commented = is_commented_out(line)
        for rule in rules:
            if rule.skip_comments and commented:
                continue
            if rule.regex.search(line):
                issues.append(
                    Issue(
                        category=rule.category,
                        severity=rule.severity,
                        file=file,
                        line=line_num,
                        message=rule.message,
                        description=rule.description,
                        suggestion=rule.suggestion,
                        rule=rule.name,
                        estimated_impact=rule.estimated_impact,
                    )
                )

    return issues
