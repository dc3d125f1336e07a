"""Whole-file complexity score and function length checks.

Both checks are heuristics over raw text: complexity counts branching tokens
anywhere in the file, and function bodies are found by indentation (Python)
or by balancing braces (everything else).
"""

import os
import re
from dataclasses import dataclass
from typing import Optional

from .config import AnalyzerConfig
from .models import Issue, PerformanceCategory, Severity


EXTENSION_LANGUAGE_MAP = {
    ".py": "python",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".vue": "javascript",
    ".svelte": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".go": "go",
    ".rs": "rust",
    ".java": "c-family",
    ".kt": "c-family",
    ".cs": "c-family",
    ".c": "c-family",
    ".h": "c-family",
    ".cpp": "c-family",
    ".hpp": "c-family",
    ".swift": "c-family",
    ".php": "c-family",
    ".sol": "c-family",
}

# Each occurrence adds one to the base complexity of 1.
# "else if (" also matches the plain "if (" token.
COMPLEXITY_TOKENS: tuple[re.Pattern, ...] = (
    re.compile(r"\bif\s*\("),
    re.compile(r"\belse\s+if\s*\("),
    re.compile(r"\bwhile\s*\("),
    re.compile(r"\bfor\s*\("),
    re.compile(r"\bcatch\s*\("),
    re.compile(r"\bcase\s+[^:\n]+:"),
    re.compile(r"&&|\|\|"),
)


@dataclass
class FunctionInfo:
    name: str
    lines: int
    start_line: int


def detect_language_from_extension(filename: str) -> Optional[str]:
    """Detect language based on file extension."""
    if not filename:
        return None
    _, ext = os.path.splitext(filename.lower())
    return EXTENSION_LANGUAGE_MAP.get(ext)


def estimate_complexity(content: str) -> int:
    """Approximate cyclomatic complexity of a whole file."""
    complexity = 1
    for token in COMPLEXITY_TOKENS:
        complexity += len(token.findall(content))
    return complexity


def check_complexity(content: str, file: str, config: AnalyzerConfig) -> list[Issue]:
    complexity = estimate_complexity(content)
    if complexity <= config.complexity_high:
        return []

    return [
        Issue(
            category=PerformanceCategory.code_smell,
            severity=Severity.critical if complexity > config.complexity_critical else Severity.high,
            file=file,
            message=f"High cyclomatic complexity: {complexity}",
            description="Complex code is harder to understand and maintain",
            suggestion="Refactor to reduce conditional complexity",
            rule="aggregate_complexity",
            estimated_impact="Code quality and performance impact",
        )
    ]


# --- function extraction ---

_NOT_FUNCTIONS = frozenset({
    'if', 'else', 'for', 'while', 'switch', 'catch', 'with', 'do', 'return',
    'throw', 'new', 'delete', 'typeof', 'void', 'in', 'of', 'sizeof', 'foreach',
    'elseif', 'using', 'lock', 'synchronized', 'when', 'guard',
})

_FUNCTION_PATTERNS: dict[str, tuple[re.Pattern, ...]] = {
    "javascript": (
        re.compile(r'^\s*(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*(\w+)\s*\('),
        re.compile(r'^\s*(?:export\s+)?(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?(?:function|\([^)]*\)\s*=>|\w+\s*=>)'),
        re.compile(r'^\s*(?:(?:public|private|protected|static|async|get|set)\s+)*(\w+)\s*\([^)]*\)\s*\{'),
    ),
    "go": (
        re.compile(r'^\s*func\s+(?:\([^)]*\)\s+)?(\w+)\s*\('),
    ),
    "rust": (
        re.compile(r'^\s*(?:pub(?:\s*\([^)]*\))?\s+)?(?:async\s+)?(?:unsafe\s+)?fn\s+(\w+)\s*[<(]'),
    ),
    "c-family": (
        re.compile(r'^\s*(?:(?:public|private|protected|internal|static|final|abstract|override|open|async)\s+)*(?:function|fun|func)\s+(\w+)\s*[<(]'),
        re.compile(r'^\s*(?:[\w<>\[\],*&:]+\s+)+[*&]?(\w+)\s*\([^;]*$'),
    ),
}
_FUNCTION_PATTERNS["typescript"] = _FUNCTION_PATTERNS["javascript"] + (
    re.compile(r'^\s*(?:(?:public|private|protected|static|async|readonly)\s+)*(\w+)\s*(?:<[^>]*>)?\s*\([^)]*\)\s*:\s*[^={;]+\{'),
)


def _find_python_function_end(lines: list[str], start_idx: int, func_indent: int) -> int:
    """Find the last line belonging to a Python function using indentation.

    Args:
        lines: All source lines (0-indexed).
        start_idx: Index of the line that closes the ``def`` signature.
        func_indent: Column of the ``def`` keyword.

    Returns:
        0-based index of the last line that belongs to the function body.
    """
    last_body_line = start_idx
    for j in range(start_idx + 1, len(lines)):
        stripped = lines[j].strip()
        if not stripped:
            # Blank lines belong to the body only if more body follows
            continue
        leading = len(lines[j]) - len(lines[j].lstrip())
        if leading > func_indent:
            last_body_line = j
        else:
            break
    return last_body_line


def _find_python_signature_end(lines: list[str], start_idx: int) -> int:
    """Return the index of the line where a ``def`` signature's brackets balance.

    Falls back to the ``def`` line itself if they never do.
    """
    depth = 0
    for j in range(start_idx, len(lines)):
        code = lines[j].split("#", 1)[0]
        depth += code.count("(") + code.count("[") - code.count(")") - code.count("]")
        if depth <= 0:
            return j
    return start_idx


def _python_functions(lines: list[str]) -> list[FunctionInfo]:
    func_pattern = re.compile(r'^(\s*)(?:async\s+)?def\s+(\w+)\s*\(')
    functions = []
    for i, line in enumerate(lines):
        match = func_pattern.match(line)
        if match:
            signature_end = _find_python_signature_end(lines, i)
            end_idx = _find_python_function_end(lines, signature_end, len(match.group(1)))
            functions.append(FunctionInfo(name=match.group(2), lines=end_idx - i + 1, start_line=i + 1))
    return functions


def _find_brace_body_end(lines: list[str], start_idx: int) -> Optional[int]:
    """Find the line on which the body opened at or after ``start_idx`` closes.

    Braces inside string literals and comments are ignored. Returns None when
    a ``;`` ends the statement before any ``{`` (a declaration, not a body).
    If the braces never balance, the body runs to end of file.
    """
    depth = 0
    found_open = False
    in_block_comment = False
    in_template = False

    for j in range(start_idx, len(lines)):
        line = lines[j]
        quote = None
        k = 0
        while k < len(line):
            ch = line[k]
            nxt = line[k + 1] if k + 1 < len(line) else ""

            if in_block_comment:
                if ch == "*" and nxt == "/":
                    in_block_comment = False
                    k += 1
            elif in_template:
                if ch == "\\":
                    k += 1
                elif ch == "`":
                    in_template = False
            elif quote:
                if ch == "\\":
                    k += 1
                elif ch == quote:
                    quote = None
            elif ch == "/" and nxt == "/":
                break
            elif ch == "/" and nxt == "*":
                in_block_comment = True
                k += 1
            elif ch in ("'", '"'):
                quote = ch
            elif ch == "`":
                in_template = True
            elif ch == "{":
                depth += 1
                found_open = True
            elif ch == "}":
                depth -= 1
                if found_open and depth <= 0:
                    return j
            elif ch == ";" and not found_open:
                return None
            k += 1

    return len(lines) - 1 if found_open else None


def find_functions(content: str, language: Optional[str]) -> list[FunctionInfo]:
    """Locate functions and measure how many lines each spans.

    Nested functions are reported on their own; the enclosing function's
    span still includes them.
    """
    lines = content.split("\n")
    if language == "python":
        return _python_functions(lines)

    patterns = _FUNCTION_PATTERNS.get(language or "")
    if not patterns:
        return []

    functions = []
    for i, line in enumerate(lines):
        for pattern in patterns:
            match = pattern.match(line)
            if not match:
                continue
            name = match.group(1)
            if name in _NOT_FUNCTIONS:
                continue
            end_idx = _find_brace_body_end(lines, i)
            if end_idx is not None:
                functions.append(FunctionInfo(name=name, lines=end_idx - i + 1, start_line=i + 1))
            break

    return functions


def check_function_length(content: str, file: str, config: AnalyzerConfig) -> list[Issue]:
    issues = []
    for func in find_functions(content, detect_language_from_extension(file)):
        if func.lines <= config.function_length_medium:
            continue
        issues.append(
            Issue(
                category=PerformanceCategory.code_smell,
                severity=Severity.high if func.lines > config.function_length_high else Severity.medium,
                file=file,
                line=func.start_line,
                message=f"Long function '{func.name}': {func.lines} lines",
                description="Long functions are harder to maintain and test",
                suggestion="Consider breaking into smaller functions",
                rule="function_length",
                estimated_impact="Maintainability and performance impact",
            )
        )
    return issues
