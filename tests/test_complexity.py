"""Tests for complexity scoring and function length detection."""

from superrez_analyzer.complexity import (
    check_complexity,
    check_function_length,
    detect_language_from_extension,
    estimate_complexity,
    find_functions,
)
from superrez_analyzer.config import AnalyzerConfig
from superrez_analyzer.models import PerformanceCategory, Severity

CONFIG = AnalyzerConfig()


def _js_function(name: str, body_lines: int) -> str:
    return f"function {name}() {{\n" + "  x++;\n" * body_lines + "}\n"


class TestLanguageDetection:
    def test_known_extensions(self):
        assert detect_language_from_extension("app.py") == "python"
        assert detect_language_from_extension("src/App.TSX") == "typescript"
        assert detect_language_from_extension("main.go") == "go"
        assert detect_language_from_extension("Main.java") == "c-family"

    def test_unknown_extension(self):
        assert detect_language_from_extension("data.json") is None
        assert detect_language_from_extension("") is None


class TestEstimateComplexity:
    """Test the branching token count."""

    def test_base_complexity(self):
        assert estimate_complexity("") == 1
        assert estimate_complexity("const x = 1;") == 1

    def test_counts_branch_tokens(self):
        # if( twice, else if( once, && once, || once
        assert estimate_complexity("if (a && b) { } else if (c || d) { }") == 6

    def test_counts_loops_and_catch(self):
        code = "for (;;) {}\nwhile (x) {}\ntry {} catch (e) {}"
        assert estimate_complexity(code) == 4

    def test_counts_switch_cases(self):
        assert estimate_complexity("case 1:\ncase 'b':\n") == 3

    def test_tokens_are_word_bounded(self):
        assert estimate_complexity("verify(x); platform(y); forEach(z);") == 1


class TestCheckComplexity:
    """Test complexity thresholds."""

    def test_at_threshold_is_clean(self):
        assert check_complexity("if (x) {}\n" * 14, "a.js", CONFIG) == []

    def test_above_high_threshold(self):
        issues = check_complexity("if (x) {}\n" * 15, "a.js", CONFIG)

        assert len(issues) == 1
        assert issues[0].severity == Severity.high
        assert issues[0].category == PerformanceCategory.code_smell
        assert issues[0].line is None
        assert issues[0].message == "High cyclomatic complexity: 16"

    def test_above_critical_threshold(self):
        issues = check_complexity("if (x) {}\n" * 30, "a.js", CONFIG)

        assert issues[0].severity == Severity.critical
        assert issues[0].rule == "aggregate_complexity"

    def test_custom_thresholds(self):
        config = AnalyzerConfig(complexity_high=2, complexity_critical=100)
        issues = check_complexity("if (x) {}\n" * 2, "a.js", config)

        assert [issue.severity for issue in issues] == [Severity.high]


class TestFindFunctions:
    """Test function span detection per language."""

    def test_python_functions(self):
        code = "def big():\n" + "    x = 1\n" * 60 + "\n\ndef small():\n    pass\n"

        functions = find_functions(code, "python")

        assert [(f.name, f.lines, f.start_line) for f in functions] == [
            ("big", 61, 1),
            ("small", 2, 64),
        ]

    def test_python_multiline_signature(self):
        code = "def long_handler(\n    request,\n    response,\n) -> None:\n" + "    x = 1\n" * 80

        functions = find_functions(code, "python")

        assert [(f.name, f.lines, f.start_line) for f in functions] == [("long_handler", 84, 1)]

    def test_python_nested(self):
        code = "def outer():\n    def inner():\n        return 1\n    return inner()\n"

        functions = find_functions(code, "python")

        assert [(f.name, f.lines) for f in functions] == [("outer", 4), ("inner", 2)]

    def test_javascript_brace_body(self):
        functions = find_functions(_js_function("big", 60), "javascript")

        assert [(f.name, f.lines, f.start_line) for f in functions] == [("big", 62, 1)]

    def test_javascript_arrow_function(self):
        code = "const handler = async (req) => {\n  return 1;\n};\n"

        functions = find_functions(code, "javascript")

        assert [(f.name, f.lines) for f in functions] == [("handler", 3)]

    def test_braces_in_strings_and_comments_ignored(self):
        code = 'function f() {\n  const s = "}";\n  // }\n  return 1;\n}\n'

        functions = find_functions(code, "javascript")

        assert [(f.name, f.lines) for f in functions] == [("f", 5)]

    def test_javascript_nested(self):
        code = (
            "function outer() {\n"
            "  function inner() {\n"
            "    return 1;\n"
            "  }\n"
            "  return inner();\n"
            "}\n"
        )

        functions = find_functions(code, "javascript")

        assert [(f.name, f.lines, f.start_line) for f in functions] == [
            ("outer", 6, 1),
            ("inner", 3, 2),
        ]

    def test_control_flow_is_not_a_function(self):
        code = "if (ready) {\n  go();\n}\nwhile (x) {\n  y();\n}\n"

        assert find_functions(code, "javascript") == []

    def test_go_method(self):
        code = "func (s *Server) Handle(w int) {\n\treturn\n}\n"

        functions = find_functions(code, "go")

        assert [(f.name, f.lines) for f in functions] == [("Handle", 3)]

    def test_c_declaration_without_body(self):
        assert find_functions("int add(int a, int b);\n", "c-family") == []

    def test_c_definition(self):
        code = "int add(int a, int b) {\n    return a + b;\n}\n"

        functions = find_functions(code, "c-family")

        assert [(f.name, f.lines) for f in functions] == [("add", 3)]

    def test_unbalanced_body_runs_to_end_of_file(self):
        code = "function broken() {\n  x++;\n  y++;\n"

        functions = find_functions(code, "javascript")

        assert functions[0].lines == 4

    def test_unknown_language(self):
        assert find_functions("function f() {}", None) == []


class TestCheckFunctionLength:
    """Test long function issues."""

    def test_short_function_is_clean(self):
        assert check_function_length(_js_function("ok", 10), "a.js", CONFIG) == []

    def test_medium_length(self):
        issues = check_function_length(_js_function("big", 60), "a.js", CONFIG)

        assert len(issues) == 1
        assert issues[0].severity == Severity.medium
        assert issues[0].line == 1
        assert issues[0].message == "Long function 'big': 62 lines"

    def test_high_length(self):
        issues = check_function_length(_js_function("huge", 120), "a.js", CONFIG)

        assert issues[0].severity == Severity.high

    def test_issue_line_is_function_start(self):
        code = "// header\n\n" + _js_function("big", 60)

        issues = check_function_length(code, "a.js", CONFIG)

        assert issues[0].line == 3

    def test_python_multiline_signature_is_flagged(self):
        code = "def long_handler(\n    request,\n    response,\n) -> None:\n" + "    x = 1\n" * 80

        issues = check_function_length(code, "handlers.py", CONFIG)

        assert [(issue.severity, issue.line) for issue in issues] == [(Severity.medium, 1)]

    def test_non_code_file(self):
        assert check_function_length(_js_function("big", 60), "data.json", CONFIG) == []
