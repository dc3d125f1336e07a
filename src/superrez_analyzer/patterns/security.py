"""Security rule table.

Detects, line by line:
- Hardcoded secrets (API keys, passwords, tokens, private keys, cloud credentials)
- SQL built by string concatenation
- XSS sinks (innerHTML, document.write, eval, raw-HTML directives)
- Weak cryptography and non-cryptographic randomness
- Path traversal sequences
- Shell/command execution, plaintext protocols and Solidity hazards
"""

import re

from ..models import SecurityCategory, Severity
from .base import Rule, RuleCatalog

_SECRET_SUGGESTION = "Move {} to environment variables or secure configuration"


def _secret(name: str, kind: str, regex: re.Pattern) -> Rule:
    return Rule(
        name=name,
        category=SecurityCategory.secrets,
        severity=Severity.high,
        message=f"Potential hardcoded {kind} detected",
        description="Credentials committed to source control can be extracted by anyone with read access",
        suggestion=_SECRET_SUGGESTION.format(kind),
        regex=regex,
        skip_comments=True,
    )


def _sql(name: str, message: str, regex: re.Pattern, severity: Severity = Severity.high) -> Rule:
    return Rule(
        name=name,
        category=SecurityCategory.sql_injection,
        severity=severity,
        message=message,
        description="Queries assembled from strings can let user input change the statement",
        suggestion="Use parameterized queries or prepared statements",
        regex=regex,
    )


def _xss(name: str, message: str, regex: re.Pattern) -> Rule:
    return Rule(
        name=name,
        category=SecurityCategory.xss,
        severity=Severity.medium,
        message=message,
        description="Unescaped content written into the page can execute attacker-controlled script",
        suggestion="Sanitize user input and use safe DOM manipulation methods",
        regex=regex,
    )


def _crypto(name: str, algorithm: str, severity: Severity, regex: re.Pattern, replacement: str) -> Rule:
    return Rule(
        name=name,
        category=SecurityCategory.weak_crypto,
        severity=severity,
        message=f"Use of weak {algorithm} algorithm",
        description=f"{algorithm} is not suitable for security-sensitive use",
        suggestion=f"Replace {algorithm} with {replacement}",
        regex=regex,
    )


def _traversal(name: str, message: str, regex: re.Pattern) -> Rule:
    return Rule(
        name=name,
        category=SecurityCategory.path_traversal,
        severity=Severity.medium,
        message=message,
        description="Relative parent references can escape the intended directory",
        suggestion="Validate and sanitize file paths, use an allowlist approach",
        regex=regex,
    )


SOLIDITY_EXTENSIONS = frozenset({".sol"})

SECURITY_RULES: list[Rule] = [
    # --- secrets ---
    _secret(
        "hardcoded_api_key", "api key",
        re.compile(r"""api[_-]?key\s*[:=]\s*["'][^"']{10,}["']""", re.IGNORECASE),
    ),
    _secret(
        "hardcoded_password", "password/secret",
        re.compile(r"""(?:secret|password|passwd|pwd)\s*[:=]\s*["'][^"']{8,}["']""", re.IGNORECASE),
    ),
    _secret(
        "hardcoded_auth_token", "auth token",
        re.compile(r"""(?:auth[_-]?)?token\s*[:=]\s*["'][^"']{10,}["']""", re.IGNORECASE),
    ),
    _secret(
        "private_key", "private key",
        re.compile(r"-----BEGIN\s+(?:(?:RSA|EC|DSA|OPENSSH)\s+)?PRIVATE\s+KEY-----", re.IGNORECASE),
    ),
    _secret("aws_access_key", "AWS access key", re.compile(r"AKIA[0-9A-Z]{16}")),
    _secret("github_token", "GitHub token", re.compile(r"\bghp_[A-Za-z0-9]{36}\b")),
    _secret("openai_api_key", "OpenAI API key", re.compile(r"\bsk-[A-Za-z0-9]{48}\b")),
    _secret("slack_bot_token", "Slack bot token", re.compile(r"\bxoxb-[0-9]+-[0-9]+-[0-9A-Za-z-]+")),
    _secret("google_api_key", "Google API key", re.compile(r"\bAIza[0-9A-Za-z_\-]{35}")),
    # --- sql-injection ---
    _sql(
        "sql_string_concatenation", "String concatenation in SQL query",
        re.compile(r"""query\s*\+\s*["']|["']\s*\+\s*\w+\s*\+\s*["']""", re.IGNORECASE),
    ),
    _sql("dynamic_sql_execute", "Dynamic SQL execution", re.compile(r"execute\(.*\+.*\)", re.IGNORECASE)),
    _sql("concatenated_select", "Concatenated SELECT statement", re.compile(r"""["']SELECT.*\+.*FROM""", re.IGNORECASE)),
    _sql("concatenated_insert", "Concatenated INSERT statement", re.compile(r"""["']INSERT.*\+.*VALUES""", re.IGNORECASE)),
    _sql("concatenated_update", "Concatenated UPDATE statement", re.compile(r"""["']UPDATE.*\+.*SET""", re.IGNORECASE)),
    _sql("concatenated_delete", "Concatenated DELETE statement", re.compile(r"""["']DELETE.*\+.*FROM""", re.IGNORECASE)),
    _sql(
        "select_star_literal", "Unrestricted SELECT * query literal",
        re.compile(r"""["']\s*SELECT\s+\*\s+FROM""", re.IGNORECASE),
        severity=Severity.low,
    ),
    # --- xss ---
    _xss("innerhtml_assignment", "Potential XSS via innerHTML", re.compile(r"\.(?:inner|outer)HTML\s*=(?!=)", re.IGNORECASE)),
    _xss("document_write", "Potentially dangerous document.write", re.compile(r"document\.write(?:ln)?\s*\(", re.IGNORECASE)),
    _xss("eval_call", "Use of eval() function", re.compile(r"\beval\s*\(")),
    _xss("react_raw_html", "React dangerouslySetInnerHTML usage", re.compile(r"dangerouslySetInnerHTML")),
    _xss("vue_raw_html", "Vue.js v-html directive usage", re.compile(r"\bv-html\s*=", re.IGNORECASE)),
    # --- weak-crypto ---
    _crypto(
        "md5_hash", "MD5", Severity.high,
        re.compile(r"""\bmd5\s*\(|createHash\(\s*["']md5["']""", re.IGNORECASE),
        "SHA-256 or a dedicated password hash (bcrypt, argon2)",
    ),
    _crypto(
        "sha1_hash", "SHA1", Severity.medium,
        re.compile(r"""\bsha1\s*\(|createHash\(\s*["']sha1["']""", re.IGNORECASE),
        "SHA-256 or stronger",
    ),
    _crypto(
        "des_cipher", "DES/3DES", Severity.high,
        re.compile(r"\b(?:3DES|DES|TripleDES|DES-EDE3?)\b"),
        "AES-GCM or ChaCha20-Poly1305",
    ),
    _crypto("rc4_cipher", "RC4", Severity.high, re.compile(r"\bRC4\b", re.IGNORECASE), "AES-GCM or ChaCha20-Poly1305"),
    _crypto(
        "math_random", "Math.random", Severity.medium,
        re.compile(r"Math\.random\s*\("),
        "crypto.randomBytes or crypto.getRandomValues",
    ),
    _crypto(
        "python_random", "random module", Severity.medium,
        re.compile(r"\brandom\.(?:random|randint|choice)\s*\("),
        "the secrets module",
    ),
    # --- path-traversal ---
    _traversal("dot_dot_slash", "Potential path traversal with ../", re.compile(r"\.\./")),
    _traversal("traversal_sequence", "Potential path traversal sequence", re.compile(r"\.\.\\|\.\.//")),
    _traversal("path_join_traversal", "Path.join with potential traversal", re.compile(r"path\.join\([^)]*\.\./", re.IGNORECASE)),
    # --- command-injection ---
    Rule(
        name="exec_call",
        category=SecurityCategory.command_injection,
        severity=Severity.high,
        message="Use of exec() function",
        description="Dynamic code or command execution runs whatever reaches it",
        suggestion="Avoid dynamic code execution; pass arguments as a list to a safe API",
        regex=re.compile(r"(?:^|[^.\w])exec\s*\(|child_process\.exec(?:Sync)?\s*\("),
        skip_comments=True,
    ),
    Rule(
        name="system_call",
        category=SecurityCategory.command_injection,
        severity=Severity.high,
        message="System command execution",
        description="Shell commands built from variables can be hijacked by crafted input",
        suggestion="Use subprocess with an argument list and no shell",
        regex=re.compile(r"\bsystem\s*\("),
        skip_comments=True,
    ),
    Rule(
        name="shell_exec_call",
        category=SecurityCategory.command_injection,
        severity=Severity.high,
        message="Shell execution",
        description="Shell commands built from variables can be hijacked by crafted input",
        suggestion="Avoid shell_exec; use escapeshellarg() or a process API without a shell",
        regex=re.compile(r"\bshell_exec\s*\("),
        skip_comments=True,
    ),
    # --- insecure-transport ---
    Rule(
        name="plain_http",
        category=SecurityCategory.insecure_transport,
        severity=Severity.medium,
        message="Insecure HTTP protocol",
        description="Plain HTTP traffic can be read and modified in transit",
        suggestion="Use HTTPS for external communications",
        regex=re.compile(r"http://(?!localhost|127\.0\.0\.1|0\.0\.0\.0)"),
        skip_comments=True,
    ),
    Rule(
        name="plain_ftp",
        category=SecurityCategory.insecure_transport,
        severity=Severity.medium,
        message="Insecure FTP protocol",
        description="FTP sends credentials and data unencrypted",
        suggestion="Use SFTP or FTPS",
        regex=re.compile(r"\bftp://"),
        skip_comments=True,
    ),
    Rule(
        name="plain_telnet",
        category=SecurityCategory.insecure_transport,
        severity=Severity.medium,
        message="Insecure Telnet protocol",
        description="Telnet sends credentials and data unencrypted",
        suggestion="Use SSH",
        regex=re.compile(r"\btelnet://"),
        skip_comments=True,
    ),
    # --- smart-contract ---
    Rule(
        name="old_solidity_pragma",
        category=SecurityCategory.smart_contract,
        severity=Severity.medium,
        message="Old Solidity version detected",
        description="Solidity before 0.8 lacks checked arithmetic and other safety features",
        suggestion="Update to Solidity 0.8.x",
        regex=re.compile(r"pragma\s+solidity\s*\^?0\.4"),
        extensions=SOLIDITY_EXTENSIONS,
    ),
    Rule(
        name="low_level_call",
        category=SecurityCategory.smart_contract,
        severity=Severity.high,
        message="Low-level call detected - potential reentrancy risk",
        description="External calls before state updates allow reentrant execution",
        suggestion="Use ReentrancyGuard or the checks-effects-interactions pattern",
        regex=re.compile(r"\.call(?:\{[^}]*\})?\("),
        skip_comments=True,
        extensions=SOLIDITY_EXTENSIONS,
    ),
]

SECURITY_CATALOG = RuleCatalog("security", SECURITY_RULES)
