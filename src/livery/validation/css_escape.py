"""
CSS value escaping.

Theme values may come from untrusted sources (per-tenant overrides, API
payloads). Every value written into CSS text goes through
``escape_css_value`` so it cannot close the declaration or the rule it is
embedded in.

Example:
    escape_css_value("red; } body { background: url(evil); } .x {")
    # 'red\\; \\} body \\{ background: url(evil)\\; \\} .x \\{'
"""

from __future__ import annotations

import re

_CSS_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "'": "\\'",
    ";": "\\;",
    "{": "\\{",
    "}": "\\}",
    "\n": "\\n",
    "\r": "\\r",
}

_CSS_ESCAPE_CHARS = re.compile(r"[\\\"';{}\n\r]")


def escape_css_value(value: str) -> str:
    """
    Backslash-escape characters that could break out of a CSS declaration.

    Escapes backslash, both quotes, semicolon, both braces, CR and LF in a
    single pass.
    """
    if not value:
        return value
    return _CSS_ESCAPE_CHARS.sub(lambda match: _CSS_ESCAPES[match.group(0)], value)


def needs_css_escaping(value: str) -> bool:
    """Check whether ``escape_css_value`` would change the value."""
    return _CSS_ESCAPE_CHARS.search(value) is not None
