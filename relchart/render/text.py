# relchart/render/text.py
from __future__ import annotations

import html
import re
from typing import Any, List

TRUNCATE_AT = 250
ELLIPSIS = "..."

# Escaped quotes and angle brackets end a URL; &amp; does not.
_URL_STOP = r"(?!&(?:quot|#x27|lt|gt);)"
_MD_LINK_RE = re.compile(r"\[([^\]\n]+)\]\((https?://(?:" + _URL_STOP + r"[^\s)])+)\)")
_BARE_URL_RE = re.compile(
    r"(?<![\"'=>])\bhttps?://(?:" + _URL_STOP + r"[^\s<])*" + _URL_STOP + r"[^\s<.,;:!?)\]'\"]"
)
_BOLD_RE = re.compile(r"\*\*([^*\n]+)\*\*")
_CODE_RE = re.compile(r"`([^`\n]+)`")
_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")


def _link(href: str, label: str) -> str:
    return f'<a target="_blank" rel="noopener" href="{href}">{label}</a>'


def _inline(escaped: str) -> str:
    # Input is already HTML-escaped; URLs keep their escaped form in href.
    parts: List[str] = []
    pos = 0
    for m in _MD_LINK_RE.finditer(escaped):
        parts.append(_BARE_URL_RE.sub(lambda u: _link(u.group(0), u.group(0)), escaped[pos:m.start()]))
        parts.append(_link(m.group(2), m.group(1)))
        pos = m.end()
    parts.append(_BARE_URL_RE.sub(lambda u: _link(u.group(0), u.group(0)), escaped[pos:]))
    out = "".join(parts)
    out = _BOLD_RE.sub(r"<strong>\1</strong>", out)
    return _CODE_RE.sub(r"<code>\1</code>", out)


def render_text(text: Any, markdown: bool = True) -> str:
    """Safe display markup for free text.

    Always escapes HTML. With markdown=True, blank-line separated blocks
    become <p> paragraphs, single newlines become <br>, and [label](url),
    bare http(s) URLs, **bold** and `code` spans are converted. With
    markdown=False only newlines are converted.
    """
    if text is None:
        return ""
    s = str(text).replace("\r\n", "\n").replace("\r", "\n")
    if not s.strip():
        return ""
    escaped = html.escape(s, quote=True)
    if not markdown:
        return escaped.replace("\n", "<br>")

    blocks = [b.strip("\n") for b in _BLOCK_SPLIT_RE.split(escaped.strip("\n"))]
    return "".join(f"<p>{_inline(b).replace(chr(10), '<br>')}</p>" for b in blocks if b.strip())


def is_long_text(text: Any) -> bool:
    return isinstance(text, str) and len(text) > TRUNCATE_AT


def truncate_text(text: str) -> str:
    if len(text) <= TRUNCATE_AT:
        return text
    return text[:TRUNCATE_AT] + ELLIPSIS
