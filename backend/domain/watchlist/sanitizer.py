from __future__ import annotations

import re

MAX_TEXT_LENGTH = 200

_ENTITIES = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
    "/": "&sol;",
}

# An ampersand that does not already start one of our own entities.
_BARE_AMPERSAND_RE = re.compile(r"&(?!(?:amp|lt|gt|quot|apos|sol);)")
_ESCAPABLE_RE = re.compile(r"[<>\"'/]")


def _escape(text: str) -> str:
    text = _BARE_AMPERSAND_RE.sub("&amp;", text)
    return _ESCAPABLE_RE.sub(lambda m: _ENTITIES[m.group(0)], text)


def _keep_char(ch: str) -> bool:
    return ch.isascii() or ch.isalpha()


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    cut = text[:limit]
    # Never leave half an entity at the end.
    amp = cut.rfind("&")
    if amp != -1 and ";" not in cut[amp:]:
        cut = cut[:amp]
    return cut


def sanitize_text(text: str, *, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Normalize untrusted text before it is stored or shown again.

    Steps: trim, HTML-escape `& < > " ' /` with named entities, drop any
    character that is neither ASCII nor alphabetic, cap the length.

    The filter is lossy: symbols and most non-Latin punctuation disappear
    rather than being transliterated. Already-sanitized text comes
    back unchanged.
    """
    if not isinstance(text, str):
        return ""
    cleaned = _escape(text.strip())
    cleaned = "".join(ch for ch in cleaned if _keep_char(ch))
    return _truncate(cleaned, max_length).strip()
