"""
clipwarp.clip.preview — Content hashing and single-line previews.
"""

from __future__ import annotations

import hashlib
import re

HASH_LENGTH = 16
ELLIPSIS = "…"
EMPTY_PLACEHOLDER = "[empty]"

# All C0 controls plus DEL.  Covers \n \r \t \v \f and the two bytes rofi
# reserves for its protocol, \x00 (row/option split) and \x1f (field split).
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE_RUN = re.compile(r"\s+")
_BLANK = re.compile(r"[\s\x00-\x1f\x7f]*")
_LEADING_BLANK = re.compile(r"^[\s\x00-\x1f\x7f]+")


def _as_bytes(content: bytes | str) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    return content


def _as_text(content: bytes | str) -> str:
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return content


def content_hash(content: bytes | str) -> str:
    """Return a stable 16-character hex id for *content* (BLAKE2b)."""
    return hashlib.blake2b(_as_bytes(content)).hexdigest()[:HASH_LENGTH]


def make_preview(content: bytes | str, max_len: int = 80) -> str:
    """Squash *content* into one display line of at most *max_len* chars.

    Control characters become spaces, whitespace runs collapse, the ends
    are trimmed, and an ellipsis marks truncation.  Returns ``[empty]``
    when nothing printable is left.
    """
    text = _LEADING_BLANK.sub("", _as_text(content))

    # Don't normalise a megabyte of text to show eighty characters of it
    cut = False
    limit = max_len * 2
    if len(text) > limit:
        cut = _BLANK.fullmatch(text, limit) is None
        text = text[:limit]

    text = _CONTROL_CHARS.sub(" ", text)
    text = _WHITESPACE_RUN.sub(" ", text).strip()

    if len(text) > max_len:
        text = text[:max_len] + ELLIPSIS
    elif cut and text:
        text += ELLIPSIS

    return text or EMPTY_PLACEHOLDER


def strip_controls(text: str) -> str:
    """Drop control characters outright (for ids and hidden fields)."""
    return _CONTROL_CHARS.sub("", text)
