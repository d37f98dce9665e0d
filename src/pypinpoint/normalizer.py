from __future__ import annotations

import logging

_logger = logging.getLogger(__name__)

# Wrapper text some share sheets put in front of a forwarded link
FORWARD_MARKERS = ("gmaps tinyurl @",)
SIGIL = "@"


def _stripOnce(text: str) -> str:
    for marker in FORWARD_MARKERS:
        text = text.replace(marker, "")
    return text.strip().lstrip(SIGIL).strip()


def normalize(raw: str) -> str:
    """Strip known forwarding prefixes from a pasted link."""
    text = (raw or "").strip()
    stripped = _stripOnce(text)
    while stripped != text:
        text, stripped = stripped, _stripOnce(stripped)
    if text != (raw or "").strip():
        _logger.debug(f"Normalized input '{raw}' to '{text}'")
    return text
