"""
HTML Cleaner - Turns fetched page markup into plain text for scoring.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

__all__ = ["HtmlCleaner"]

NOISE_PATTERNS = (
    "cookie",
    "privacy policy",
    "terms of service",
    "subscribe",
    "newsletter",
    "advertisement",
    "sponsored",
    "click here",
    "read more",
    "share on",
    "follow us",
    "copyright ©",
    "all rights reserved",
)

# Lines at least this long are kept even if they contain a noise pattern
NOISE_MAX_LINE_LENGTH = 200

SKIPPED_TAGS = ["script", "style"]


class HtmlCleaner:
    """
    Strip markup, boilerplate lines and redundant whitespace.

    Example:
        >>> HtmlCleaner.clean("<p>Hello <b>world</b>!</p>")
        'Hello world!'
    """

    @classmethod
    def clean(cls, html: str) -> str:
        if not html:
            return ""
        text = cls.remove_tags(html)
        text = cls.remove_noise(text)
        return cls.normalize_whitespace(text)

    @staticmethod
    def remove_tags(html: str) -> str:
        """Drop tags and the bodies of script/style elements, keep line breaks."""
        soup = BeautifulSoup(html, "html.parser")
        for element in soup(SKIPPED_TAGS):
            element.decompose()
        return soup.get_text()

    @staticmethod
    def remove_noise(text: str) -> str:
        """Remove blank lines and short lines that look like page chrome."""
        kept = []
        for line in text.splitlines():
            if not line.strip():
                continue
            lower = line.lower()
            if len(line) < NOISE_MAX_LINE_LENGTH and any(p in lower for p in NOISE_PATTERNS):
                continue
            kept.append(line)
        return "\n".join(kept)

    @staticmethod
    def normalize_whitespace(text: str) -> str:
        return " ".join(text.split())
