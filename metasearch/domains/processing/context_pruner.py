"""
Context Pruner - Fits extracted content into a token budget.

Content is split into heading, code and paragraph blocks, duplicates are
dropped, blocks are ranked by type and then packed until the budget is
spent. Tokens are estimated at four characters each.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel

logger = logging.getLogger(__name__)

__all__ = ["BlockType", "ContextPruner", "TextBlock"]

CHARS_PER_TOKEN = 4
DEDUPE_PREFIX_CHARS = 100
# Partial blocks shorter than this are not worth keeping
MIN_TRUNCATED_CHARS = 100

CODE_INDICATORS = (
    "{",
    "}",
    "()",
    "=>",
    "fn ",
    "def ",
    "class ",
    "import ",
    "const ",
    "let ",
    "var ",
)


class BlockType(str, Enum):
    HEADING = "heading"
    CODE = "code"
    PARAGRAPH = "paragraph"


BLOCK_PRIORITY = {
    BlockType.HEADING: 100,
    BlockType.CODE: 80,
    BlockType.PARAGRAPH: 50,
}


class TextBlock(BaseModel):
    """A contiguous piece of content."""

    content: str
    block_type: BlockType

    model_config = {"frozen": True}

    @property
    def priority(self) -> int:
        return BLOCK_PRIORITY[self.block_type]

    def estimate_tokens(self) -> int:
        return len(self.content) // CHARS_PER_TOKEN


def _is_heading(line: str) -> bool:
    if line.startswith("#"):
        return True
    upper = sum(1 for c in line if c.isupper())
    return len(line) < 100 and upper > len(line) // 2


def _is_code(line: str) -> bool:
    return any(indicator in line for indicator in CODE_INDICATORS)


class ContextPruner:
    """
    Token-budgeted content reducer.

    Example:
        >>> pruner = ContextPruner(max_tokens=500)
        >>> summary = pruner.prune(page_text)
    """

    def __init__(self, max_tokens: int = 2000) -> None:
        self.max_tokens = max_tokens

    def prune(self, content: str) -> str:
        blocks = self.split_into_blocks(content)
        blocks = self.remove_duplicates(blocks)
        blocks = self.rank_blocks(blocks)
        return self.truncate_to_budget(blocks)

    def split_into_blocks(self, text: str) -> list[TextBlock]:
        """Split text into blocks. Consecutive plain lines form one paragraph."""
        blocks: list[TextBlock] = []
        paragraph: list[str] = []

        def flush() -> None:
            if paragraph:
                blocks.append(TextBlock(content=" ".join(paragraph), block_type=BlockType.PARAGRAPH))
                paragraph.clear()

        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line:
                flush()
            elif _is_heading(line):
                flush()
                blocks.append(TextBlock(content=line, block_type=BlockType.HEADING))
            elif _is_code(line):
                flush()
                blocks.append(TextBlock(content=line, block_type=BlockType.CODE))
            else:
                paragraph.append(line)

        flush()
        return blocks

    @staticmethod
    def remove_duplicates(blocks: list[TextBlock]) -> list[TextBlock]:
        """Keep the first block for each 100-character prefix."""
        seen: set[str] = set()
        unique = []
        for block in blocks:
            key = block.content[:DEDUPE_PREFIX_CHARS]
            if key not in seen:
                seen.add(key)
                unique.append(block)
        return unique

    @staticmethod
    def rank_blocks(blocks: list[TextBlock]) -> list[TextBlock]:
        """Highest priority first; stable within a type."""
        return sorted(blocks, key=lambda b: b.priority, reverse=True)

    def truncate_to_budget(self, blocks: list[TextBlock]) -> str:
        kept: list[str] = []
        used = 0

        for block in blocks:
            tokens = block.estimate_tokens()
            if used + tokens <= self.max_tokens:
                kept.append(block.content)
                used += tokens
                continue

            remaining_chars = max(self.max_tokens - used, 0) * CHARS_PER_TOKEN
            if remaining_chars > MIN_TRUNCATED_CHARS:
                kept.append(block.content[:remaining_chars] + "...")
            logger.debug("Pruned context at %d/%d tokens", used, self.max_tokens)
            break

        return "\n\n".join(kept)
