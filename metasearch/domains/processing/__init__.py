"""
Processing Domain - Text clean-up for extracted page content.

This domain handles:
- HTML tag and boilerplate removal
- Token-budgeted context pruning
"""

from .context_pruner import BlockType, ContextPruner, TextBlock
from .html_cleaner import HtmlCleaner

__all__ = [
    "HtmlCleaner",
    "ContextPruner",
    "TextBlock",
    "BlockType",
]
