"""
Tests for HTML cleaning and context pruning.
"""

from __future__ import annotations

from .context_pruner import BlockType, ContextPruner, TextBlock
from .html_cleaner import HtmlCleaner


# --- HtmlCleaner Tests ---


def test_remove_simple_tags() -> None:
    assert HtmlCleaner.remove_tags("<p>Hello <b>world</b>!</p>") == "Hello world!"


def test_script_and_style_bodies_dropped() -> None:
    html = "<p>Content</p><script>alert('test');</script><style>p{}</style><p>More</p>"
    result = HtmlCleaner.remove_tags(html)
    assert "alert" not in result
    assert "p{}" not in result
    assert "Content" in result
    assert "More" in result


def test_normalize_whitespace() -> None:
    assert HtmlCleaner.normalize_whitespace("Hello    world\n\n\ntest") == "Hello world test"


def test_remove_noise_lines() -> None:
    text = "Important content\nClick here to subscribe\nMore content"
    result = HtmlCleaner.remove_noise(text)
    assert "Click here" not in result
    assert "Important content" in result
    assert "More content" in result


def test_long_line_with_noise_word_kept() -> None:
    """Noise filtering only applies to short lines."""
    line = "Our cookie handling " + "x" * 250
    assert HtmlCleaner.remove_noise(line) == line


def test_clean_full_document() -> None:
    html = """
        <html>
            <head><title>Test</title></head>
            <body>
                <h1>Main Title</h1>
                <p>This is   important content.</p>
                <div>Subscribe to our newsletter</div>
                <script>console.log('test');</script>
            </body>
        </html>
    """
    result = HtmlCleaner.clean(html)
    assert "Main Title" in result
    assert "This is important content." in result
    assert "newsletter" not in result
    assert "console.log" not in result
    assert "\n" not in result


def test_clean_empty_and_plain_text() -> None:
    assert HtmlCleaner.clean("") == ""
    assert HtmlCleaner.clean("Plain text without tags") == "Plain text without tags"


# --- ContextPruner Tests ---


def test_split_into_blocks() -> None:
    pruner = ContextPruner(1000)
    text = "# Title\n\nThis is a paragraph.\n\nfn main() { }\n\nAnother paragraph."
    blocks = pruner.split_into_blocks(text)

    assert [b.block_type for b in blocks] == [
        BlockType.HEADING,
        BlockType.PARAGRAPH,
        BlockType.CODE,
        BlockType.PARAGRAPH,
    ]


def test_consecutive_lines_join_into_paragraph() -> None:
    blocks = ContextPruner(1000).split_into_blocks("first line\nsecond line")
    assert len(blocks) == 1
    assert blocks[0].content == "first line second line"


def test_rank_blocks() -> None:
    blocks = [
        TextBlock(content="paragraph", block_type=BlockType.PARAGRAPH),
        TextBlock(content="heading", block_type=BlockType.HEADING),
        TextBlock(content="code", block_type=BlockType.CODE),
    ]
    ranked = ContextPruner.rank_blocks(blocks)
    assert [b.block_type for b in ranked] == [
        BlockType.HEADING,
        BlockType.CODE,
        BlockType.PARAGRAPH,
    ]


def test_remove_duplicates() -> None:
    blocks = [
        TextBlock(content="Same content", block_type=BlockType.PARAGRAPH),
        TextBlock(content="Same content", block_type=BlockType.PARAGRAPH),
        TextBlock(content="Different content", block_type=BlockType.PARAGRAPH),
    ]
    assert len(ContextPruner.remove_duplicates(blocks)) == 2


def test_truncate_to_budget() -> None:
    pruner = ContextPruner(50)
    blocks = [
        TextBlock(content="A" * 100, block_type=BlockType.HEADING),
        TextBlock(content="B" * 100, block_type=BlockType.PARAGRAPH),
        TextBlock(content="C" * 100, block_type=BlockType.PARAGRAPH),
    ]
    result = pruner.truncate_to_budget(blocks)
    assert "AAA" in result
    assert "C" not in result
    assert len(result) <= 250


def test_partial_block_is_truncated_with_ellipsis() -> None:
    pruner = ContextPruner(60)
    blocks = [TextBlock(content="D" * 400, block_type=BlockType.PARAGRAPH)]
    result = pruner.truncate_to_budget(blocks)
    assert result == "D" * 240 + "..."


def test_prune_removes_repeated_paragraphs() -> None:
    content = """
# Important Title

This is a very important paragraph with lots of information.

fn example_code() {
    println!("Hello");
}

Another paragraph.

This is a very important paragraph with lots of information.
"""
    result = ContextPruner(100).prune(content)
    assert "Important Title" in result
    assert result.count("very important paragraph") == 1


def test_prune_empty() -> None:
    assert ContextPruner(1000).prune("") == ""


def test_estimate_tokens() -> None:
    block = TextBlock(content="A" * 400, block_type=BlockType.PARAGRAPH)
    assert block.estimate_tokens() == 100
