import logging
import re

from resume_html_to_docx.blocks import (
    Block,
    BulletBlock,
    HeaderWithTrailingTextBlock,
    LabeledLineBlock,
    PlainParagraphBlock,
    SectionHeaderBlock,
    SubtitleBlock,
    TitleBlock,
)
from resume_html_to_docx.text_normalizer import normalize_text

logger = logging.getLogger(__name__)

##############################
# Markup patterns
##############################
# Element matches are shallow and non-greedy; the markup is not parsed into a tree
H1_PATTERN = re.compile(r"<h1(?:\s[^>]*)?>(.*?)</h1>", re.IGNORECASE)
H4_PATTERN = re.compile(r"<h4(?:\s[^>]*)?>(.*?)</h4>", re.IGNORECASE)
P_PATTERN = re.compile(r"<p(?:\s[^>]*)?>(.*?)</p>", re.IGNORECASE)
LI_PATTERN = re.compile(r"<li(?:\s[^>]*)?>(.*?)</li>", re.IGNORECASE | re.DOTALL)
STRONG_PATTERN = re.compile(r"<strong(?:\s[^>]*)?>(.*?)</strong>", re.IGNORECASE)
LEADING_SEPARATOR_PATTERN = re.compile(r"^\s*[-|]\s*")
LEADING_BULLET_PATTERN = re.compile(r"^•\s*")
CATEGORY_PATTERN = re.compile(r"^(.+?):\s*(.+)$")

SECTION_HEADER_MIN_LENGTH = 4


def parse_html_to_blocks(html: str | None) -> list[Block]:
    """Translate resume markup into an ordered list of document blocks

    Every stage scans the same original string. The output holds the title,
    the subtitle, every paragraph-derived block in source order, then every
    list item in source order.

    Args:
        html (str): HTML fragment of the resume

    Returns:
        list[Block]: Blocks ready to be rendered
    """
    if not html:
        return []

    blocks: list[Block] = []
    blocks.extend(_extract_heading(html, H1_PATTERN, TitleBlock))
    blocks.extend(_extract_heading(html, H4_PATTERN, SubtitleBlock))
    blocks.extend(_extract_paragraphs(html))
    blocks.extend(_extract_list_items(html))

    logger.debug(f"Translated markup into {len(blocks)} blocks")
    return blocks


def is_section_header(text: str) -> bool:
    """Check if bold text is a section heading (all uppercase, longer than 3 chars)

    Args:
        text (str): Normalized bold text

    Returns:
        bool: True if the text should render as a section header
    """
    return len(text) >= SECTION_HEADER_MIN_LENGTH and text == text.upper()


def _extract_heading(html: str, pattern: re.Pattern, block_cls: type) -> list[Block]:
    """Build at most one block from the first element matching `pattern`"""
    match = pattern.search(html)
    if not match:
        return []

    return [block_cls(normalize_text(match.group(1)))]


def _extract_paragraphs(html: str) -> list[Block]:
    """Build blocks from every <p> element, skipping repeated paragraphs

    Args:
        html (str): HTML fragment of the resume

    Returns:
        list[Block]: Paragraph-derived blocks in source order
    """
    seen_paragraphs = set()
    blocks = []

    for match in P_PATTERN.finditer(html):
        content = match.group(1)
        clean_content = normalize_text(content)

        if not clean_content or clean_content.lower() in seen_paragraphs:
            continue
        seen_paragraphs.add(clean_content.lower())

        strong_match = STRONG_PATTERN.search(content)
        if strong_match:
            blocks.extend(_split_strong_paragraph(content, strong_match))
        else:
            blocks.append(PlainParagraphBlock(clean_content))

    return blocks


def _split_strong_paragraph(content: str, strong_match: re.Match) -> list[Block]:
    """Split a paragraph holding a bold run into header or labeled-line blocks

    Args:
        content (str): Raw inner markup of the paragraph
        strong_match (re.Match): First <strong> element inside `content`

    Returns:
        list[Block]: One or two blocks for this paragraph
    """
    strong_text = normalize_text(strong_match.group(1))
    remainder = content[: strong_match.start()] + content[strong_match.end() :]
    rest_text = LEADING_SEPARATOR_PATTERN.sub("", normalize_text(remainder))

    if is_section_header(strong_text):
        blocks = [SectionHeaderBlock(strong_text)]
        if rest_text:
            blocks.append(HeaderWithTrailingTextBlock(strong_text, rest_text))
        return blocks

    return [LabeledLineBlock(strong_text, rest_text)]


def _extract_list_items(html: str) -> list[Block]:
    """Build a bullet block from every <li> element, duplicates included

    Args:
        html (str): HTML fragment of the resume

    Returns:
        list[Block]: Bullet blocks in source order
    """
    blocks = []

    for match in LI_PATTERN.finditer(html):
        text = normalize_text(match.group(1))
        if not text:
            continue
        text = LEADING_BULLET_PATTERN.sub("", text, count=1)

        category_match = CATEGORY_PATTERN.match(text)
        if category_match:
            blocks.append(
                BulletBlock(
                    value=category_match.group(2), category=category_match.group(1)
                )
            )
        else:
            blocks.append(BulletBlock(value=text))

    return blocks


__all__ = ["is_section_header", "parse_html_to_blocks"]
