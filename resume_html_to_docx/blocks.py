from dataclasses import dataclass
from enum import Enum


class BlockType(Enum):
    """Kinds of blocks produced from resume markup

    Properties:
        style_key (str): Key of the matching entry under `block_styles` in the config
    """

    TITLE = "title"
    SUBTITLE = "subtitle"
    SECTION_HEADER = "section_header"
    SECTION_TRAILING = "section_trailing"
    LABELED_LINE = "labeled_line"
    PARAGRAPH = "paragraph"
    BULLET = "bullet"

    @property
    def style_key(self) -> str:
        return self.value


class Block:
    """Base class for all document blocks"""

    block_type: BlockType


@dataclass(frozen=True)
class TitleBlock(Block):
    """Candidate name, centered and bold"""

    text: str
    block_type = BlockType.TITLE


@dataclass(frozen=True)
class SubtitleBlock(Block):
    """Tagline under the name, centered"""

    text: str
    block_type = BlockType.SUBTITLE


@dataclass(frozen=True)
class SectionHeaderBlock(Block):
    """All-uppercase bold section heading (e.g. EXPERIENCE)"""

    text: str
    block_type = BlockType.SECTION_HEADER


@dataclass(frozen=True)
class HeaderWithTrailingTextBlock(Block):
    """Plain text found on the same source line as a section header"""

    header: str
    trailing: str
    block_type = BlockType.SECTION_TRAILING


@dataclass(frozen=True)
class LabeledLineBlock(Block):
    """Bold label followed by plain text, e.g. a job title and company/date"""

    label: str
    rest: str
    block_type = BlockType.LABELED_LINE


@dataclass(frozen=True)
class PlainParagraphBlock(Block):
    text: str
    block_type = BlockType.PARAGRAPH


@dataclass(frozen=True)
class BulletBlock(Block):
    """List item; `category` is rendered bold before the value when present"""

    value: str
    category: str | None = None
    block_type = BlockType.BULLET


__all__ = [
    "Block",
    "BlockType",
    "BulletBlock",
    "HeaderWithTrailingTextBlock",
    "LabeledLineBlock",
    "PlainParagraphBlock",
    "SectionHeaderBlock",
    "SubtitleBlock",
    "TitleBlock",
]
