"""Tests for resume_html_to_docx.translator.

Covers heading extraction, paragraph classification and deduplication,
list item splitting, and overall block ordering.
"""

import pytest

from resume_html_to_docx.blocks import (
    BlockType,
    BulletBlock,
    HeaderWithTrailingTextBlock,
    LabeledLineBlock,
    PlainParagraphBlock,
    SectionHeaderBlock,
    SubtitleBlock,
    TitleBlock,
)
from resume_html_to_docx.translator import is_section_header, parse_html_to_blocks


class TestHeadings:
    def test_title_is_first_block(self) -> None:
        blocks = parse_html_to_blocks("<h1>Jane Doe</h1><p>hi</p>")
        assert blocks[0] == TitleBlock("Jane Doe")

    def test_only_first_title_and_subtitle(self) -> None:
        blocks = parse_html_to_blocks(
            "<h1>Jane Doe</h1><h1>Other</h1><h4>Engineer</h4><h4>Manager</h4>"
        )
        assert blocks == [TitleBlock("Jane Doe"), SubtitleBlock("Engineer")]

    def test_heading_tags_case_insensitive_with_attributes(self) -> None:
        blocks = parse_html_to_blocks(
            '<H1 class="name">Jane <em>Q.</em> Doe</H1><h4 id="t">Go &amp; Rust</h4>'
        )
        assert blocks == [TitleBlock("Jane Q. Doe"), SubtitleBlock("Go & Rust")]

    def test_subtitle_before_title_in_source(self) -> None:
        blocks = parse_html_to_blocks("<h4>Engineer</h4><h1>Jane Doe</h1>")
        assert blocks == [TitleBlock("Jane Doe"), SubtitleBlock("Engineer")]

    def test_empty_heading_still_emits_block(self) -> None:
        assert parse_html_to_blocks("<h1> <br> </h1>") == [TitleBlock("")]
        assert parse_html_to_blocks("<h1></h1><h4></h4>") == [
            TitleBlock(""),
            SubtitleBlock(""),
        ]


class TestParagraphs:
    def test_plain_paragraph(self) -> None:
        blocks = parse_html_to_blocks("<p>Skilled in  Go</p>")
        assert blocks == [PlainParagraphBlock("Skilled in Go")]

    def test_duplicate_paragraphs_dropped(self) -> None:
        blocks = parse_html_to_blocks("<p>Skilled in Go</p><p>Skilled in Go</p>")
        assert blocks == [PlainParagraphBlock("Skilled in Go")]

    def test_dedup_is_case_insensitive_first_seen_wins(self) -> None:
        blocks = parse_html_to_blocks("<p>Skilled in Go</p><p>SKILLED in go</p>")
        assert blocks == [PlainParagraphBlock("Skilled in Go")]

    def test_dedup_uses_full_paragraph_text(self) -> None:
        blocks = parse_html_to_blocks(
            "<p><strong>EXPERIENCE</strong></p><p>Experience</p>"
        )
        assert blocks == [SectionHeaderBlock("EXPERIENCE")]

    def test_empty_paragraphs_skipped(self) -> None:
        blocks = parse_html_to_blocks("<p></p><p>&nbsp;</p><p><br></p><p>text</p>")
        assert blocks == [PlainParagraphBlock("text")]

    def test_section_header(self) -> None:
        blocks = parse_html_to_blocks("<p><strong>EXPERIENCE</strong></p>")
        assert blocks == [SectionHeaderBlock("EXPERIENCE")]

    def test_section_header_with_trailing_text(self) -> None:
        blocks = parse_html_to_blocks(
            "<p><strong>EXPERIENCE</strong> | 2015 - Present</p>"
        )
        assert blocks == [
            SectionHeaderBlock("EXPERIENCE"),
            HeaderWithTrailingTextBlock("EXPERIENCE", "2015 - Present"),
        ]

    def test_short_uppercase_bold_is_labeled_line(self) -> None:
        blocks = parse_html_to_blocks("<p><strong>Exp</strong> - short</p>")
        assert blocks == [LabeledLineBlock("Exp", "short")]

    def test_three_letter_uppercase_is_not_header(self) -> None:
        blocks = parse_html_to_blocks("<p><strong>AWS</strong> - certified</p>")
        assert blocks == [LabeledLineBlock("AWS", "certified")]

    def test_mixed_case_bold_is_labeled_line(self) -> None:
        blocks = parse_html_to_blocks(
            "<p><strong>Staff Engineer</strong> - Acme Corp, 2019</p>"
        )
        assert blocks == [LabeledLineBlock("Staff Engineer", "Acme Corp, 2019")]

    def test_labeled_line_without_rest(self) -> None:
        blocks = parse_html_to_blocks("<p><strong>Staff Engineer</strong></p>")
        assert blocks == [LabeledLineBlock("Staff Engineer", "")]

    def test_text_before_bold_kept_in_rest(self) -> None:
        blocks = parse_html_to_blocks("<p>2019 <strong>Staff Engineer</strong></p>")
        assert blocks == [LabeledLineBlock("Staff Engineer", "2019")]

    def test_only_first_bold_element_splits(self) -> None:
        blocks = parse_html_to_blocks(
            "<p><strong>Engineer</strong> at <strong>Acme</strong></p>"
        )
        assert blocks == [LabeledLineBlock("Engineer", "at Acme")]

    def test_bold_with_attributes(self) -> None:
        blocks = parse_html_to_blocks('<p><STRONG class="h">SKILLS</STRONG></p>')
        assert blocks == [SectionHeaderBlock("SKILLS")]

    def test_pre_element_is_not_a_paragraph(self) -> None:
        assert parse_html_to_blocks("<pre>code</pre>") == []

    def test_paragraph_match_does_not_span_lines(self) -> None:
        assert parse_html_to_blocks("<p>first\nsecond</p>") == []


class TestListItems:
    def test_category_split(self) -> None:
        blocks = parse_html_to_blocks("<ul><li>Languages: Go, Rust</li></ul>")
        assert blocks == [BulletBlock(category="Languages", value="Go, Rust")]

    def test_plain_bullet(self) -> None:
        blocks = parse_html_to_blocks("<ul><li>Led a team of 5</li></ul>")
        assert blocks == [BulletBlock(value="Led a team of 5")]

    def test_split_on_first_colon(self) -> None:
        blocks = parse_html_to_blocks("<li>Note: ratio was 3:1</li>")
        assert blocks == [BulletBlock(category="Note", value="ratio was 3:1")]

    def test_colon_without_value_is_plain(self) -> None:
        blocks = parse_html_to_blocks("<li>Highlights:</li>")
        assert blocks == [BulletBlock(value="Highlights:")]

    def test_leading_bullet_glyph_stripped(self) -> None:
        blocks = parse_html_to_blocks("<li>•  Shipped v2</li>")
        assert blocks == [BulletBlock(value="Shipped v2")]

    def test_list_item_spans_lines(self) -> None:
        blocks = parse_html_to_blocks("<li>\n  Tools:\n  Docker &amp; Kubernetes\n</li>")
        assert blocks == [BulletBlock(category="Tools", value="Docker & Kubernetes")]

    def test_duplicates_preserved(self) -> None:
        blocks = parse_html_to_blocks("<ul><li>Same</li></ul><ul><li>Same</li></ul>")
        assert blocks == [BulletBlock(value="Same"), BulletBlock(value="Same")]

    def test_empty_items_skipped(self) -> None:
        assert parse_html_to_blocks("<ul><li> </li><li><b></b></li></ul>") == []

    def test_lone_bullet_glyph_is_empty_bullet(self) -> None:
        assert parse_html_to_blocks("<li>•</li>") == [BulletBlock(value="")]

    def test_bullet_block_type(self) -> None:
        (block,) = parse_html_to_blocks("<li>x</li>")
        assert block.block_type is BlockType.BULLET
        assert block.category is None


class TestOrdering:
    def test_end_to_end(self) -> None:
        html = (
            "<h1>Jane Doe</h1><h4>Engineer</h4>"
            "<p><strong>EXPERIENCE</strong></p>"
            "<ul><li>Built: systems</li></ul>"
        )
        assert parse_html_to_blocks(html) == [
            TitleBlock("Jane Doe"),
            SubtitleBlock("Engineer"),
            SectionHeaderBlock("EXPERIENCE"),
            BulletBlock(category="Built", value="systems"),
        ]

    def test_bullets_trail_paragraphs(self) -> None:
        html = "<ul><li>first</li></ul><p>after</p><ul><li>second</li></ul><p>last</p>"
        assert parse_html_to_blocks(html) == [
            PlainParagraphBlock("after"),
            PlainParagraphBlock("last"),
            BulletBlock(value="first"),
            BulletBlock(value="second"),
        ]

    def test_sample_resume(self, sample_html: str) -> None:
        assert parse_html_to_blocks(sample_html) == [
            TitleBlock("Jane Doe"),
            SubtitleBlock("Senior Software Engineer"),
            SectionHeaderBlock("SUMMARY"),
            PlainParagraphBlock(
                "Engineer with ten years of experience building distributed systems."
            ),
            SectionHeaderBlock("EXPERIENCE"),
            HeaderWithTrailingTextBlock("EXPERIENCE", "2015 - Present"),
            LabeledLineBlock("Staff Engineer", "Acme Corp, 2019 - Present"),
            SectionHeaderBlock("SKILLS"),
            BulletBlock(value="Led a team of 5"),
            BulletBlock(value="Cut build times by 40%"),
            BulletBlock(category="Languages", value="Go, Rust, Python"),
            BulletBlock(category="Tools", value="Docker & Kubernetes"),
        ]

    def test_calls_do_not_share_dedup_state(self) -> None:
        html = "<p>Skilled in Go</p>"
        assert parse_html_to_blocks(html) == parse_html_to_blocks(html)

    @pytest.mark.parametrize("html", ["", None, "plain text", "<div><span></span></div>"])
    def test_total_over_inputs_without_blocks(self, html) -> None:
        assert parse_html_to_blocks(html) == []


class TestIsSectionHeader:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("EXPERIENCE", True),
            ("R&D TEAM", True),
            ("SKILLS", True),
            ("EXP", False),
            ("Experience", False),
            ("", False),
        ],
    )
    def test_rule(self, text: str, expected: bool) -> None:
        assert is_section_header(text) is expected
