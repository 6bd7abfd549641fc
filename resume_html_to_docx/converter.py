import argparse
import logging
import sys
from io import BytesIO
from pathlib import Path
from typing import Dict, Iterable

from docx import Document as DOCX_Document
from docx.document import Document as DOCX_DocumentType
from docx.enum.text import WD_ALIGN_PARAGRAPH as DOCX_PARAGRAPH_ALIGN
from docx.shared import Inches, Pt, RGBColor
from docx.text.font import Font as DOCX_FONT
from docx.text.paragraph import Paragraph as DOCX_Paragraph
from docx.text.parfmt import ParagraphFormat as DOCX_ParagraphFormat

from resume_html_to_docx.blocks import Block, BlockType
from resume_html_to_docx.config import DEFAULT_CONFIG_FILE, ConfigLoader
from resume_html_to_docx.translator import parse_html_to_blocks

logger = logging.getLogger(__name__)

##############################
# Defaults
##############################
DOCX_EXTENSION = "docx"
DOCX_MIMETYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)
DEFAULT_LIST_STYLE = "List Bullet"
CATEGORY_SEPARATOR = ": "

ALIGNMENT_MAP = {
    "left": DOCX_PARAGRAPH_ALIGN.LEFT,
    "center": DOCX_PARAGRAPH_ALIGN.CENTER,
    "right": DOCX_PARAGRAPH_ALIGN.RIGHT,
    "justify": DOCX_PARAGRAPH_ALIGN.JUSTIFY,
}


##############################
# Main Processors
##############################
def render_docx(html: str, config_loader: ConfigLoader | None = None) -> bytes:
    """Convert resume markup to the bytes of a Word document

    Args:
        html (str): HTML fragment of the resume
        config_loader (ConfigLoader, optional): Document configuration.
            If None, loads the default config file.

    Returns:
        bytes: Serialized .docx document
    """
    if config_loader is None:
        config_loader = ConfigLoader()

    blocks = parse_html_to_blocks(html)
    document = create_resume_document(blocks, config_loader)

    buffer = BytesIO()
    document.save(buffer)
    logger.info(f"Rendered {len(blocks)} blocks into {buffer.tell()} bytes")
    return buffer.getvalue()


def create_resume_document(
    blocks: Iterable[Block], config_loader: ConfigLoader
) -> DOCX_DocumentType:
    """Build a Word document with one paragraph per block

    Args:
        blocks (Iterable[Block]): Blocks from the translator, in output order
        config_loader (ConfigLoader): Document configuration

    Returns:
        Document: The populated python-docx document
    """
    document = DOCX_Document()
    doc_defaults = config_loader.document_defaults

    _apply_default_run_style(document, doc_defaults)
    _apply_page_layout(document, doc_defaults)

    label_separator = doc_defaults.get("label_separator", "")
    for block in blocks:
        _add_block(document, block, config_loader, label_separator)

    return document


def _add_block(
    document: DOCX_DocumentType,
    block: Block,
    config_loader: ConfigLoader,
    label_separator: str = "",
) -> DOCX_Paragraph:
    """Add the paragraph for a single block

    Args:
        document: The Word document object
        block: Block to render
        config_loader: Document configuration
        label_separator: Text placed between a bold label and the rest of its line

    Returns:
        paragraph: The created paragraph
    """
    style = config_loader.get_block_style(block.block_type.style_key)

    if block.block_type is BlockType.BULLET:
        para = _add_bullet_paragraph(document, config_loader)
    else:
        para = document.add_paragraph()

    for text, bold in _block_runs(block, label_separator):
        run = para.add_run(text)
        font_props = dict(style)
        if bold is not None:
            font_props["bold"] = bold
        _apply_font_properties(run.font, font_props)

    _apply_paragraph_format_properties(para.paragraph_format, style)
    return para


def _block_runs(
    block: Block, label_separator: str = ""
) -> list[tuple[str, bool | None]]:
    """Get the text runs of a block with their explicit weight

    Args:
        block: Block to split into runs
        label_separator: Prefix of a non-empty labeled-line rest run

    Returns:
        list: (text, bold) pairs; bold None means the block style decides
    """
    block_type = block.block_type

    if block_type is BlockType.SECTION_TRAILING:
        return [(block.trailing, None)]
    if block_type is BlockType.LABELED_LINE:
        rest = f"{label_separator}{block.rest}" if block.rest else ""
        return [(block.label, True), (rest, False)]
    if block_type is BlockType.BULLET:
        if block.category:
            return [(f"{block.category}{CATEGORY_SEPARATOR}", True), (block.value, False)]
        return [(block.value, None)]

    return [(block.text, None)]


def _add_bullet_paragraph(
    document: DOCX_DocumentType, config_loader: ConfigLoader
) -> DOCX_Paragraph:
    """Add an empty bullet list paragraph with the configured indentation

    Args:
        document: The Word document object
        config_loader: Document configuration

    Returns:
        paragraph: The created paragraph
    """
    list_style = config_loader.get_list_option("ul", "style", DEFAULT_LIST_STYLE)
    try:
        para = document.add_paragraph(style=list_style)
    except KeyError:
        logger.warning(f"List style '{list_style}' not found, using '{DEFAULT_LIST_STYLE}'")
        para = document.add_paragraph(style=DEFAULT_LIST_STYLE)

    indent_left = config_loader.get_list_option("ul", "indent_left")
    indent_hanging = config_loader.get_list_option("ul", "indent_hanging")
    if indent_left is not None:
        _left_indent_paragraph(para, indent_left)
    if indent_hanging is not None:
        para.paragraph_format.first_line_indent = Inches(-indent_hanging)

    return para


##############################
# Document Helpers
##############################
def _apply_default_run_style(
    document: DOCX_DocumentType, doc_defaults: Dict[str, str | int | float]
) -> None:
    """Apply the default font to the Normal style

    Args:
        document: The Word document object
        doc_defaults: Document defaults configuration
    """
    _apply_font_properties(
        document.styles["Normal"].font,
        {
            key: doc_defaults[key]
            for key in ("font_name", "font_size")
            if doc_defaults.get(key) is not None
        },
    )


def _apply_page_layout(
    document: DOCX_DocumentType, doc_defaults: Dict[str, str | int | float]
) -> None:
    """Apply page size and margins to every section

    Args:
        document: The Word document object
        doc_defaults: Document defaults configuration
    """
    for section in document.sections:
        if doc_defaults.get("page_width"):
            section.page_width = Inches(doc_defaults["page_width"])
        if doc_defaults.get("page_height"):
            section.page_height = Inches(doc_defaults["page_height"])
        for side in ("top", "bottom", "left", "right"):
            margin = doc_defaults.get(f"margin_{side}")
            if margin is not None:
                setattr(section, f"{side}_margin", Inches(margin))


def _apply_font_properties(font_obj: DOCX_FONT, properties: Dict[str, str]) -> None:
    """Apply font properties to a font object

    Args:
        font_obj: The font object (from style.font or run.font)
        properties: Dictionary containing font properties
    """
    if "font_name" in properties:
        font_obj.name = properties["font_name"]
    if "font_size" in properties:
        font_obj.size = Pt(properties["font_size"])
    if "bold" in properties:
        font_obj.bold = properties["bold"]
    if "italic" in properties:
        font_obj.italic = properties["italic"]
    if "underline" in properties:
        font_obj.underline = properties["underline"]
    if "color" in properties:
        font_obj.color.rgb = RGBColor.from_string(properties["color"])


def _apply_paragraph_format_properties(
    paragraph_format: DOCX_ParagraphFormat, properties: Dict[str, str | int | float]
) -> None:
    """Apply paragraph format properties to a paragraph format object

    Args:
        paragraph_format: The paragraph format object
        properties: Dictionary containing paragraph format properties
    """
    if properties.get("line_spacing") is not None:
        paragraph_format.line_spacing = properties["line_spacing"]
    if properties.get("space_before") is not None:
        paragraph_format.space_before = Pt(properties["space_before"])
    if properties.get("space_after") is not None:
        paragraph_format.space_after = Pt(properties["space_after"])
    if properties.get("indent_left") is not None:
        paragraph_format.left_indent = Inches(properties["indent_left"])
    if properties.get("indent_right") is not None:
        paragraph_format.right_indent = Inches(properties["indent_right"])
    if properties.get("alignment") is not None:
        paragraph_format.alignment = _paragraph_alignment(properties["alignment"])


def _paragraph_alignment(alignment_str: str = "left") -> DOCX_PARAGRAPH_ALIGN:
    """Get the paragraph alignment for a configuration string

    Args:
        alignment_str: Alignment as string (left, center, right, justify)

    Returns:
        WD_ALIGN_PARAGRAPH: Matching alignment, LEFT when unknown
    """
    return ALIGNMENT_MAP.get(alignment_str.lower(), DOCX_PARAGRAPH_ALIGN.LEFT)


def _left_indent_paragraph(
    paragraph: DOCX_Paragraph, inches: float = 0.25
) -> DOCX_Paragraph:
    """Set the left indentation of a paragraph in inches

    Args:
        paragraph: The paragraph object to modify
        inches (float): Amount of indentation in inches

    Returns:
        paragraph: The modified paragraph object
    """
    paragraph.paragraph_format.left_indent = Inches(inches)
    return paragraph


##############################
# Command Line
##############################
def output_path(input_file: Path, output_file: Path | None = None) -> Path:
    """Get the output file path, defaulting to the input name with a .docx suffix

    Args:
        input_file (Path): The input HTML file
        output_file (Path, optional): Explicit output path

    Returns:
        Path: The output path
    """
    if output_file:
        return Path(output_file)
    return input_file.with_suffix(f".{DOCX_EXTENSION}")


def main(argv: list[str] | None = None) -> int:
    """Convert an HTML resume file to a Word document

    Args:
        argv (list[str], optional): Command line arguments, defaults to sys.argv

    Returns:
        int: Process exit status
    """
    program_description = """
    Convert an HTML resume fragment to a Word document.

    Headings become the name and tagline, bold uppercase paragraphs become
    section headers, and list items become bullets.
    """

    epilog_text = """
    Examples:
      resume-html-to-docx -i resume.html
          - Converts resume.html to resume.docx

      resume-html-to-docx -i resume.html -o Jane_Doe.docx -c resume_config.yaml
          - Converts resume.html to Jane_Doe.docx with custom styles
    """

    parser = argparse.ArgumentParser(
        description=program_description,
        epilog=epilog_text,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-i", "--input", dest="input_file", help="Input HTML file")
    parser.add_argument(
        "-o",
        "--output",
        dest="output_file",
        help='Output Word document (default: "<input_file>.docx")',
    )
    parser.add_argument(
        "-c",
        "--config",
        dest="config_file",
        help="Path to YAML configuration file",
        default=DEFAULT_CONFIG_FILE,
    )

    args = parser.parse_args(argv)

    if not args.input_file:
        parser.print_help()
        return 1

    input_file = Path(args.input_file)
    if not input_file.is_file():
        print(f"❌ File '{input_file}' does not exist. Please enter a valid path.")
        return 1

    with open(input_file, "r", encoding="utf-8", errors="replace") as f:
        html = f.read()

    config_loader = ConfigLoader(Path(args.config_file))
    result = output_path(input_file, args.output_file)
    result.write_bytes(render_docx(html, config_loader))

    print(f"🎉 Resume document created: {result} 🎉")
    return 0


__all__ = [
    "create_resume_document",
    "main",
    "output_path",
    "render_docx",
    "DOCX_EXTENSION",
    "DOCX_MIMETYPE",
]

##############################
# Main Entry
##############################
if __name__ == "__main__":
    sys.exit(main())
