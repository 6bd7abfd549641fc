import re

##############################
# Patterns
##############################
TAG_PATTERN = re.compile(r"<[^>]+>")
WHITESPACE_PATTERN = re.compile(r"\s+")

# Decoded in this order; anything else is left verbatim
HTML_ENTITIES = (
    (re.compile(r"&nbsp;", re.IGNORECASE), " "),
    (re.compile(r"&amp;", re.IGNORECASE), "&"),
    (re.compile(r"&lt;", re.IGNORECASE), "<"),
    (re.compile(r"&gt;", re.IGNORECASE), ">"),
    (re.compile(r"&quot;", re.IGNORECASE), '"'),
)


def normalize_text(html: str | None) -> str:
    """Convert an HTML fragment to plain text

    Tags are replaced with a space, the supported named entities are decoded,
    whitespace runs are collapsed and the result is trimmed.

    Args:
        html (str): HTML fragment, may be empty

    Returns:
        str: Normalized plain text ("" when nothing but markup is present)
    """
    if not html:
        return ""

    text = TAG_PATTERN.sub(" ", html)
    for pattern, replacement in HTML_ENTITIES:
        text = pattern.sub(replacement, text)

    return WHITESPACE_PATTERN.sub(" ", text).strip()


__all__ = ["normalize_text"]
