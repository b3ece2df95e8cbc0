"""Default markup stripper for scraped field values.

Text without tags passes through unchanged. Tagged text is parsed as an
HTML fragment and reduced to its text content, leaving the surrounding
text and whitespace as they were.
"""

from __future__ import annotations

from lxml import html
from lxml.etree import ParserError

from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
_FRAGMENT_PARENT_TAG = "div"


def strip_markup(text: str) -> str:
    """Remove markup tags from a text value.

    Args:
        text: Raw scraped value, possibly containing HTML.

    Returns:
        Text content with tags removed.
    """
    if "<" not in text:
        return text
    # lxml maps NUL to U+FFFD.
    text = text.replace("\x00", "")
    try:
        fragment = html.fragment_fromstring(text, create_parent=_FRAGMENT_PARENT_TAG)
    except (ParserError, ValueError) as error:
        _LOGGER.debug("markup_strip_failed", reason=str(error), length=len(text))
        return text
    return fragment.text_content()
