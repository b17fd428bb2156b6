"""Strip markup from user-supplied text before it is returned to clients."""
import re

from bs4 import BeautifulSoup

# Elements whose text content is executable or styling, not readable text
DROPPED_ELEMENTS = ('script', 'style', 'iframe', 'object', 'embed', 'noscript', 'template')

# A complete tag, comment, doctype or processing instruction: '<' + tag start ... '>'
TAG_PATTERN = re.compile(r'<[A-Za-z/!?][^<>]*>')


def escape_stray_brackets(value: str) -> str:
    """
    Entity-encode every '<' that does not open a complete tag.

    Keeps comparisons such as 'a<b' or '5 < 6' as text instead of letting
    the parser treat them as the start of an unterminated tag.
    """
    parts = []
    last = 0
    for match in TAG_PATTERN.finditer(value):
        parts.append(value[last:match.start()].replace('<', '&lt;'))
        parts.append(match.group())
        last = match.end()
    parts.append(value[last:].replace('<', '&lt;'))
    return ''.join(parts)


def sanitize_text(value: str) -> str:
    """
    Remove HTML tags and the contents of script-like elements.

    Pure function with no I/O. Uses BeautifulSoup with the stdlib html.parser
    backend, which keeps surrounding whitespace intact. Plain text, including
    text with bare '<', '&' or '>', is returned unchanged. Parsing repeats
    until the text is stable, since entity-encoded markup (&lt;script&gt;)
    decodes into new tags.

    Args:
        value:
            Text that may contain markup.

    Returns:
        The readable text with all tags removed.
    """
    previous = None
    while '<' in value and value != previous:
        previous = value
        soup = BeautifulSoup(escape_stray_brackets(value), 'html.parser')
        for element in soup(DROPPED_ELEMENTS):
            element.decompose()
        value = soup.get_text()
    return value
