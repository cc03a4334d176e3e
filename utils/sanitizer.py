"""
Input Sanitization Module

Cleans text and URLs taken from externally fetched pages before they are
stored. Values are stored as plain text, so HTML entities are decoded and
markup is dropped rather than escaped.
"""

import html
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup

_CONTROL_CHARS_RE = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')
_TAG_RE = re.compile(r'</?[A-Za-z][^<>]*>')


def sanitize_text(text, max_length=None):
    """
    Turn a scraped value into plain text.

    Args:
        text: The text to clean (can be None)
        max_length: Optional maximum length

    Returns:
        Cleaned string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    # Decode entities twice; some sites double-encode (&amp;amp;)
    text = html.unescape(html.unescape(text))

    # Drop markup and control characters, keep newlines and tabs.
    # A bare < or > ("< 60C") is text, not a tag.
    if _TAG_RE.search(text):
        text = BeautifulSoup(text, 'html.parser').get_text()
    text = _CONTROL_CHARS_RE.sub('', text)
    text = text.replace('\u00a0', ' ')

    text = text.strip()

    if max_length is not None and len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_name(name, max_length=500):
    """Single-line version of sanitize_text for names and labels."""
    name = sanitize_text(name)
    name = re.sub(r'\s+', ' ', name)
    if len(name) > max_length:
        name = name[:max_length - 3] + '...'
    return name


def sanitize_url(url):
    """
    Sanitize a URL by rejecting dangerous schemes.

    Args:
        url: The URL to validate (can be None)

    Returns:
        The URL if it is http(s), empty string if unsafe or invalid
    """
    if not url:
        return ''

    if not isinstance(url, str):
        return ''

    url = url.strip()

    try:
        parsed = urlparse(url)
    except ValueError:
        return ''

    # Only allow http and https
    if parsed.scheme.lower() not in ('http', 'https'):
        return ''

    if not parsed.netloc:
        return ''

    return url
