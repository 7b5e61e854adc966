# collab/core/sanitizers.py
"""
Input sanitization for user-generated text.

Serializers pass titles, descriptions and message bodies through these
before anything is stored.
"""
import re
from typing import Optional

import bleach

# Allowed HTML tags for rich text (project and task descriptions)
ALLOWED_TAGS = [
    'p', 'br', 'strong', 'em', 'u', 'a', 'ul', 'ol', 'li',
    'h1', 'h2', 'h3', 'h4', 'blockquote', 'code', 'pre'
]

ALLOWED_ATTRIBUTES = {
    'a': ['href', 'title'],
}

CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]')

MAX_TITLE_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 10000
MAX_MESSAGE_LENGTH = 5000


def sanitize_text(text: Optional[str], max_length: Optional[int] = None, strip: bool = True) -> str:
    """
    Plain text: control characters removed, length capped. None becomes "".
    Tags are kept as typed; clients render message bodies as text.
    """
    if text is None:
        return ""

    if strip:
        text = text.strip()

    # Newlines and tabs survive
    text = CONTROL_CHARS.sub('', text)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_html(html: Optional[str], max_length: Optional[int] = None) -> str:
    """
    Rich text: only ALLOWED_TAGS / ALLOWED_ATTRIBUTES survive.
    """
    if html is None:
        return ""

    clean = bleach.clean(
        html.strip(),
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        strip=True,
    )

    if max_length and len(clean) > max_length:
        clean = clean[:max_length]

    return clean


def sanitize_title(title: Optional[str]) -> str:
    """
    Single line, at most MAX_TITLE_LENGTH characters.
    """
    text = sanitize_text(title, max_length=MAX_TITLE_LENGTH)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def sanitize_description(description: Optional[str]) -> str:
    return sanitize_html(description, max_length=MAX_DESCRIPTION_LENGTH)


def sanitize_message(content: Optional[str]) -> str:
    return sanitize_text(content, max_length=MAX_MESSAGE_LENGTH)
