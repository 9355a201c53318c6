"""
Preview Sanitization

Cleans HTML rendered from editor trees before it is handed to a browser.
Text is already escaped by the renderer; this is the allowlist pass over the
tags plugins declare.
"""

from typing import List, Optional

import bleach

# Tags the built-in plugins serialize to
PREVIEW_TAGS = [
    'p', 'br', 'strong', 'em', 'u', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'blockquote', 'code', 'pre', 'hr', 'ul', 'ol', 'li', 'a', 'span',
]

PREVIEW_ATTRS = {
    'a': ['href', 'title'],
    'span': ['class'],
    'code': ['class'],
}

ALLOWED_PROTOCOLS = ['http', 'https', 'mailto']


def sanitize_preview_html(
    html: Optional[str],
    tags: Optional[List[str]] = None,
    attributes: Optional[dict] = None,
) -> str:
    """
    Sanitize rendered preview HTML.

    Args:
        html: The HTML to sanitize
        tags: Allowed tags (default: PREVIEW_TAGS)
        attributes: Allowed attributes per tag (default: PREVIEW_ATTRS)

    Returns:
        Sanitized HTML string; disallowed tags are stripped, their text kept
    """
    if html is None:
        return ""

    return bleach.clean(
        html,
        tags=tags if tags is not None else PREVIEW_TAGS,
        attributes=attributes if attributes is not None else PREVIEW_ATTRS,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )
