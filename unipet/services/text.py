"""
Text Sanitising Services

Strip script-like markup from admin and visitor text while keeping the
line breaks the public pages render.
"""

import re

_LINE_BREAKS = re.compile(r'\r\n|\r')
_DANGEROUS = [
    re.compile(r'<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>', re.IGNORECASE),
    re.compile(r'<iframe\b[^<]*(?:(?!</iframe>)<[^<]*)*</iframe>', re.IGNORECASE),
    re.compile(r'<object\b[^<]*(?:(?!</object>)<[^<]*)*</object>', re.IGNORECASE),
    re.compile(r'<embed\b[^<]*(?:(?!</embed>)<[^<]*)*</embed>', re.IGNORECASE),
    re.compile(r'javascript:', re.IGNORECASE),
    re.compile(r'\bon\w+\s*=', re.IGNORECASE),
]
_BLANK_LINES = re.compile(r'\n[ \t]*\n(?:[ \t]*\n)*')
_SPACES = re.compile(r'[ \t]+')


def normalize_line_breaks(text):
    return _LINE_BREAKS.sub('\n', text)


def sanitize_text(text):
    """Remove scripts, embeds and inline handlers; keep paragraph breaks."""
    if not text or not isinstance(text, str):
        return ''

    sanitized = normalize_line_breaks(text)
    for pattern in _DANGEROUS:
        sanitized = pattern.sub('', sanitized)

    sanitized = _BLANK_LINES.sub('\n\n', sanitized)
    sanitized = _SPACES.sub(' ', sanitized)
    return sanitized.strip()


def validate_text_length(text, max_length):
    """Length check that counts a CRLF pair as one character."""
    if not text:
        return True
    return len(normalize_line_breaks(text)) <= max_length


def get_text_stats(text):
    """Character, line and word counts for admin form hints."""
    if not text:
        return {'characters': 0, 'lines': 0, 'words': 0}

    normalized = normalize_line_breaks(text)
    return {
        'characters': len(normalized),
        'lines': len(normalized.split('\n')),
        'words': len(normalized.split()),
    }
