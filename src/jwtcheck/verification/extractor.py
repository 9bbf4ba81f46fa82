"""
Token extraction from free-form text
"""

import re
from typing import Any, Optional

# Three base64url segments separated by dots. A plain pattern search, not
# a parser: "a.b.c.d" yields "a.b.c".
TOKEN_PATTERN = re.compile(r'[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+')


def extract_token(text: Any) -> Optional[str]:
    """
    Find the first token-shaped substring in text.
    
    Args:
        text: Input that may contain a token; None and non-strings yield None
        
    Returns:
        str or None: The leftmost match, or None if there is none
    """
    if not text or not isinstance(text, str):
        return None
    
    match = TOKEN_PATTERN.search(text)
    return match.group(0) if match else None
