"""
Utility functions for token verification
"""

import binascii
from typing import Tuple

from jwt.utils import base64url_decode

from ..exceptions import TokenFormatError

TOKEN_SEGMENT_COUNT = 3


def split_token(token: str) -> Tuple[bytes, bytes]:
    """
    Split a token into its signed message and raw signature.
    
    The signed message is the first two segments joined by '.', exactly as
    they appear in the token; the signature is the third segment decoded
    from base64url.
    
    Args:
        token: Three-segment token
        
    Returns:
        Tuple[bytes, bytes]: (message, raw_signature)
        
    Raises:
        TokenFormatError: If the token is not three segments or the
            signature is not valid base64url
    """
    if not isinstance(token, str):
        raise TokenFormatError("Token must be a string", "INVALID_TOKEN_TYPE")
    
    segments = token.split('.')
    if len(segments) != TOKEN_SEGMENT_COUNT:
        raise TokenFormatError(
            f"Token must have {TOKEN_SEGMENT_COUNT} segments, got {len(segments)}",
            "INVALID_SEGMENT_COUNT",
            {'segments': len(segments)}
        )
    
    header, payload, signature = segments
    try:
        message = f"{header}.{payload}".encode('ascii')
        raw_signature = base64url_decode(signature)
    except (binascii.Error, ValueError) as e:
        raise TokenFormatError(f"Invalid token encoding: {e}", "INVALID_ENCODING") from e
    
    return message, raw_signature


def redact_token(token: str, visible: int = 12) -> str:
    """Shorten a token for log output"""
    if not token:
        return ''
    if len(token) <= visible:
        return '...'
    return f"{token[:visible]}..."
