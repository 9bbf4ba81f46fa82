"""
ECDSA signature format conversion for jwtcheck

JWS tokens carry ECDSA signatures in the IEEE P1363 form, the fixed-width
concatenation r || s. The cryptography package verifies signatures in the
ASN.1 DER form SEQUENCE { INTEGER r, INTEGER s }. This module converts
between the two without going through a token library.
"""

from typing import Tuple

from ..exceptions import SignatureFormatError

# ASN.1 tags used by ECDSA-Sig-Value
DER_SEQUENCE_TAG = 0x30
DER_INTEGER_TAG = 0x02

# Lengths below this fit in the single-byte short form
DER_SHORT_LENGTH_LIMIT = 0x80


def _validate_raw_signature(raw_signature: bytes) -> None:
    """
    Validate a raw r || s signature.
    
    Args:
        raw_signature: Raw signature bytes
        
    Raises:
        SignatureFormatError: If the signature is empty, odd-length or not bytes
    """
    if not isinstance(raw_signature, (bytes, bytearray)):
        raise SignatureFormatError("Raw signature must be bytes", "INVALID_SIGNATURE_TYPE")
    
    if len(raw_signature) == 0:
        raise SignatureFormatError("Raw signature cannot be empty", "EMPTY_SIGNATURE")
    
    if len(raw_signature) % 2 != 0:
        raise SignatureFormatError(
            f"Raw signature length must be even, got {len(raw_signature)} bytes",
            "INVALID_SIGNATURE_LENGTH",
            {'length': len(raw_signature)}
        )


def _encode_length(length: int) -> bytes:
    """Encode a DER length octet sequence"""
    if length < DER_SHORT_LENGTH_LIMIT:
        return bytes([length])
    
    # Long form for P-521 sized signatures
    length_bytes = length.to_bytes((length.bit_length() + 7) // 8, 'big')
    return bytes([0x80 | len(length_bytes)]) + length_bytes


def _encode_integer(value: bytes) -> bytes:
    """
    Encode unsigned big-endian bytes as a minimal DER INTEGER.
    
    Redundant leading zero bytes are stripped (at least one byte always
    remains) and a single zero byte is prepended when the high bit is set,
    so the value is never read back as negative.
    """
    content = bytes(value).lstrip(b'\x00') or b'\x00'
    if content[0] & 0x80:
        content = b'\x00' + content
    
    return bytes([DER_INTEGER_TAG]) + _encode_length(len(content)) + content


def split_raw_signature(raw_signature: bytes) -> Tuple[int, int]:
    """
    Split a raw r || s signature into its two integers.
    
    Args:
        raw_signature: Raw signature bytes of even length
        
    Returns:
        Tuple[int, int]: The (r, s) integers
        
    Raises:
        SignatureFormatError: If the signature cannot be split
    """
    _validate_raw_signature(raw_signature)
    
    half = len(raw_signature) // 2
    r = int.from_bytes(raw_signature[:half], 'big')
    s = int.from_bytes(raw_signature[half:], 'big')
    return r, s


def raw_to_der_signature(raw_signature: bytes) -> bytes:
    """
    Convert an IEEE P1363 (r || s) signature to DER.
    
    The output is byte-identical to what an ASN.1 DER encoder produces for
    the same two integers.
    
    Args:
        raw_signature: Raw signature bytes, r then s, each half the length
        
    Returns:
        bytes: DER encoded ECDSA-Sig-Value
        
    Raises:
        SignatureFormatError: If the signature is empty or odd-length
    """
    _validate_raw_signature(raw_signature)
    
    half = len(raw_signature) // 2
    body = _encode_integer(raw_signature[:half]) + _encode_integer(raw_signature[half:])
    
    return bytes([DER_SEQUENCE_TAG]) + _encode_length(len(body)) + body
