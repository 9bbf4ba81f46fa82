"""
Cryptographic operations for jwtcheck
"""

from .der import (
    raw_to_der_signature,
    split_raw_signature,
)

from .ecdsa import (
    ES256_CURVE,
    SUPPORTED_CURVES,
    load_ec_public_key,
    ensure_curve,
    verify_der_signature,
    check_platform_compatibility,
)

__all__ = [
    'raw_to_der_signature',
    'split_raw_signature',
    'ES256_CURVE',
    'SUPPORTED_CURVES',
    'load_ec_public_key',
    'ensure_curve',
    'verify_der_signature',
    'check_platform_compatibility',
]
