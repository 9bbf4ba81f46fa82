"""
jwtcheck
Extraction and ES256 signature verification of tokens embedded in free text
"""

from .version import __version__
from .crypto import (
    raw_to_der_signature,
    split_raw_signature,
    verify_der_signature,
    check_platform_compatibility,
)
from .exceptions import (
    JWTCheckError,
    TokenFormatError,
    SignatureFormatError,
    KeyLoadError,
    CurveMismatchError,
    ConfigurationError,
)
from .verification import (
    NO_TOKEN_FOUND,
    SIGNATURE_VERIFICATION_FAILED,
    VerificationContext,
    VerificationOutcome,
    TrustedKey,
    build_key_chain,
    trusted_key,
    extract_token,
    verify_signature,
    resolve,
    extract_and_verify,
    inspect_token,
    BatchVerifier,
    create_batch_verifier,
)
from .config import KeyConfig, load_config


# Public API exports
__all__ = [
    '__version__',
    # Core
    'extract_token',
    'verify_signature',
    'extract_and_verify',
    'resolve',
    # Types
    'NO_TOKEN_FOUND',
    'SIGNATURE_VERIFICATION_FAILED',
    'VerificationContext',
    'VerificationOutcome',
    'TrustedKey',
    'build_key_chain',
    'trusted_key',
    # Crypto
    'raw_to_der_signature',
    'split_raw_signature',
    'verify_der_signature',
    'check_platform_compatibility',
    # Diagnostics and batch
    'inspect_token',
    'BatchVerifier',
    'create_batch_verifier',
    # Configuration
    'KeyConfig',
    'load_config',
    # Exceptions
    'JWTCheckError',
    'TokenFormatError',
    'SignatureFormatError',
    'KeyLoadError',
    'CurveMismatchError',
    'ConfigurationError',
]
