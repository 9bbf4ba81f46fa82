"""
Token verification module for jwtcheck

This module provides:
- Token extraction from free-form text
- ES256 signature verification with a manual fallback for keys on other curves
- Ordered multi-key resolution with a production/development trust policy
- Diagnostics and concurrent batch verification
"""

# Export types
from .types import (
    NO_TOKEN_FOUND,
    SIGNATURE_VERIFICATION_FAILED,
    VerificationContext,
    VerificationOutcome,
    TrustedKey,
    KeyPredicate,
)

# Export policies
from .policies import (
    PRODUCTION_KEY_NAME,
    DEVELOPMENT_KEY_NAME,
    KEY_POLICIES,
    always,
    development_only,
    get_key_policy,
    get_available_key_policies,
    trusted_key,
    build_key_chain,
)

from .extractor import TOKEN_PATTERN, extract_token
from .verifier import ALGORITHM, is_curve_mismatch, verify_signature
from .resolver import resolve, extract_and_verify

from .inspector import (
    KeyDiagnostic,
    TokenDiagnostics,
    inspect_token,
)

from .batch import BatchVerifier, create_batch_verifier

from .utils import split_token, redact_token

__all__ = [
    # Types
    'NO_TOKEN_FOUND',
    'SIGNATURE_VERIFICATION_FAILED',
    'VerificationContext',
    'VerificationOutcome',
    'TrustedKey',
    'KeyPredicate',
    
    # Policies
    'PRODUCTION_KEY_NAME',
    'DEVELOPMENT_KEY_NAME',
    'KEY_POLICIES',
    'always',
    'development_only',
    'get_key_policy',
    'get_available_key_policies',
    'trusted_key',
    'build_key_chain',
    
    # Core
    'TOKEN_PATTERN',
    'extract_token',
    'ALGORITHM',
    'is_curve_mismatch',
    'verify_signature',
    'resolve',
    'extract_and_verify',
    
    # Inspector
    'KeyDiagnostic',
    'TokenDiagnostics',
    'inspect_token',
    
    # Batch
    'BatchVerifier',
    'create_batch_verifier',
    
    # Utils
    'split_token',
    'redact_token',
]
