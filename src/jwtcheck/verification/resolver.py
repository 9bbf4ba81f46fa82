"""
Multi-key token resolution

Runs the extractor over the input and tries each enabled trusted key in
order. The first key that verifies the token wins.
"""

import logging
from typing import Any, Optional, Sequence

from .extractor import extract_token
from .policies import build_key_chain
from .types import TrustedKey, VerificationContext, VerificationOutcome
from .utils import redact_token
from .verifier import verify_signature

logger = logging.getLogger(__name__)


def resolve(
    text: Any,
    keys: Sequence[TrustedKey],
    context: Optional[VerificationContext] = None
) -> VerificationOutcome:
    """
    Extract a token from text and verify it against an ordered key chain.
    
    Args:
        text: Input that may contain a token
        keys: Trusted keys in priority order
        context: Policy context (defaults to production mode)
        
    Returns:
        VerificationOutcome: The verdict
    """
    context = context or VerificationContext()
    
    token = extract_token(text)
    if token is None:
        logger.debug("No token found in input")
        return VerificationOutcome.not_found()
    
    for key in keys:
        try:
            enabled = key.is_enabled(context)
        except Exception as e:
            logger.warning(f"Policy for {key.name} key failed, skipping it: {e}")
            continue
        if not enabled:
            continue
        if verify_signature(token, key.public_key_pem):
            logger.debug(f"Token {redact_token(token)} verified with {key.name} key")
            return VerificationOutcome.verified(token, key.name)
    
    logger.warning(f"Token {redact_token(token)} rejected by all trusted keys")
    return VerificationOutcome.rejected(token)


def extract_and_verify(
    text: Any,
    primary_key_pem: Optional[str],
    secondary_key_pem: Optional[str] = None,
    development_mode: bool = False
) -> VerificationOutcome:
    """
    Extract and verify a token with the production/development key policy.
    
    The primary (production) key is always tried first. The secondary
    (development) key is consulted only in development mode, even when it
    is configured.
    
    Args:
        text: Input that may contain a token
        primary_key_pem: Production public key (PEM)
        secondary_key_pem: Development public key (PEM), optional
        development_mode: Whether the host runs in development mode
        
    Returns:
        VerificationOutcome: The verdict
    """
    return resolve(
        text,
        build_key_chain(primary_key_pem, secondary_key_pem),
        VerificationContext(development_mode=development_mode)
    )
