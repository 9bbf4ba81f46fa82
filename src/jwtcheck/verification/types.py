"""
Type definitions for token verification

This module provides the data classes exchanged between the token
extractor, the signature verifier and the multi-key resolver.
"""

from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass, field


# Outcome error reasons
NO_TOKEN_FOUND = "no token found"
SIGNATURE_VERIFICATION_FAILED = "signature verification failed"


@dataclass(frozen=True)
class VerificationContext:
    """Environment the trust policy is evaluated in"""
    development_mode: bool = False


KeyPredicate = Callable[[VerificationContext], bool]


def always(context: VerificationContext) -> bool:
    """Key is consulted in every mode"""
    return True


def development_only(context: VerificationContext) -> bool:
    """Key is consulted only in development mode"""
    return context.development_mode


@dataclass(frozen=True)
class TrustedKey:
    """
    A candidate public key with the predicate that enables it.
    
    Attributes:
        name: Label used in logs and diagnostics (e.g. 'production')
        public_key_pem: PEM encoded public key, may be empty
        enabled: Predicate deciding whether the key is consulted
    """
    name: str
    public_key_pem: Optional[str]
    enabled: KeyPredicate = field(default=always, compare=False)
    
    def __post_init__(self):
        """Validate key entry after initialization"""
        if not self.name:
            raise ValueError("Trusted key name cannot be empty")
        if not callable(self.enabled):
            raise ValueError("Enabled predicate must be callable")
    
    def is_enabled(self, context: VerificationContext) -> bool:
        """Return True if the key is configured and its predicate allows it"""
        return bool(self.public_key_pem) and bool(self.enabled(context))


@dataclass(frozen=True)
class VerificationOutcome:
    """
    Result of extracting and verifying a token.
    
    A valid outcome always carries the token and no error. An invalid
    outcome without a token means nothing token-shaped was found; with a
    token it means the token was found but no trusted key verified it.
    """
    is_valid: bool
    token: Optional[str] = None
    error: Optional[str] = None
    key_name: Optional[str] = None
    
    def __post_init__(self):
        """Enforce outcome invariants"""
        if self.is_valid and (self.token is None or self.error is not None):
            raise ValueError("A valid outcome must carry a token and no error")
    
    @property
    def token_found(self) -> bool:
        return self.token is not None
    
    @classmethod
    def not_found(cls) -> 'VerificationOutcome':
        """Outcome for input without any token"""
        return cls(is_valid=False, error=NO_TOKEN_FOUND)
    
    @classmethod
    def verified(cls, token: str, key_name: Optional[str] = None) -> 'VerificationOutcome':
        """Outcome for a token verified by a trusted key"""
        return cls(is_valid=True, token=token, key_name=key_name)
    
    @classmethod
    def rejected(cls, token: str) -> 'VerificationOutcome':
        """Outcome for a token no trusted key verified"""
        return cls(is_valid=False, token=token, error=SIGNATURE_VERIFICATION_FAILED)
    
    @classmethod
    def failed(cls, token: Optional[str], error: str) -> 'VerificationOutcome':
        """Outcome for a verification that raised instead of returning a verdict"""
        return cls(is_valid=False, token=token, error=error)
    
    def to_dict(self) -> Dict[str, Any]:
        """Render as {isValid, token?, error?}, omitting absent fields"""
        result: Dict[str, Any] = {'isValid': self.is_valid}
        if self.token is not None:
            result['token'] = self.token
        if self.error is not None:
            result['error'] = self.error
        return result
