"""
Token verification diagnostics

Step-by-step report of how a piece of input was handled: which token was
extracted, what the unverified header announces, and what every trusted key
made of it. Intended for debugging key configuration; it never validates
claims.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence
from dataclasses import dataclass, field

import jwt

from .extractor import extract_token
from .types import TrustedKey, VerificationContext
from .utils import split_token, redact_token
from .verifier import verify_signature
from ..crypto.ecdsa import ES256_CURVE, load_ec_public_key
from ..exceptions import JWTCheckError

logger = logging.getLogger(__name__)


@dataclass
class KeyDiagnostic:
    """What one trusted key made of the token"""
    name: str
    enabled: bool
    configured: bool
    key_curve: Optional[str] = None
    curve_mismatch: bool = False
    valid: bool = False
    error: Optional[str] = None


@dataclass
class TokenDiagnostics:
    """Diagnostic report for one input"""
    token_found: bool
    token: Optional[str] = None
    algorithm: Optional[str] = None
    signature_length: Optional[int] = None
    format_issues: List[str] = field(default_factory=list)
    keys: List[KeyDiagnostic] = field(default_factory=list)
    
    @property
    def is_valid(self) -> bool:
        return any(key.valid for key in self.keys)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary (token redacted)"""
        return {
            'token_found': self.token_found,
            'token': redact_token(self.token) if self.token else None,
            'algorithm': self.algorithm,
            'signature_length': self.signature_length,
            'format_issues': list(self.format_issues),
            'is_valid': self.is_valid,
            'keys': [
                {
                    'name': key.name,
                    'enabled': key.enabled,
                    'configured': key.configured,
                    'key_curve': key.key_curve,
                    'curve_mismatch': key.curve_mismatch,
                    'valid': key.valid,
                    'error': key.error,
                }
                for key in self.keys
            ],
        }


def _diagnose_key(token: str, key: TrustedKey, context: VerificationContext) -> KeyDiagnostic:
    diagnostic = KeyDiagnostic(
        name=key.name,
        enabled=key.is_enabled(context),
        configured=bool(key.public_key_pem)
    )
    
    if not diagnostic.configured:
        return diagnostic
    
    try:
        public_key = load_ec_public_key(key.public_key_pem)
        diagnostic.key_curve = public_key.curve.name
        diagnostic.curve_mismatch = diagnostic.key_curve != ES256_CURVE
    except JWTCheckError as e:
        diagnostic.error = str(e)
    
    if diagnostic.enabled:
        diagnostic.valid = verify_signature(token, key.public_key_pem)
    
    return diagnostic


def inspect_token(
    text: Any,
    keys: Sequence[TrustedKey],
    context: Optional[VerificationContext] = None
) -> TokenDiagnostics:
    """
    Build a diagnostic report for text and a key chain.
    
    Args:
        text: Input that may contain a token
        keys: Trusted keys in priority order
        context: Policy context (defaults to production mode)
        
    Returns:
        TokenDiagnostics: The report
    """
    context = context or VerificationContext()
    
    token = extract_token(text)
    if token is None:
        return TokenDiagnostics(token_found=False)
    
    report = TokenDiagnostics(token_found=True, token=token)
    
    try:
        report.algorithm = jwt.get_unverified_header(token).get('alg')
    except jwt.PyJWTError as e:
        report.format_issues.append(f"Unreadable header: {e}")
    
    try:
        _, raw_signature = split_token(token)
        report.signature_length = len(raw_signature)
        if len(raw_signature) % 2 != 0:
            report.format_issues.append("Signature length is odd")
    except JWTCheckError as e:
        report.format_issues.append(str(e))
    
    if report.algorithm is not None and report.algorithm != 'ES256':
        report.format_issues.append(f"Header announces {report.algorithm}, expected ES256")
    
    report.keys = [_diagnose_key(token, key, context) for key in keys]
    
    logger.debug(f"Inspected token {redact_token(token)}: valid={report.is_valid}")
    return report
