"""
ES256 token signature verification

Tokens are verified with PyJWT first. When the key turns out to be an EC
key on a named curve other than P-256, PyJWT cannot be used with the ES256
algorithm, so the signature is converted from its raw r || s form to DER
and checked directly with the cryptography package over the same message
and signature bytes.

Only the signature is verified: claims (exp, nbf, iss, aud, ...) are never
decoded or enforced here.
"""

import logging
from typing import Any

from jwt import PyJWS
from jwt.exceptions import InvalidAlgorithmError, InvalidKeyError

from .utils import split_token, redact_token
from ..crypto.der import raw_to_der_signature
from ..crypto.ecdsa import ES256_CURVE, ensure_curve, load_ec_public_key, verify_der_signature
from ..exceptions import CurveMismatchError, JWTCheckError

logger = logging.getLogger(__name__)

ALGORITHM = 'ES256'

_jws = PyJWS()


def is_curve_mismatch(error: BaseException) -> bool:
    """
    Decide whether a verification failure may be retried on the manual path.
    
    Args:
        error: Exception raised by the standard verification path
        
    Returns:
        bool: True only for keys on a valid but non-default curve
    """
    if isinstance(error, CurveMismatchError):
        return True
    
    # Compatibility shim: PyJWT releases that check the key curve themselves
    # report it only through the InvalidKeyError message.
    return isinstance(error, InvalidKeyError) and 'curve' in str(error).lower()


def _verify_standard(token: str, public_key_pem: str) -> None:
    """
    Verify the token with PyJWT.
    
    The header is loaded and validated before the curve check, so a key on
    another curve only reaches the manual path for a well-formed ES256 token.
    
    Raises:
        CurveMismatchError: If the key is not on the ES256 curve
        KeyLoadError: If the key cannot be loaded or is not an EC key
        jwt.PyJWTError: If the token is malformed or the signature is invalid
    """
    header = _jws.get_unverified_header(token)
    if header.get('alg') != ALGORITHM:
        raise InvalidAlgorithmError(f"Token algorithm {header.get('alg')!r} is not {ALGORITHM}")
    
    public_key = load_ec_public_key(public_key_pem)
    ensure_curve(public_key, ES256_CURVE)
    
    # PyJWS checks the signature without parsing the payload as claims
    _jws.decode(token, key=public_key, algorithms=[ALGORITHM])


def _verify_fallback(token: str, public_key_pem: str) -> bool:
    """Verify the token by converting its signature to DER"""
    try:
        message, raw_signature = split_token(token)
        der_signature = raw_to_der_signature(raw_signature)
    except JWTCheckError as e:
        logger.debug(f"Manual verification skipped for {redact_token(token)}: {e}")
        return False
    
    is_valid = verify_der_signature(message, der_signature, public_key_pem)
    if is_valid:
        logger.info(f"Token {redact_token(token)} verified on the manual ECDSA path")
    return is_valid


def verify_signature(token: Any, public_key_pem: Any) -> bool:
    """
    Verify a token's ES256 signature against one public key.
    
    Args:
        token: Three-segment token
        public_key_pem: PEM encoded public key
        
    Returns:
        bool: True if the signature is valid under the key, False otherwise
    """
    if not token or not public_key_pem:
        return False
    
    try:
        _verify_standard(token, public_key_pem)
        return True
    except Exception as error:
        if not is_curve_mismatch(error):
            logger.debug(f"Signature rejected for {redact_token(str(token))}: {error}")
            return False
        logger.debug(f"Curve mismatch, retrying with manual ECDSA verification: {error}")
    
    return _verify_fallback(token, public_key_pem)
