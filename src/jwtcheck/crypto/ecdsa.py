"""
Low-level ECDSA verification for jwtcheck

This module checks ECDSA/SHA-256 signatures directly with the cryptography
package. Unlike the token library path it does not tie the key to the curve
named by the JWS algorithm, so keys generated on other named curves are
still checked correctly.
"""

import logging
import platform
import sys
from typing import Any, Dict, Union

import cryptography
import jwt
from jwt.algorithms import get_default_algorithms
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import load_pem_public_key

from ..exceptions import CurveMismatchError, KeyLoadError

logger = logging.getLogger(__name__)

# Curve the ES256 algorithm is defined over
ES256_CURVE = 'secp256r1'

# Named curves accepted by the manual verification path
SUPPORTED_CURVES = {
    'secp256r1': ec.SECP256R1,
    'secp384r1': ec.SECP384R1,
    'secp521r1': ec.SECP521R1,
    'secp256k1': ec.SECP256K1,
}


def load_ec_public_key(public_key_pem: Union[str, bytes]) -> ec.EllipticCurvePublicKey:
    """
    Load a PEM encoded elliptic curve public key.
    
    Args:
        public_key_pem: PEM text of a SubjectPublicKeyInfo
        
    Returns:
        EllipticCurvePublicKey: The loaded key
        
    Raises:
        KeyLoadError: If the PEM cannot be parsed or is not an EC key
    """
    if isinstance(public_key_pem, str):
        public_key_pem = public_key_pem.encode('utf-8')
    
    if not isinstance(public_key_pem, bytes) or not public_key_pem.strip():
        raise KeyLoadError("Public key must be non-empty PEM text", "INVALID_KEY_TYPE")
    
    try:
        public_key = load_pem_public_key(public_key_pem)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyLoadError(f"Failed to load PEM public key: {e}", "INVALID_PEM") from e
    
    if not isinstance(public_key, ec.EllipticCurvePublicKey):
        raise KeyLoadError(
            f"Expected an elliptic curve public key, got {type(public_key).__name__}",
            "UNSUPPORTED_KEY_TYPE"
        )
    
    return public_key


def ensure_curve(public_key: ec.EllipticCurvePublicKey, expected_curve: str = ES256_CURVE) -> None:
    """
    Check that a key lies on the curve an algorithm expects.
    
    Raises:
        CurveMismatchError: If the key uses another named curve
    """
    actual_curve = public_key.curve.name
    if actual_curve != expected_curve:
        raise CurveMismatchError(expected_curve, actual_curve)


def verify_der_signature(
    message: bytes,
    der_signature: bytes,
    public_key_pem: Union[str, bytes]
) -> bool:
    """
    Verify a DER encoded ECDSA/SHA-256 signature.
    
    Never raises: malformed PEM, non-EC keys, invalid points and bad
    signatures all yield False.
    
    Args:
        message: The signed bytes
        der_signature: DER encoded ECDSA-Sig-Value
        public_key_pem: PEM encoded EC public key on any supported curve
        
    Returns:
        bool: True if the signature is valid, False otherwise
    """
    try:
        public_key = load_ec_public_key(public_key_pem)
        public_key.verify(der_signature, message, ec.ECDSA(hashes.SHA256()))
        return True
    except InvalidSignature:
        logger.debug("Manual ECDSA verification: signature does not match")
        return False
    except Exception as e:
        logger.debug(f"Manual ECDSA verification failed: {e}")
        return False


def check_platform_compatibility() -> Dict[str, Any]:
    """
    Check which pieces of the verification stack are usable.
    
    Returns:
        dict: Library versions, ES256 support and the supported curves
    """
    compatibility = {
        'cryptography_version': cryptography.__version__,
        'pyjwt_version': jwt.__version__,
        'es256_supported': 'ES256' in get_default_algorithms(),
        'supported_curves': [],
        'platform_info': {
            'system': platform.system(),
            'python_version': sys.version.split()[0],
        }
    }
    
    for name, curve_cls in SUPPORTED_CURVES.items():
        try:
            ec.generate_private_key(curve_cls())
            compatibility['supported_curves'].append(name)
        except UnsupportedAlgorithm:
            logger.debug(f"Curve {name} not supported by the OpenSSL backend")
    
    return compatibility
