"""
Shared fixtures for jwtcheck tests
"""

import json

import jwt
import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature
from jwt.utils import base64url_encode


def _public_pem(private_key) -> str:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    ).decode('ascii')


def _sign_es256(private_key, payload, header=None) -> str:
    """Sign with ECDSA/SHA-256 on the key's own curve, raw r || s signature"""
    header = header or {'alg': 'ES256', 'typ': 'JWT'}
    segments = [
        base64url_encode(json.dumps(header, separators=(',', ':')).encode('utf-8')),
        base64url_encode(json.dumps(payload, separators=(',', ':')).encode('utf-8')),
    ]
    message = b'.'.join(segments)
    
    r, s = decode_dss_signature(private_key.sign(message, ec.ECDSA(hashes.SHA256())))
    size = (private_key.curve.key_size + 7) // 8
    raw_signature = r.to_bytes(size, 'big') + s.to_bytes(size, 'big')
    
    return b'.'.join(segments + [base64url_encode(raw_signature)]).decode('ascii')


class KeyPair:
    """Private key with its PEM public key and a token signer"""
    
    def __init__(self, private_key):
        self.private_key = private_key
        self.public_pem = _public_pem(private_key)
    
    def sign(self, payload=None, header=None) -> str:
        return _sign_es256(self.private_key, payload or {'test': True}, header)


@pytest.fixture(scope='session')
def p256_key():
    return KeyPair(ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture(scope='session')
def other_p256_key():
    return KeyPair(ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture(scope='session')
def p384_key():
    return KeyPair(ec.generate_private_key(ec.SECP384R1()))


@pytest.fixture(scope='session')
def p521_key():
    return KeyPair(ec.generate_private_key(ec.SECP521R1()))


@pytest.fixture(scope='session')
def secp256k1_key():
    return KeyPair(ec.generate_private_key(ec.SECP256K1()))


@pytest.fixture(scope='session')
def rsa_public_pem():
    return _public_pem(rsa.generate_private_key(public_exponent=65537, key_size=2048))


@pytest.fixture(scope='session')
def valid_token(p256_key):
    """Token produced by PyJWT itself"""
    return jwt.encode({'test': True, 'message': 'Valid test token'}, p256_key.private_key, algorithm='ES256')
