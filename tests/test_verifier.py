"""
Unit tests for ES256 signature verification and the manual ECDSA fallback
"""

import time
from unittest.mock import patch

import jwt
import pytest
from jwt.exceptions import InvalidKeyError, InvalidSignatureError
from jwt.utils import base64url_decode, base64url_encode

from jwtcheck.exceptions import CurveMismatchError, KeyLoadError
from jwtcheck.verification import verifier
from jwtcheck.verification.verifier import is_curve_mismatch, verify_signature


def _tamper_payload(token: str) -> str:
    header, _, signature = token.split('.')
    payload = base64url_encode(b'{"test":false}').decode('ascii')
    return f"{header}.{payload}.{signature}"


def _tamper_signature(token: str) -> str:
    header, payload, signature = token.split('.')
    raw = bytearray(base64url_decode(signature))
    raw[-1] ^= 0x01
    return f"{header}.{payload}.{base64url_encode(bytes(raw)).decode('ascii')}"


class TestStandardVerification:
    """Test verification of P-256 keys through PyJWT"""
    
    def test_valid_signature(self, valid_token, p256_key):
        assert verify_signature(valid_token, p256_key.public_pem) is True
    
    def test_hand_signed_token(self, p256_key):
        assert verify_signature(p256_key.sign(), p256_key.public_pem) is True
    
    def test_wrong_key(self, valid_token, other_p256_key):
        assert verify_signature(valid_token, other_p256_key.public_pem) is False
    
    def test_invalid_signature_segment(self, valid_token, p256_key):
        header, payload, _ = valid_token.split('.')
        assert verify_signature(f"{header}.{payload}.INVALIDSIGNATURE", p256_key.public_pem) is False
    
    def test_tampered_payload(self, valid_token, p256_key):
        assert verify_signature(_tamper_payload(valid_token), p256_key.public_pem) is False
    
    def test_expired_token_still_verifies(self, p256_key):
        """Claims are never checked"""
        token = jwt.encode({'test': True, 'exp': int(time.time()) - 3600}, p256_key.private_key, algorithm='ES256')
        assert verify_signature(token, p256_key.public_pem) is True
    
    def test_not_yet_valid_token_still_verifies(self, p256_key):
        token = jwt.encode({'test': True, 'nbf': int(time.time()) + 3600}, p256_key.private_key, algorithm='ES256')
        assert verify_signature(token, p256_key.public_pem) is True
    
    def test_hs256_token_rejected(self, p256_key):
        token = jwt.encode({'test': True}, 'wrong-secret-key', algorithm='HS256')
        assert verify_signature(token, p256_key.public_pem) is False
    
    def test_malformed_token(self, p256_key):
        assert verify_signature('not.a.token', p256_key.public_pem) is False
    
    @pytest.mark.parametrize('token, key', [
        ('', 'key'),
        (None, 'key'),
        ('a.b.c', ''),
        ('a.b.c', None),
    ])
    def test_empty_inputs(self, token, key):
        assert verify_signature(token, key) is False
    
    def test_invalid_pem(self, valid_token):
        assert verify_signature(valid_token, 'invalid-key') is False


class TestFallbackVerification:
    """Test keys on other curves through the manual path"""
    
    @pytest.mark.parametrize('key_fixture', ['p384_key', 'p521_key', 'secp256k1_key'])
    def test_valid_signature(self, request, key_fixture):
        key_pair = request.getfixturevalue(key_fixture)
        assert verify_signature(key_pair.sign({'test': True}), key_pair.public_pem) is True
    
    def test_tampered_payload(self, p384_key):
        assert verify_signature(_tamper_payload(p384_key.sign()), p384_key.public_pem) is False
    
    def test_tampered_signature(self, p384_key):
        assert verify_signature(_tamper_signature(p384_key.sign()), p384_key.public_pem) is False
    
    def test_odd_length_signature(self, p384_key):
        header, payload, _ = p384_key.sign().split('.')
        odd = base64url_encode(b'\x01' * 95).decode('ascii')
        assert verify_signature(f"{header}.{payload}.{odd}", p384_key.public_pem) is False
    
    def test_wrong_curve_key(self, p384_key, secp256k1_key):
        assert verify_signature(p384_key.sign(), secp256k1_key.public_pem) is False
    
    def test_p256_token_against_p384_key(self, valid_token, p384_key):
        assert verify_signature(valid_token, p384_key.public_pem) is False
    
    def test_fallback_only_on_curve_mismatch(self, valid_token, other_p256_key):
        """A bad signature on the default curve never reaches the manual path"""
        with patch.object(verifier, '_verify_fallback') as fallback:
            assert verify_signature(valid_token, other_p256_key.public_pem) is False
        
        fallback.assert_not_called()
    
    def test_unsupported_key_type_skips_fallback(self, valid_token, rsa_public_pem):
        with patch.object(verifier, '_verify_fallback') as fallback:
            assert verify_signature(valid_token, rsa_public_pem) is False
        
        fallback.assert_not_called()
    
    def test_fallback_used_for_curve_mismatch(self, p384_key):
        with patch.object(verifier, '_verify_fallback', return_value=True) as fallback:
            token = p384_key.sign()
            assert verify_signature(token, p384_key.public_pem) is True
        
        fallback.assert_called_once_with(token, p384_key.public_pem)
    
    @pytest.mark.parametrize('header', [
        {'alg': 'none'},
        {'alg': 'HS256', 'typ': 'JWT'},
        {'typ': 'JWT'},
        {'alg': 'ES256', 'kid': 5},
    ])
    def test_rejected_headers_skip_fallback(self, p384_key, header):
        """Only well-formed ES256 tokens reach the manual path"""
        token = p384_key.sign({'x': 1}, header)
        with patch.object(verifier, '_verify_fallback') as fallback:
            assert verify_signature(token, p384_key.public_pem) is False
        
        fallback.assert_not_called()
    
    def test_rejected_header_on_other_curve(self, p384_key):
        assert verify_signature(p384_key.sign({'x': 1}, {'alg': 'none'}), p384_key.public_pem) is False
    
    def test_unreadable_header_on_other_curve(self, p384_key):
        _, payload, signature = p384_key.sign().split('.')
        assert verify_signature(f"abc.{payload}.{signature}", p384_key.public_pem) is False
    
    def test_library_curve_error_triggers_fallback(self, p384_key):
        """PyJWT's own curve enforcement is routed to the manual path too"""
        error = InvalidKeyError("The key's curve 'secp384r1' does not match the expected curve 'secp256r1'")
        with patch.object(verifier, '_verify_standard', side_effect=error):
            assert verify_signature(p384_key.sign(), p384_key.public_pem) is True


class TestCurveMismatchClassification:
    """Test error classification"""
    
    def test_typed_curve_mismatch(self):
        assert is_curve_mismatch(CurveMismatchError('secp256r1', 'secp384r1')) is True
    
    def test_library_curve_message(self):
        assert is_curve_mismatch(InvalidKeyError('Algorithm requires curve P-256')) is True
    
    def test_other_key_errors(self):
        assert is_curve_mismatch(InvalidKeyError('Expecting a PEM-formatted key.')) is False
        assert is_curve_mismatch(KeyLoadError('bad pem', 'INVALID_PEM')) is False
    
    def test_signature_errors(self):
        assert is_curve_mismatch(InvalidSignatureError('Signature verification failed')) is False
        assert is_curve_mismatch(ValueError('curve')) is False
