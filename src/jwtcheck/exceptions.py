"""
Exception classes for jwtcheck
"""

from typing import Optional, Dict, Any


class JWTCheckError(Exception):
    """Base exception for all jwtcheck errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class TokenFormatError(JWTCheckError):
    """Exception raised when a token is not three base64url segments"""
    pass


class SignatureFormatError(JWTCheckError):
    """Exception raised for raw signatures that cannot be split into r and s"""
    pass


class KeyLoadError(JWTCheckError):
    """Exception raised when PEM key material cannot be loaded"""
    pass


class CurveMismatchError(JWTCheckError):
    """Exception raised when an EC key is not on the curve the algorithm expects"""
    
    def __init__(self, expected_curve: str, actual_curve: str):
        super().__init__(
            f"Algorithm requires curve {expected_curve}, but key uses {actual_curve}",
            "CURVE_MISMATCH",
            {'expected_curve': expected_curve, 'actual_curve': actual_curve}
        )
        self.expected_curve = expected_curve
        self.actual_curve = actual_curve


class ConfigurationError(JWTCheckError):
    """Exception raised for invalid key configuration"""
    pass
