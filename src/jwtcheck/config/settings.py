"""
Key configuration for jwtcheck hosts

The verification functions never read the environment, files or network
themselves. This module is the host-side collaborator that gathers the PEM
keys and the environment mode and hands them to the resolver.
"""

import json
import logging
import os
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from dataclasses import dataclass
from pathlib import Path

from ..exceptions import ConfigurationError
from ..verification.policies import build_key_chain
from ..verification.resolver import resolve
from ..verification.types import TrustedKey, VerificationContext, VerificationOutcome

# Environment variable names
PRIMARY_KEY_ENV = 'JWT_PUBLIC_KEY_PROD'
SECONDARY_KEY_ENV = 'JWT_PUBLIC_KEY_DEV'
ENVIRONMENT_ENV = 'APP_ENV'
LEGACY_ENVIRONMENT_ENV = 'NODE_ENV'
LOG_LEVEL_ENV = 'JWTCHECK_LOG_LEVEL'

DEVELOPMENT = 'development'
PRODUCTION = 'production'
TEST = 'test'
ENVIRONMENTS = (DEVELOPMENT, PRODUCTION, TEST)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

PEM_MARKER = '-----BEGIN'


def _normalize_pem(value: Optional[str]) -> Optional[str]:
    """Expand dotenv-style escaped newlines and drop blank values"""
    if value is None:
        return None
    value = value.replace('\\n', '\n').strip()
    return value or None


@dataclass(frozen=True)
class KeyConfig:
    """Public keys and environment mode for token verification"""
    primary_key: Optional[str] = None
    secondary_key: Optional[str] = None
    environment: str = PRODUCTION
    log_level: str = 'WARNING'
    
    def __post_init__(self):
        """Validate configuration after initialization"""
        if self.environment not in ENVIRONMENTS:
            raise ConfigurationError(
                f"Unknown environment '{self.environment}' (expected one of {', '.join(ENVIRONMENTS)})",
                "INVALID_ENVIRONMENT"
            )
        
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level '{self.log_level}'", "INVALID_LOG_LEVEL")
        
        for name, value in (('primary_key', self.primary_key), ('secondary_key', self.secondary_key)):
            if value is not None and PEM_MARKER not in value:
                raise ConfigurationError(f"{name} is not PEM encoded", "INVALID_KEY", {'field': name})
    
    @property
    def development_mode(self) -> bool:
        return self.environment == DEVELOPMENT
    
    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'KeyConfig':
        """Load configuration from environment variables"""
        environ = os.environ if environ is None else environ
        
        environment = environ.get(ENVIRONMENT_ENV) or environ.get(LEGACY_ENVIRONMENT_ENV) or PRODUCTION
        
        return cls(
            primary_key=_normalize_pem(environ.get(PRIMARY_KEY_ENV)),
            secondary_key=_normalize_pem(environ.get(SECONDARY_KEY_ENV)),
            environment=environment.strip().lower(),
            log_level=environ.get(LOG_LEVEL_ENV, 'WARNING').strip().upper()
        )
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> 'KeyConfig':
        """
        Load configuration from a dictionary.
        
        Keys may be given inline (primary_key, secondary_key) or as paths
        (primary_key_file, secondary_key_file) relative to base_dir.
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a JSON object", "INVALID_FORMAT")
        
        def key_value(name: str) -> Optional[str]:
            inline = data.get(name)
            path = data.get(f"{name}_file")
            if inline and path:
                raise ConfigurationError(f"Specify either {name} or {name}_file, not both", "INVALID_FORMAT")
            if path:
                return _normalize_pem(read_key_file(Path(base_dir or '.') / path))
            return _normalize_pem(inline)
        
        return cls(
            primary_key=key_value('primary_key'),
            secondary_key=key_value('secondary_key'),
            environment=str(data.get('environment', PRODUCTION)).lower(),
            log_level=str(data.get('log_level', 'WARNING')).upper()
        )
    
    @classmethod
    def from_json(cls, json_string: str, base_dir: Optional[Path] = None) -> 'KeyConfig':
        """Load configuration from JSON string"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR")
        return cls.from_dict(data, base_dir)
    
    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'KeyConfig':
        """Load configuration from a JSON file; key paths resolve next to it"""
        path = Path(file_path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file: {e}", "FILE_ERROR")
        return cls.from_json(json_string, path.parent)
    
    def key_chain(self) -> Tuple[TrustedKey, ...]:
        """Key chain for the production/development policy"""
        return build_key_chain(self.primary_key, self.secondary_key)
    
    def context(self) -> VerificationContext:
        return VerificationContext(development_mode=self.development_mode)
    
    def verify(self, text: Any) -> VerificationOutcome:
        """Extract and verify a token with the configured keys"""
        return resolve(text, self.key_chain(), self.context())


def read_key_file(file_path: Union[str, Path]) -> str:
    """
    Read PEM key material from a file.
    
    Raises:
        ConfigurationError: If the file cannot be read
    """
    try:
        return Path(file_path).read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigurationError(f"Failed to read key file: {e}", "FILE_ERROR")


def configure_logging(level: str = 'WARNING') -> None:
    """Configure root logging for command-line use"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )


def load_config(file_path: Optional[Union[str, Path]] = None) -> KeyConfig:
    """Load configuration from a file if given, otherwise from the environment"""
    if file_path is not None:
        return KeyConfig.from_file(file_path)
    return KeyConfig.from_env()
