"""
Key trust policies

A key chain is an ordered tuple of TrustedKey entries; the resolver tries
them in order and stops at the first key that verifies the token. The
production key always comes first and is consulted in every mode, the
development key only in development mode.
"""

from typing import Dict, Iterable, Optional, Tuple

from .types import KeyPredicate, TrustedKey, always, development_only

PRODUCTION_KEY_NAME = 'production'
DEVELOPMENT_KEY_NAME = 'development'


# Key policy registry
KEY_POLICIES: Dict[str, KeyPredicate] = {
    'always': always,
    'development': development_only,
}


def get_key_policy(name: str) -> Optional[KeyPredicate]:
    """Get key policy predicate by name"""
    return KEY_POLICIES.get(name)


def get_available_key_policies() -> Tuple[str, ...]:
    """Get available key policy names"""
    return tuple(KEY_POLICIES.keys())


def trusted_key(name: str, public_key_pem: Optional[str], policy: str = 'always') -> TrustedKey:
    """
    Create a trusted key entry bound to a named policy.
    
    Raises:
        ValueError: If the policy is unknown
    """
    predicate = get_key_policy(policy)
    if predicate is None:
        raise ValueError(
            f"Unknown key policy: {policy} (available: {', '.join(get_available_key_policies())})"
        )
    return TrustedKey(name=name, public_key_pem=public_key_pem, enabled=predicate)


def build_key_chain(
    primary_key_pem: Optional[str],
    secondary_key_pem: Optional[str] = None,
    additional_production_keys: Iterable[str] = ()
) -> Tuple[TrustedKey, ...]:
    """
    Build the ordered key chain for the production/development policy.
    
    Args:
        primary_key_pem: Production public key, always tried first
        secondary_key_pem: Development public key, tried last and only in
            development mode
        additional_production_keys: Further production keys tried after
            the primary key in every mode
        
    Returns:
        Tuple[TrustedKey, ...]: Keys in evaluation order
    """
    chain = [trusted_key(PRODUCTION_KEY_NAME, primary_key_pem, 'always')]
    
    for index, key_pem in enumerate(additional_production_keys, start=2):
        chain.append(trusted_key(f"{PRODUCTION_KEY_NAME}-{index}", key_pem, 'always'))
    
    chain.append(trusted_key(DEVELOPMENT_KEY_NAME, secondary_key_pem, 'development'))
    
    return tuple(chain)
