"""
Command-line interface for jwtcheck
Extracts tokens from text and verifies them against the configured keys
"""

import argparse
import json
import sys
from dataclasses import replace
from typing import Optional

from . import __version__
from .config import KeyConfig, configure_logging, load_config, read_key_file
from .crypto import check_platform_compatibility
from .exceptions import JWTCheckError
from .verification import extract_token, inspect_token


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='jwtcheck',
        description='Extract tokens from free text and verify their ES256 signatures'
    )
    
    parser.add_argument(
        '--version',
        action='version',
        version=f'jwtcheck {__version__}'
    )
    
    parser.add_argument(
        '--check-compatibility',
        action='store_true',
        help='Check platform compatibility and exit'
    )
    
    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    
    setup_extract_parser(subparsers)
    setup_verify_parser(subparsers)
    setup_inspect_parser(subparsers)
    
    return parser


def setup_extract_parser(subparsers):
    """Setup extract subcommand."""
    extract_parser = subparsers.add_parser('extract', help='Print the first token found in text')
    extract_parser.add_argument('text', nargs='?', help='Input text (read from stdin if omitted)')


def _add_key_arguments(command_parser):
    command_parser.add_argument('text', nargs='?', help='Input text (read from stdin if omitted)')
    command_parser.add_argument('--config', help='JSON configuration file (default: environment variables)')
    command_parser.add_argument('--primary-key', help='PEM file with the production public key')
    command_parser.add_argument('--secondary-key', help='PEM file with the development public key')
    command_parser.add_argument(
        '--development',
        action='store_true',
        help='Run in development mode (consult the development key)'
    )
    command_parser.add_argument('--json', action='store_true', help='Output JSON')


def setup_verify_parser(subparsers):
    """Setup verify subcommand."""
    verify_parser = subparsers.add_parser('verify', help='Extract and verify a token')
    _add_key_arguments(verify_parser)


def setup_inspect_parser(subparsers):
    """Setup inspect subcommand."""
    inspect_parser = subparsers.add_parser('inspect', help='Show how every configured key handles a token')
    _add_key_arguments(inspect_parser)


def read_input(args) -> str:
    """Return the text argument, or stdin when it is omitted."""
    if args.text is not None:
        return args.text
    return sys.stdin.read()


def build_config(args) -> KeyConfig:
    """Build key configuration from file/environment plus CLI overrides."""
    config = load_config(args.config)
    
    overrides = {}
    if args.primary_key:
        overrides['primary_key'] = read_key_file(args.primary_key).strip()
    if args.secondary_key:
        overrides['secondary_key'] = read_key_file(args.secondary_key).strip()
    if args.development:
        overrides['environment'] = 'development'
    
    return replace(config, **overrides) if overrides else config


def handle_extract_command(args) -> int:
    """Handle extract command."""
    token = extract_token(read_input(args))
    if token is None:
        print("No token found", file=sys.stderr)
        return 1
    
    print(token)
    return 0


def handle_verify_command(args) -> int:
    """Handle verify command."""
    config = build_config(args)
    configure_logging(config.log_level)
    
    outcome = config.verify(read_input(args))
    
    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
    elif outcome.is_valid:
        print(f"✓ Token verified with {outcome.key_name} key")
    else:
        print(f"✗ {outcome.error}")
    
    return 0 if outcome.is_valid else 1


def handle_inspect_command(args) -> int:
    """Handle inspect command."""
    config = build_config(args)
    configure_logging(config.log_level)
    
    report = inspect_token(read_input(args), config.key_chain(), config.context())
    
    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
        return 0 if report.is_valid else 1
    
    if not report.token_found:
        print("No token found")
        return 1
    
    data = report.to_dict()
    print(f"Token: {data['token']}")
    print(f"Header algorithm: {report.algorithm or 'unknown'}")
    print(f"Signature length: {report.signature_length}")
    for issue in report.format_issues:
        print(f"  Issue: {issue}")
    
    for key in report.keys:
        if not key.configured:
            status = 'not configured'
        elif not key.enabled:
            status = 'disabled in this mode'
        else:
            status = 'valid' if key.valid else 'invalid'
        curve = f", curve {key.key_curve}" if key.key_curve else ''
        fallback = ' (manual ECDSA path)' if key.curve_mismatch else ''
        print(f"Key {key.name}: {status}{curve}{fallback}")
        if key.error:
            print(f"  Error: {key.error}")
    
    return 0 if report.is_valid else 1


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI
    
    Args:
        argv: Command line arguments (None to use sys.argv)
        
    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]
    
    parser = create_parser()
    args = parser.parse_args(argv)
    
    try:
        if args.check_compatibility:
            result = check_platform_compatibility()
            print(f"cryptography {result['cryptography_version']}, PyJWT {result['pyjwt_version']}")
            print(f"ES256 supported: {result['es256_supported']}")
            print(f"Curves: {', '.join(result['supported_curves'])}")
            return 0 if result['es256_supported'] else 1
        
        if args.command == 'extract':
            return handle_extract_command(args)
        elif args.command == 'verify':
            return handle_verify_command(args)
        elif args.command == 'inspect':
            return handle_inspect_command(args)
        else:
            parser.print_help()
            return 1
        
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except JWTCheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
