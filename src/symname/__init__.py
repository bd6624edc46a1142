"""Standalone parser for fully-qualified runtime symbol names.

This package decomposes function identifiers such as
``github.com/x/y.(*File[int]).Read[string]`` into package path, receiver,
generic argument text and function name, with zero external dependencies.

Basic usage:
    from symname import SymbolParser

    symbol = SymbolParser().parse("os.(*File).Read")
    print(symbol.package_path, symbol.qualifier, symbol.func_name)
"""

from .__version__ import __version__, __author__, __description__
from .parser import SymbolParser, parse_symbol
from .models import NoticeKind, ParsedSymbol
from .utils import (
    find_matching_open,
    is_anonymous_func_name,
    is_import_host_pattern,
    is_valid_domain,
)
from .constants import DEFAULT_CONFIG

# Public API
__all__ = [
    # Version info
    '__version__',
    '__author__',
    '__description__',

    # Main parser
    'SymbolParser',
    'parse_symbol',

    # Data models
    'NoticeKind',
    'ParsedSymbol',

    # Utilities
    'find_matching_open',
    'is_anonymous_func_name',
    'is_import_host_pattern',
    'is_valid_domain',

    # Constants
    'DEFAULT_CONFIG',
]


def create_parser(config=None):
    """Convenience function to create parser with configuration.

    Args:
        config: Optional configuration dictionary

    Returns:
        Configured SymbolParser instance
    """
    return SymbolParser(config)
