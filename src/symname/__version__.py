"""Version information for the symname package."""

__version__ = "0.1.0"
__author__ = "errctx contributors"
__description__ = "Decompose qualified runtime symbol names into their parts"
