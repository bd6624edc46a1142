"""Pytest configuration and fixtures for symbol parser tests."""

import pytest

from symname import SymbolParser


@pytest.fixture
def parser():
    """Basic parser fixture."""
    return SymbolParser()


@pytest.fixture
def strict_parser():
    """Parser with strict mode enabled."""
    return SymbolParser({'strict_mode': True})


@pytest.fixture
def generic_receiver_name():
    """Receiver whose generic argument is itself a qualified name."""
    return (
        "github.com/xhd2015/xgo/runtime/test/debug."
        "GenericSt[github.com/xhd2015/xgo/runtime/test/debug.Inner].GetData"
    )
