"""Pytest fixtures for hookable tests."""

import pytest

from hookable import Hookable, HookRegistry


@pytest.fixture
def hooks_class() -> type[Hookable]:
    """A fresh host class declaring :before_foo and :before_bar."""

    class Host(Hookable):
        pass

    Host.define_hook("before_foo", "before_bar")
    return Host


@pytest.fixture
def host(hooks_class):
    """An instance of the fresh host class."""
    return hooks_class()


@pytest.fixture
def registry() -> HookRegistry:
    """A standalone registry declaring before_foo and before_bar."""
    return HookRegistry().declare("before_foo", "before_bar")


@pytest.fixture
def invocations() -> list:
    """Side-effect log shared by callbacks in a test."""
    return []
