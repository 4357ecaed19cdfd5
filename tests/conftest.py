# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from deepclone import CloneManager, CloneStats
from tests.utils import Node


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "stress: mark test as a stress test")
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def manager():
    """A manager with no extension cloners."""
    return CloneManager()


@pytest.fixture
def stats():
    """A fresh diagnostics tally."""
    return CloneStats()


@pytest.fixture
def observed_manager(stats):
    """A manager reporting into the ``stats`` fixture."""
    return CloneManager(observer=stats)


@pytest.fixture
def session(manager):
    """A fresh session from the default manager."""
    return manager.new_session()


@pytest.fixture
def tree():
    """A small parent/child tree where every child points back at its parent."""
    root = Node("root")
    for name in ("left", "right"):
        child = Node(name, parent=root)
        root.children.append(child)
    root.children[0].children.append(Node("leaf", parent=root.children[0]))
    return root
