"""Shared test configuration and fixtures."""

import pytest

from sapling.config import SerializeOptions


@pytest.fixture
def pinned():
    """Options with a fixed root tag and no XML declaration.

    Pinning the root disables root collapse, which keeps expected output
    easy to read in encoder tests.
    """
    return SerializeOptions(root_tag="root", declaration=False)
