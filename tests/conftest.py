import logging

import pytest


@pytest.fixture(autouse=True)
def reset_root_logging():
    """The CLI reconfigures the root logger; drop its handlers after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
