"""Shared pytest fixtures for the caret test suite."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_caret_logger():
    """The CLI attaches a handler to the ``caret`` logger; drop it after each test."""
    yield
    log = logging.getLogger("caret")
    log.handlers.clear()
    log.setLevel(logging.NOTSET)
