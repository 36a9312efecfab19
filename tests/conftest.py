"""Root conftest — shared pytest markers and global settings.

Markers
-------
timing      asserts on wall-clock behaviour (rate gate); keep periods small
live        hits the real Solscan API (set WAVEFETCH_TEST_LIVE=1 and a token)
"""

from __future__ import annotations

import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "timing: wall-clock sensitive tests")
    config.addinivalue_line("markers", "live: requires the real Solscan API")

