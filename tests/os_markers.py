"""Shared pytest markers describing operating-system sensitivity."""

from __future__ import annotations

import sys

import pytest

OS_AGNOSTIC = pytest.mark.os_agnostic
POSIX_ONLY = pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX-only behaviour")

__all__ = ["OS_AGNOSTIC", "POSIX_ONLY"]
