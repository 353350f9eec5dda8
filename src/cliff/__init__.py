"""CLIFF: Command Line Interface Friendly & Facilitator."""

from __future__ import annotations

__version__ = "0.3.0"
