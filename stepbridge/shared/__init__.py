"""
Shared utilities module.

This module contains helpers used across the domain and application layers,
including Result types for functional error handling, settings and logging
configuration.
"""

from stepbridge.shared.result import Err, Ok, Result

__all__ = ["Ok", "Err", "Result"]
