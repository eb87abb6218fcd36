"""
Exceptions raised by the search engine.

Timeouts and frontier exhaustion are *not* errors: they are reported
through the completion / timeout callbacks and the engine status.
"""

from __future__ import annotations


class SearchError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(SearchError, ValueError):
    """A required option is missing or has the wrong type."""


class OracleContractError(SearchError, TypeError):
    """The caller-supplied state space returned something malformed."""
