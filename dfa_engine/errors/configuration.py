"""
Configuration error classification.

Raised while an engine configuration is read or validated, before any
automaton runs. Every problem found is listed, not only the first.
"""

from typing import Any, Dict, List, Optional


class ConfigurationError(ValueError):
    """The merged engine configuration is unreadable or invalid."""

    def __init__(self, message: str, errors: Optional[List[str]] = None,
                 source: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.errors = list(errors or [])
        self.source = source
        self.context = context or {}
        self.context.setdefault("errors", self.errors)
        if source is not None:
            self.context.setdefault("source", source)
        self.recoverable = False
