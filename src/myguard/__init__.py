"""
MyGuard: contract clause fairness classifier.

Splits a contract into clauses, labels each one as Allowed, Not Allowed,
Unclassified or Neutral, and summarises the result for readers without
legal training.
"""

__version__ = "0.1.0"

from myguard.config import get_settings

__all__ = ["get_settings", "__version__"]
