"""Test utilities for sprout sites.

Provides an in-process test client and helpers for reading the
hydration payload out of served pages::

    from sprout.testing import TestClient, hydration_context
"""

from sprout.testing.client import TestClient
from sprout.testing.hydration import hydration_context, hydration_route

__all__ = [
    "TestClient",
    "hydration_context",
    "hydration_route",
]
