"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, utc_now
from tests.factories.project import ProjectFactory

__all__ = [
    # Base
    "BaseFactory",
    "utc_now",
    # Project
    "ProjectFactory",
]
