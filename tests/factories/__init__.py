"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory, CustomerFactory, ...
"""

from tests.factories.base import BaseFactory, utc_now
from tests.factories.project import (
    ChangeRequestFactory,
    CustomerFactory,
    MessageFactory,
    ProjectFactory,
)

__all__ = [
    # Base
    "BaseFactory",
    "utc_now",
    # Project
    "ChangeRequestFactory",
    "CustomerFactory",
    "MessageFactory",
    "ProjectFactory",
]
