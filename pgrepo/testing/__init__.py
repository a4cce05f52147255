"""Test support shipped with the package.

acceptance_test() is the conformance suite every ReadWriteRepo
implementation should pass; Model and MockRepo are the doubles it uses.
"""

from .acceptance import acceptance_test
from .mocks import MockRepo, Model

__all__ = [
    "acceptance_test",
    "MockRepo",
    "Model",
]
