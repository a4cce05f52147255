"""Domain repository interfaces.

All abstractions are defined here with abc.ABC and @abstractmethod.
Concrete implementations live in pgrepo/infrastructure/persistence/.
"""

from .base import IndexInput, ReadRepo, ReadWriteRepo, WriteRepo

__all__ = [
    "IndexInput",
    "ReadRepo",
    "WriteRepo",
    "ReadWriteRepo",
]
