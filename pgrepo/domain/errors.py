"""Repository error envelope.

Every failure surfaced by a repository is a RepoError carrying an ErrorKind,
the underlying cause (if any) and the namespace active when it was raised.
Callers branch on kind; the cause is kept for diagnostics only.
"""

from __future__ import annotations

from enum import Enum

from .namespace import namespace_from_context


class ErrorKind(str, Enum):
    DIAL_FAILURE = "could not dial database"
    NO_BACKEND_CONNECTION = "no database client"
    MODEL_NOT_SET = "model not set"
    MISSING_ENTITY_ID = "missing entity ID"
    ENTITY_NOT_FOUND = "could not find entity"
    COULD_NOT_SAVE_ENTITY = "could not save entity"
    COULD_NOT_REMOVE_ENTITY = "could not remove entity"
    COULD_NOT_CLEAR_DB = "could not clear database"
    COULD_NOT_CLOSE_DB = "could not close database"


class RepoError(Exception):
    """Typed repository failure.

    base_err is the wrapped cause.  It may itself be a RepoError, as with a
    missing id, which is always reported nested inside COULD_NOT_SAVE_ENTITY.
    """

    def __init__(
        self,
        kind: ErrorKind,
        base_err: BaseException | None = None,
        namespace: str | None = None,
    ) -> None:
        self.kind = kind
        self.base_err = base_err
        self.namespace = namespace_from_context() if namespace is None else namespace
        super().__init__(str(self))

    def __str__(self) -> str:
        msg = self.kind.value
        if self.base_err is not None:
            msg = f"{msg}: {self.base_err}"
        return f"{msg} ({self.namespace})" if self.namespace else msg

    def __repr__(self) -> str:
        return (
            f"RepoError(kind={self.kind.name}, base_err={self.base_err!r}, "
            f"namespace={self.namespace!r})"
        )

    def has_kind(self, kind: ErrorKind) -> bool:
        """True if this error or any nested RepoError cause is of *kind*."""
        err: BaseException | None = self
        while isinstance(err, RepoError):
            if err.kind is kind:
                return True
            err = err.base_err
        return False
