"""Exceptions raised by the document store adapter."""

from __future__ import annotations


class DocstoreError(Exception):
    """Root exception for the document store adapter."""


class InvalidArgumentError(DocstoreError, TypeError):
    """Raised synchronously when a required argument is missing or mistyped.

    Argument validation runs before any engine call, so an operation that
    raises this has had no side effects.
    """


class InvalidQueryError(InvalidArgumentError):
    """Raised when a query or its filter/options are missing or mistyped."""


class CollectionNotFoundError(DocstoreError, KeyError):
    """Raised when no collection is registered under the requested name."""

    def __init__(self, collection: str) -> None:
        self.collection = collection
        super().__init__(f"collection {collection!r} is not registered")

    def __str__(self) -> str:
        return str(self.args[0])


class ValidationError(DocstoreError):
    """Raised when adapter or operation options fail validation.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))


class StorageError(DocstoreError):
    """Raised (or handed to a sink) when the storage engine fails.

    The engine exception is kept as ``__cause__``.
    """

    def __init__(self, message: str, *, collection: str | None = None) -> None:
        self.collection = collection
        super().__init__(message)


class DocstoreConnectionError(StorageError):
    """Raised when the engine client cannot be created."""


class AdapterStateError(DocstoreError):
    """Raised when a lifecycle method is called in the wrong state."""
