"""Adapter options and the configuration handed back to the mapper."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from .datafile import datafile_path
from .exceptions import ValidationError

if TYPE_CHECKING:
    from pathlib import Path


def _collect_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ())) or "__root__"
        msg = error.get("msg", "validation error")
        errors.setdefault(loc, []).append(msg)
    return errors


class AdapterOptions(BaseModel):
    """Options accepted by :class:`~mapper_docstore.adapter.DocstoreAdapter`.

    ``url=None`` runs the engine embedded, in-process; any other value is a
    MongoDB connection string handed to Motor. ``database_path`` keeps the
    embedded engine's collections in one datafile each under that directory.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    database: str = "docstore"
    url: str | None = None
    database_path: str | None = Field(default=None, min_length=1)
    server_selection_timeout_ms: int = Field(default=5000, gt=0)
    connect_timeout_ms: int = Field(default=10000, gt=0)

    @model_validator(mode="after")
    def _path_needs_embedded_engine(self) -> AdapterOptions:
        if self.database_path is not None and self.url is not None:
            raise ValueError("database_path cannot be combined with url")
        return self

    @property
    def embedded(self) -> bool:
        return self.url is None

    def datafile_for(self, collection_name: str) -> Path | None:
        """Datafile backing ``collection_name``, or ``None`` when in-memory."""
        if self.database_path is None:
            return None
        return datafile_path(self.database_path, collection_name)

    @classmethod
    def coerce(cls, options: AdapterOptions | Mapping[str, Any] | None) -> AdapterOptions:
        """Build options from a mapping; raises :class:`ValidationError`."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if not isinstance(options, Mapping):
            raise ValidationError("options must be a mapping")
        try:
            return cls.model_validate(dict(options))
        except PydanticValidationError as exc:
            raise ValidationError(_collect_errors(exc)) from exc


class IndexOptions(BaseModel):
    """Index creation flags. Falsy values count as ``False``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    unique: StrictBool = False
    sparse: StrictBool = False

    @field_validator("unique", "sparse", mode="before")
    @classmethod
    def _falsy_is_false(cls, value: Any) -> Any:
        return value or False

    @classmethod
    def from_options(cls, opts: Mapping[str, Any]) -> IndexOptions:
        try:
            return cls.model_validate(dict(opts))
        except PydanticValidationError as exc:
            raise ValidationError(_collect_errors(exc)) from exc


class OrmConfig(BaseModel):
    """Fixed key conventions the mapper must use with this store.

    Returned by the adapter instead of being written into the mapper's shared
    options; the caller merges :meth:`as_options` into its own configuration.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id_key: str = Field(default="_id", alias="idKey")
    plural_foreign_key: str = Field(default="_{modelName}Ids", alias="pluralForeignKey")
    singular_foreign_key: str = Field(
        default="_{modelName}Id", alias="singularForeignKey"
    )

    def as_options(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)
