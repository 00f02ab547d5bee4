"""Unit tests for adapter options and the mapper configuration."""

from __future__ import annotations

import pytest

from mapper_docstore.config import AdapterOptions, IndexOptions, OrmConfig
from mapper_docstore.exceptions import ValidationError


def test_adapter_options_defaults() -> None:
    opts = AdapterOptions.coerce(None)
    assert opts.database == "docstore"
    assert opts.url is None
    assert opts.embedded is True


def test_adapter_options_from_mapping() -> None:
    opts = AdapterOptions.coerce({"database": "app", "url": "mongodb://db:27017"})
    assert opts.database == "app"
    assert opts.embedded is False


def test_adapter_options_instance_passthrough() -> None:
    opts = AdapterOptions(database="x")
    assert AdapterOptions.coerce(opts) is opts


@pytest.mark.parametrize("bad", [1, "s", False, ["database"]])
def test_adapter_options_rejects_non_mapping(bad) -> None:
    with pytest.raises(ValidationError):
        AdapterOptions.coerce(bad)


def test_adapter_options_rejects_mistyped_database() -> None:
    with pytest.raises(ValidationError) as exc_info:
        AdapterOptions.coerce({"database": 42})
    assert "database" in exc_info.value.errors


def test_adapter_options_rejects_unknown_keys() -> None:
    with pytest.raises(ValidationError):
        AdapterOptions.coerce({"databasePath": "/tmp/db"})


def test_adapter_options_datafile_for(tmp_path) -> None:
    opts = AdapterOptions.coerce({"database_path": str(tmp_path / "db")})
    assert opts.embedded is True
    assert opts.datafile_for("tests") == tmp_path / "db" / "tests.jsonl"


def test_adapter_options_without_path_is_in_memory() -> None:
    assert AdapterOptions().datafile_for("tests") is None


@pytest.mark.parametrize("bad", [1, False, ""])
def test_adapter_options_rejects_bad_database_path(bad) -> None:
    with pytest.raises(ValidationError) as exc_info:
        AdapterOptions.coerce({"database_path": bad})
    assert "database_path" in exc_info.value.errors


def test_adapter_options_rejects_path_with_url(tmp_path) -> None:
    with pytest.raises(ValidationError):
        AdapterOptions.coerce(
            {"database_path": str(tmp_path), "url": "mongodb://db:27017"}
        )


def test_adapter_options_rejects_non_positive_timeouts() -> None:
    with pytest.raises(ValidationError):
        AdapterOptions.coerce({"connect_timeout_ms": 0})


def test_index_options_defaults() -> None:
    opts = IndexOptions.from_options({})
    assert opts.unique is False
    assert opts.sparse is False


def test_index_options_falsy_values_are_false() -> None:
    opts = IndexOptions.from_options({"unique": None, "sparse": 0})
    assert opts.unique is False
    assert opts.sparse is False


def test_index_options_accepts_booleans() -> None:
    opts = IndexOptions.from_options({"unique": True, "sparse": True})
    assert opts.unique is True
    assert opts.sparse is True


@pytest.mark.parametrize("key", ["unique", "sparse"])
@pytest.mark.parametrize("bad", [1, "s", [1]])
def test_index_options_rejects_truthy_non_booleans(key, bad) -> None:
    with pytest.raises(ValidationError) as exc_info:
        IndexOptions.from_options({key: bad})
    assert key in exc_info.value.errors


def test_orm_config_values() -> None:
    config = OrmConfig()
    assert config.id_key == "_id"
    assert config.plural_foreign_key == "_{modelName}Ids"
    assert config.singular_foreign_key == "_{modelName}Id"


def test_orm_config_as_options_uses_mapper_keys() -> None:
    assert OrmConfig().as_options() == {
        "idKey": "_id",
        "pluralForeignKey": "_{modelName}Ids",
        "singularForeignKey": "_{modelName}Id",
    }
