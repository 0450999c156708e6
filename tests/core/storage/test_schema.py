# tests/core/storage/test_schema.py
"""Tests for namespaced error table definitions."""

from pathlib import Path

from sqlalchemy import create_engine, inspect


class TestSchemaDefinition:
    """SQLAlchemy table definitions."""

    def test_tables_carry_prefix(self) -> None:
        from errorledger.core.storage.schema import build_error_tables

        tables = build_error_tables("feed_1_")

        assert tables.errors.name == "feed_1_errors"
        assert tables.error_refs.name == "feed_1_error_refs"
        assert tables.error_info.name == "feed_1_error_info"
        assert tables.prefix == "feed_1_"

    def test_none_prefix_is_empty(self) -> None:
        from errorledger.core.storage.schema import build_error_tables

        tables = build_error_tables(None)

        assert tables.prefix == ""
        assert tables.errors.name == "errors"

    def test_dotted_prefix_sets_schema(self) -> None:
        from errorledger.core.storage.schema import build_error_tables

        tables = build_error_tables("gtfs.feed_1_")

        assert tables.errors.schema == "gtfs"
        assert tables.errors.name == "feed_1_errors"
        assert tables.error_refs.fullname == "gtfs.feed_1_error_refs"

    def test_error_columns(self) -> None:
        from errorledger.core.storage.schema import build_error_tables

        errors = build_error_tables("t_").errors

        assert [c.name for c in errors.columns] == ["error_id", "type", "problems"]
        assert [c.name for c in errors.primary_key.columns] == ["error_id"]

    def test_ref_columns_allow_null_sequence(self) -> None:
        from errorledger.core.storage.schema import build_error_tables

        refs = build_error_tables("t_").error_refs

        assert [c.name for c in refs.columns] == [
            "error_id",
            "entity_type",
            "line_number",
            "entity_id",
            "sequence_number",
        ]
        assert refs.c.sequence_number.nullable

    def test_info_columns(self) -> None:
        from errorledger.core.storage.schema import build_error_tables

        info = build_error_tables("t_").error_info

        assert [c.name for c in info.columns] == ["error_id", "key", "value"]

    def test_write_order_starts_with_errors(self) -> None:
        from errorledger.core.storage.schema import build_error_tables

        tables = build_error_tables("t_")

        assert tables.in_write_order[0] is tables.errors

    def test_namespaces_do_not_share_metadata(self) -> None:
        from errorledger.core.storage.schema import build_error_tables

        a = build_error_tables("a_")
        b = build_error_tables("b_")

        assert a.metadata is not b.metadata
        assert "b_errors" not in a.metadata.tables


class TestSchemaCreation:
    """Creating tables in a database."""

    def test_create_all_tables(self, tmp_path: Path) -> None:
        from errorledger.core.storage.schema import build_error_tables

        engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
        build_error_tables("t_").metadata.create_all(engine)

        tables = inspect(engine).get_table_names()

        assert "t_errors" in tables
        assert "t_error_refs" in tables
        assert "t_error_info" in tables
