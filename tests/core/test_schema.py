"""Tests for campfire.core.schema: descriptors and DDL."""

import pytest

from campfire.core.dialect import MySQLDialect, SQLiteDialect
from campfire.core.errors import SchemaError
from campfire.core.schema import EntitySchema, FieldSpec, build_create_table, build_drop_table

SCREEN = EntitySchema(
    table="screen",
    key_column="intScreenID",
    fields={
        "strScreen": FieldSpec("varchar", length=255),
        "dtLastSeen": FieldSpec("datetime"),
        "lastChange": FieldSpec("datetime"),
    },
)


class TestFieldSpec:
    def test_enum_requires_options(self):
        with pytest.raises(SchemaError):
            FieldSpec("enum")

    def test_type_required(self):
        with pytest.raises(SchemaError):
            FieldSpec("")


class TestEntitySchema:
    def test_columns(self):
        assert SCREEN.field_names == ["strScreen", "dtLastSeen", "lastChange"]
        assert SCREEN.is_column("intScreenID")
        assert SCREEN.is_column("strScreen")
        assert not SCREEN.is_column("strNope")
        assert not SCREEN.is_column(None)
        assert not SCREEN.is_declared("intScreenID")

    def test_timestamp(self):
        assert SCREEN.has_timestamp
        no_ts = EntitySchema(table="tag", key_column="id", fields={"name": FieldSpec("text")})
        assert not no_ts.has_timestamp

    def test_fields_are_read_only(self):
        with pytest.raises(TypeError):
            SCREEN.fields["strHack"] = FieldSpec("text")

    def test_needs_some_key(self):
        with pytest.raises(SchemaError, match="neither"):
            EntitySchema(table="x", fields={"a": FieldSpec("int")})

    def test_key_column_is_not_a_field(self):
        with pytest.raises(SchemaError):
            EntitySchema(table="x", key_column="a", fields={"a": FieldSpec("int")})

    def test_composite_key_must_be_declared(self):
        with pytest.raises(SchemaError, match="not declared"):
            EntitySchema(table="x", fields={"a": FieldSpec("int")}, composite_key=("a", "b"))

    def test_order_column(self):
        composite = EntitySchema(
            table="x",
            fields={"a": FieldSpec("int"), "b": FieldSpec("int")},
            composite_key=("a", "b"),
        )
        assert SCREEN.order_column == "intScreenID"
        assert composite.order_column == "a"


class TestBuildCreateTableMySQL:
    d = MySQLDialect()

    def test_screen_table(self):
        assert build_create_table(SCREEN, self.d) == (
            "CREATE TABLE IF NOT EXISTS `screen` ("
            "`intScreenID` int(11) NOT NULL AUTO_INCREMENT, "
            "`strScreen` varchar(255) DEFAULT NULL, "
            "`dtLastSeen` datetime DEFAULT NULL, "
            "`lastChange` datetime DEFAULT NULL, "
            "PRIMARY KEY (`intScreenID`)"
            ") ENGINE=MyISAM DEFAULT CHARSET=utf8 AUTO_INCREMENT=1"
        )

    def test_nullability_enum_text_and_unique(self):
        schema = EntitySchema(
            table="talk",
            key_column="intTalkID",
            fields={
                "strTitle": FieldSpec("varchar", length=64, nullable=False, unique=True),
                "strNote": FieldSpec("text", length=999, nullable=True),
                "enumState": FieldSpec("enum", options=("open", "closed")),
                "intSlot": FieldSpec("int", length=11, unique=True),
            },
        )
        sql = build_create_table(schema, self.d, engine="InnoDB", charset="utf8mb4")
        assert "`strTitle` varchar(64) NOT NULL" in sql
        assert "`strNote` text NULL" in sql
        assert "`enumState` enum('open','closed') DEFAULT NULL" in sql
        assert "UNIQUE KEY `unique_key` (`strTitle`,`intSlot`)" in sql
        assert sql.endswith("ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 AUTO_INCREMENT=1")

    def test_composite_key(self):
        schema = EntitySchema(
            table="screendirection",
            fields={"intScreenID": FieldSpec("int", length=11), "intRoomID": FieldSpec("int", length=11)},
            composite_key=("intScreenID", "intRoomID"),
        )
        sql = build_create_table(schema, self.d)
        assert "AUTO_INCREMENT" not in sql
        assert "PRIMARY KEY (`intScreenID`, `intRoomID`)" in sql


class TestBuildCreateTableSQLite:
    d = SQLiteDialect()

    def test_screen_table(self):
        assert build_create_table(SCREEN, self.d) == (
            'CREATE TABLE IF NOT EXISTS "screen" ('
            '"intScreenID" INTEGER PRIMARY KEY AUTOINCREMENT, '
            '"strScreen" varchar(255) DEFAULT NULL, '
            '"dtLastSeen" datetime DEFAULT NULL, '
            '"lastChange" datetime DEFAULT NULL)'
        )

    def test_ddl_is_idempotent(self, adapter):
        adapter.execute_ddl(build_create_table(SCREEN, self.d))
        adapter.execute_ddl(build_create_table(SCREEN, self.d))
        assert adapter.table_exists("screen")

    def test_drop(self, adapter):
        adapter.execute_ddl(build_create_table(SCREEN, self.d))
        adapter.execute_ddl(build_drop_table(SCREEN, self.d))
        assert not adapter.table_exists("screen")
        adapter.execute_ddl(build_drop_table(SCREEN, self.d))
