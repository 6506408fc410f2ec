import pytest

from conftest import FakeConnection
from sqlany_schema.schema.catalog import CatalogReader, COLUMNS_SQL
from sqlany_schema.schema.ddl import (
    CASE_RENAME_SUFFIX,
    COLUMN_INDEXES_SQL,
    CaseOnlyRename,
    DDLSynthesizer,
)


def _synth(responses=None):
    connection = FakeConnection(responses)
    return connection, DDLSynthesizer(connection)


def test_rename_table():
    connection, ddl = _synth()

    statements = ddl.rename_table("DBA.customers", "clients")

    assert statements == ['ALTER TABLE "DBA"."customers" RENAME "clients"']
    assert connection.executed == statements


def test_change_column_default():
    connection, ddl = _synth()

    ddl.change_column_default("customers", "status", "new")

    assert connection.executed == ['ALTER TABLE "customers" ALTER "status" DEFAULT \'new\'']


def test_change_column_null_backfills_before_tightening():
    connection, ddl = _synth()

    ddl.change_column_null("customers", "status", False, "new")

    assert connection.executed == [
        'UPDATE "customers" SET "status"=\'new\' WHERE "status" IS NULL',
        'ALTER TABLE "customers" ALTER "status" NOT NULL',
    ]


def test_change_column_null_without_default_or_when_loosening():
    connection, ddl = _synth()

    ddl.change_column_null("customers", "status", False)
    ddl.change_column_null("customers", "status", True, "ignored")

    assert connection.executed == [
        'ALTER TABLE "customers" ALTER "status" NOT NULL',
        'ALTER TABLE "customers" ALTER "status" NULL',
    ]


def test_change_column_uses_type_mapper_and_options():
    connection, ddl = _synth()

    ddl.change_column("customers", "age", "integer", limit=2)
    ddl.change_column("customers", "name", "string", limit=80, null=True)
    ddl.change_column("customers", "active", "boolean", default=True, null=False)

    assert connection.executed == [
        'ALTER TABLE "customers" ALTER "age" smallint',
        'ALTER TABLE "customers" ALTER "name" varchar (80) NULL',
        'ALTER TABLE "customers" ALTER "active" tinyint DEFAULT 1 NOT NULL',
    ]


def test_rename_column_single_statement():
    connection, ddl = _synth()

    statements = ddl.rename_column("customers", "foo", "bar")

    assert statements == ['ALTER TABLE "customers" RENAME "foo" TO "bar"']


def test_case_only_rename_goes_through_intermediate_name():
    connection, ddl = _synth()

    statements = ddl.rename_column("customers", "Foo", "foo")

    intermediate = f"foo{CASE_RENAME_SUFFIX}"
    assert statements == [
        f'ALTER TABLE "customers" RENAME "Foo" TO "{intermediate}"',
        f'ALTER TABLE "customers" RENAME "{intermediate}" TO "foo"',
    ]
    assert connection.executed == statements


def test_case_only_rename_plan():
    rename = CaseOnlyRename("customers", "EMAIL", "Email")

    assert CaseOnlyRename.applies("EMAIL", "Email")
    assert not CaseOnlyRename.applies("email", "email")
    assert not CaseOnlyRename.applies("email", "mail")
    assert rename.phases() == (("EMAIL", rename.intermediate), (rename.intermediate, "Email"))


def test_recover_case_renames_completes_second_phase():
    connection = FakeConnection({
        COLUMNS_SQL: [
            {"name": "id", "default": None, "domain": "integer", "nulls": "N", "width": 4, "scale": 0},
            {"name": f"Email{CASE_RENAME_SUFFIX}", "default": None, "domain": "varchar", "nulls": "Y", "width": 80, "scale": 0},
        ]
    })
    ddl = DDLSynthesizer(connection, catalog=CatalogReader(connection))

    statements = ddl.recover_case_renames("customers")

    assert statements == [f'ALTER TABLE "customers" RENAME "Email{CASE_RENAME_SUFFIX}" TO "Email"']


def test_remove_column_requires_columns():
    connection, ddl = _synth()

    with pytest.raises(ValueError, match="missing column name"):
        ddl.remove_column("customers")
    assert connection.executed == []
    assert connection.queries == []


def test_remove_column_drops_indexes_first():
    connection, ddl = _synth({
        COLUMN_INDEXES_SQL: [{"index_name": "ix_email"}, {"index_name": "ux_email_tenant"}],
    })

    ddl.remove_column("DBA.customers", "email")

    assert connection.executed == [
        'DROP INDEX "DBA"."customers"."ix_email"',
        'DROP INDEX "DBA"."customers"."ux_email_tenant"',
        'ALTER TABLE "DBA"."customers" DROP "email"',
    ]
    assert connection.queries[0][2] == {"column": "email", "name": "customers", "owner": "DBA"}


def test_remove_columns_drops_shared_index_once():
    def indexes_on(params):
        return {
            "first_name": [{"index_name": "ix_full_name"}],
            "last_name": [{"index_name": "ix_full_name"}, {"index_name": "ix_last_name"}],
        }[params["column"]]

    connection, ddl = _synth({COLUMN_INDEXES_SQL: indexes_on})

    ddl.remove_column("customers", ["first_name", "last_name"])

    assert connection.executed == [
        'DROP INDEX "customers"."ix_full_name"',
        'ALTER TABLE "customers" DROP "first_name"',
        'DROP INDEX "customers"."ix_last_name"',
        'ALTER TABLE "customers" DROP "last_name"',
    ]


def test_remove_index_by_name_and_by_columns():
    connection, ddl = _synth()

    ddl.remove_index("customers", name="ix_email")
    ddl.remove_index("DBA.customers", column=["last_name", "first_name"])

    assert connection.executed == [
        'DROP INDEX "customers"."ix_email"',
        'DROP INDEX "DBA"."customers"."index_customers_on_last_name_and_first_name"',
    ]


def test_columns_for_distinct_strips_order_modifiers():
    result = DDLSynthesizer.columns_for_distinct(["a"], ["b DESC", "c ASC NULLS LAST"])

    assert result == "a, b AS alias_0, c AS alias_1"


def test_columns_for_distinct_skips_blank_orders():
    result = DDLSynthesizer.columns_for_distinct("posts.id", ["", "  ", "posts.created_at desc nulls first"])

    assert result == "posts.id, posts.created_at AS alias_0"
