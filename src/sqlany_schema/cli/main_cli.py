"""
Interactive CLI for browsing a SQL Anywhere catalog
"""

from ..config import DatabaseSettings
from ..database import DatabaseFactory
from ..database.models import DatabaseSchema
from ..schema import CatalogReader
from ..utils import SchemaAnalyzer


def print_table(schema: DatabaseSchema, table_name: str):
    """Show columns, keys and indexes of one table"""
    table = schema.tables.get(table_name)
    if table is None:
        print(f"Table '{table_name}' not found")
        return

    print(f"\n📋 Schema for {table_name}:")
    print("\nColumns:")
    for col in table.columns:
        default = col.default or col.default_function
        suffix = f" DEFAULT {default}" if default else ""
        print(f"  - {col.name}: {col.native_type.sql_type} {'NULL' if col.nullable else 'NOT NULL'}{suffix}")
    if table.primary_keys:
        print(f"\nPrimary Key: {', '.join(table.primary_keys)}")
    if table.indexes:
        print("\nIndexes:")
        for idx in table.indexes:
            print(f"  - {idx.name} ({', '.join(idx.columns)}){' UNIQUE' if idx.unique else ''}")
    if table.foreign_keys:
        print("\nForeign Keys:")
        for fk in table.foreign_keys:
            print(f"  - {fk.column} -> {fk.to_table}.{fk.primary_key} "
                  f"[update: {fk.on_update.value}, delete: {fk.on_delete.value}]")


def main():
    """CLI interface"""
    print("\n🔌 Connecting to SQL Anywhere...")
    try:
        settings = DatabaseSettings.from_env()
        connection = DatabaseFactory.create_connector('sqlanywhere', settings.__dict__)
    except (ValueError, ConnectionError) as e:
        print(f"Failed to connect to database: {e}")
        return

    catalog = CatalogReader(connection)
    analyzer = SchemaAnalyzer()

    print("\n🔍 Reading catalog...")
    schema = catalog.snapshot()
    print(f"📊 Found {len(schema.tables)} tables and {len(schema.views)} views")

    print("\n" + "="*60)
    print("💡 Commands:")
    print("  - 'TABLES' - List tables")
    print("  - 'VIEWS' - List views")
    print("  - 'SCHEMA <table>' - Show table schema")
    print("  - 'RELATIONSHIPS' - Show foreign keys")
    print("  - 'ORDER' - Show table insertion order")
    print("  - 'REFRESH' - Re-read the catalog")
    print("  - 'EXIT' - Exit")
    print("="*60)

    while True:
        try:
            user_input = input("\n💬 Command: ").strip()

            if not user_input:
                continue

            command = user_input.upper()
            if command == 'EXIT':
                print("\n👋 Goodbye!")
                break

            elif command == 'TABLES':
                for table_name in schema.tables:
                    print(f"  - {table_name}")

            elif command == 'VIEWS':
                for view_name in schema.views:
                    print(f"  - {view_name}")

            elif command.startswith('SCHEMA'):
                parts = user_input.split()
                if len(parts) > 1:
                    print_table(schema, parts[1])
                else:
                    print("Usage: SCHEMA <table_name>")

            elif command == 'RELATIONSHIPS':
                print("\n🔗 Table Relationships:")
                for fk in schema.relationships:
                    print(f"  {fk.from_table}.{fk.column} -> {fk.to_table}.{fk.primary_key} [{fk.name}]")

            elif command == 'ORDER':
                analysis = analyzer.analyze_schema(schema)
                for i, table_name in enumerate(analysis['insertion_order'], 1):
                    print(f"  {i}. {table_name}")
                for cycle in analysis['circular_references']:
                    print(f"  ⚠️ Circular reference: {' -> '.join(cycle)}")

            elif command == 'REFRESH':
                schema = catalog.snapshot()
                print(f"✅ {len(schema.tables)} tables, {len(schema.views)} views")

            else:
                print(f"Unknown command: {user_input}")

        except KeyboardInterrupt:
            print("\n\n👋 Session interrupted. Goodbye!")
            break
        except Exception as e:
            print(f"\n❌ Error: {str(e)}")
            print("Please try again or type 'EXIT' to quit")


if __name__ == "__main__":
    main()
