"""
Example 01: Binding Query Results

This example binds SELECT results into a single record, a list of records,
a mapping and a list of mappings using RowBinder's Session.
"""

from dataclasses import dataclass
import tempfile

from row_binder import ConnectionConfig, Engine, NotFoundError, ResultList, column


@dataclass
class User:
    id: int
    name: str
    email: str = column("email_address", default="")

    @classmethod
    def table_name(cls) -> str:
        return "users"


def main():
    db_dir = tempfile.mkdtemp()
    config = ConnectionConfig(driver="sqlite", database=f"{db_dir}/example.db")
    engine = Engine.from_config(config)

    with engine.new_session() as session:
        session.write("""
            CREATE TABLE users (
                id INTEGER PRIMARY KEY,
                name TEXT NOT NULL,
                email_address TEXT NOT NULL
            )
        """)
        session.write("INSERT INTO users (name, email_address) VALUES (?, ?)", "Alice", "alice@example.com")
        session.write("INSERT INTO users (name, email_address) VALUES (?, ?)", "Bob", "bob@example.com")
        session.write("INSERT INTO users (name, email_address) VALUES (?, ?)", "Charlie", "charlie@example.com")
        print(f"Last inserted id: {session.last_insert_id}")

        # Example 1: Single record (first row only)
        print("\n=== Single record ===")
        user = User(id=0, name="")
        session.bind(user).read("SELECT id, name, email_address FROM users WHERE id = ?", 1)
        print(f"  {user}")

        # Example 2: List of records
        print("\n=== List of records ===")
        users = ResultList(User)
        session.bind(users).read("SELECT id, name, email_address FROM users ORDER BY id")
        print(f"  table: {session.table_name}, fields: {session.fields}")
        for u in users:
            print(f"  {u.id}: {u.name} <{u.email}>")

        # Example 3: Mapping (one row of column -> value)
        print("\n=== Mapping ===")
        stats = {}
        session.bind(stats).read("SELECT COUNT(*) AS total, MAX(id) AS newest FROM users")
        print(f"  {stats}")

        # Example 4: List of mappings
        print("\n=== List of mappings ===")
        rows = ResultList(dict)
        session.bind(rows).read("SELECT id, name FROM users WHERE id > ?", 1)
        for row in rows:
            print(f"  {row}")

        # Example 5: No matching row
        print("\n=== Missing record ===")
        try:
            session.bind(User(id=0, name="")).read("SELECT id, name, email_address FROM users WHERE id = ?", 99)
        except NotFoundError as e:
            print(f"  {e}")

        print(f"\nLast statement: {session.last_sql}")

    print("\n✓ Example completed successfully!")


if __name__ == "__main__":
    main()
