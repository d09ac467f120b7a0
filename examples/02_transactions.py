"""
Example 02: Transactions

This example demonstrates explicit transactions and step-based transactions
with automatic rollback on errors.
"""

import tempfile

from row_binder import ConnectionConfig, Engine, ExecutionError


def count_users(session) -> int:
    row = {}
    session.bind(row).read("SELECT COUNT(*) AS n FROM users")
    return row["n"]


def main():
    db_dir = tempfile.mkdtemp()
    config = ConnectionConfig(driver="sqlite", database=f"{db_dir}/example.db")
    engine = Engine.from_config(config, enable_query_log=True)

    with engine.new_session() as session:
        session.write("""
            CREATE TABLE users (
                id INTEGER PRIMARY KEY,
                name TEXT NOT NULL,
                email TEXT NOT NULL UNIQUE
            )
        """)
        session.write("""
            CREATE TABLE audit_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                action TEXT NOT NULL
            )
        """)

        # Example 1: Explicit begin/commit
        print("=== Explicit transaction ===")
        session.begin()
        session.write("INSERT INTO users (name, email) VALUES (?, ?)", "Alice", "alice@example.com")
        print(f"  Visible on read path before commit: {count_users(session)}")
        session.commit()
        print(f"  Visible on read path after commit: {count_users(session)}")

        # Example 2: Steps committed together
        print("\n=== Step-based transaction ===")
        session.run_transaction(
            lambda s: s.write("INSERT INTO users (name, email) VALUES (?, ?)", "Bob", "bob@example.com"),
            lambda s: s.write(
                "INSERT INTO audit_log (user_id, action) VALUES (?, ?)", s.last_insert_id, "created"
            ),
        )
        print(f"  Users: {count_users(session)}")

        # Example 3: A failing step rolls back every earlier step
        print("\n=== Rollback on error ===")
        try:
            session.run_transaction(
                lambda s: s.write("INSERT INTO users (name, email) VALUES (?, ?)", "Carol", "carol@example.com"),
                lambda s: s.write("INSERT INTO users (name, email) VALUES (?, ?)", "Dup", "alice@example.com"),
            )
        except ExecutionError as e:
            print(f"  Transaction failed: {e}")
        print(f"  Users after rollback: {count_users(session)}")

        print("\n=== Query log ===")
        for sql in session.query_log:
            print(f"  {sql.strip()}")

    print("\n✓ Example completed successfully!")


if __name__ == "__main__":
    main()
