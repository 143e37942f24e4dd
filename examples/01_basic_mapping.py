"""
Example 01: Basic Mapping

This example maps rows into a dataclass, a list of dataclasses and a list of
scalars using an in-memory SQLite session.
"""

from dataclasses import dataclass

from row_scan import Client, ConnectionConfig, column


@dataclass
class User:
    """Field names are resolved to snake_case columns: UserName -> user_name"""
    ID: int
    UserName: str
    contact: str = column("email", default="")


def main():
    config = ConnectionConfig(driver="sqlite", database=":memory:")

    with Client.from_config(config) as client:
        client.exec("CREATE TABLE users (id INTEGER PRIMARY KEY, user_name TEXT, email TEXT)")
        client.exec("INSERT INTO users VALUES (?, ?, ?)", 1, "alice", "alice@example.com")
        client.exec("INSERT INTO users VALUES (?, ?, ?)", 2, "bob", "bob@example.com")

        print("=== Basic Mapping ===\n")

        print("1. Single record:")
        user = User(ID=0, UserName="")
        client.query_row(user, "SELECT * FROM users WHERE id = ?", 1)
        print(f"   {user}\n")

        print("2. List of records:")
        users: list[User] = []
        client.query(users, "SELECT * FROM users ORDER BY id", into=User)
        for u in users:
            print(f"   - {u.UserName}: {u.contact}")
        print()

        print("3. List of scalars:")
        ids: list[int] = []
        client.query(ids, "SELECT id FROM users ORDER BY id", into=int)
        print(f"   {ids}\n")


if __name__ == "__main__":
    main()
