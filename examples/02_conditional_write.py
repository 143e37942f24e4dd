"""
Example 02: Conditional Writes

This example shows compare-and-swap style writes against Cassandra. The row
returned by the server is copied back into the record whether or not the
write applied, so a lost race leaves you holding the current state.

Requires: pip install row-scan[cassandra] and CASS_DB_* environment variables.
"""

import logging
import os
from dataclasses import dataclass

from row_scan import Client


@dataclass
class Account:
    id: int
    owner: str
    balance: int


def main():
    logging.basicConfig(level=logging.DEBUG)

    with Client.from_source(os.environ) as client:
        account = Account(id=0, owner="", balance=0)
        client.query_row(account, "SELECT * FROM accounts WHERE id = %s", 7)
        print(f"Before: {account}")

        applied = client.query_cas(
            account,
            "UPDATE accounts SET balance = %s WHERE id = %s IF balance = %s",
            account.balance - 10,
            account.id,
            account.balance,
        )
        if not applied:
            print(f"Lost the race, current state: {account}")
        else:
            print("Applied")


if __name__ == "__main__":
    main()
