import sqlite3


class SqliteClient:
    """SQLite database client with connection management."""

    def __init__(self, connection_string: str):
        self.connection_string = connection_string
        # The API serves requests from the event loop thread, not the one that connected
        self._connection = sqlite3.connect(self.connection_string, check_same_thread=False)

    def execute_query(self, query: str, params=None):
        """Execute a read query and return all results."""
        cursor = self._connection.cursor()
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)

        results = cursor.fetchall()
        cursor.close()
        return results

    def execute_write(self, query: str, params=None) -> int:
        """Execute a write statement, commit, and return the affected row count."""
        cursor = self._connection.cursor()
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)
        self._connection.commit()

        affected = cursor.rowcount
        cursor.close()
        return affected

    def close(self):
        """Close the database connection."""
        self._connection.close()
