import pytest


class FakeCursor:
    def __init__(self, db):
        self.db = db
        self.rowcount = 0

    def execute(self, sql, params=()):
        if self.db.fail_with:
            raise self.db.fail_with
        self.db.statements.append((" ".join(sql.split()), params))
        self.rowcount = self.db.update_rowcount if sql.strip().startswith("UPDATE") else 0

    def executemany(self, sql, rows):
        self.db.statements.append((" ".join(sql.split()), list(rows)))

    def fetchall(self):
        return self.db.rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db):
        self.db = db

    def cursor(self, dictionary=False):
        return FakeCursor(self.db)

    def commit(self):
        self.db.commits += 1

    def rollback(self):
        self.db.rollbacks += 1

    def close(self):
        pass


class FakeDatabase:
    """Stands in for DatabaseConnection: records statements, serves canned rows."""

    def __init__(self, *, rows=(), update_rowcount=1, fail_with=None):
        self.rows = list(rows)
        self.update_rowcount = update_rowcount
        self.fail_with = fail_with
        self.statements = []
        self.commits = 0
        self.rollbacks = 0

    def connect(self):
        return FakeConnection(self)


@pytest.fixture
def fake_db():
    return FakeDatabase
