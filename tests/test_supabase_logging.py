# tests/test_supabase_logging.py
"""
Best-effort Supabase activity log, exercised with a fake PostgREST client.
"""
from supabase_client.helpers import SupabaseActivityLog, fetch_recent, insert_record


class _Result:
    def __init__(self, data):
        self.data = data


class _Query:
    def __init__(self, table, fail=False):
        self.table = table
        self.fail = fail
        self.ops = []

    def insert(self, payload):
        self.ops.append(("insert", payload))
        return self

    def select(self, columns):
        self.ops.append(("select", columns))
        return self

    def order(self, column, desc=False):
        self.ops.append(("order", column, desc))
        return self

    def limit(self, n):
        self.ops.append(("limit", n))
        return self

    def execute(self):
        if self.fail:
            raise ConnectionError("supabase unreachable")
        if self.ops[0][0] == "insert":
            return _Result([self.ops[0][1]])
        return _Result(self.table.rows)


class FakeSupabase:
    def __init__(self, fail=False):
        self.fail = fail
        self.rows = [{"id": 2, "status": "ok"}, {"id": 1, "status": "failed"}]
        self.queries = []

    def table(self, name):
        query = _Query(self, fail=self.fail)
        self.queries.append((name, query))
        return query


def test_insert_record_adds_timestamp():
    client = FakeSupabase()
    rows = insert_record(client, "enrichment_logs", {"status": "ok"})
    assert rows[0]["status"] == "ok"
    assert "created_at" in rows[0]


def test_fetch_recent_orders_newest_first():
    client = FakeSupabase()
    rows = fetch_recent(client, "enrichment_logs", limit=5)
    name, query = client.queries[0]
    assert name == "enrichment_logs"
    assert ("order", "created_at", True) in query.ops
    assert ("limit", 5) in query.ops
    assert rows == client.rows


def test_activity_log_swallows_failures():
    log = SupabaseActivityLog(FakeSupabase(fail=True))
    log.record({"status": "ok"})  # must not raise


def test_activity_log_writes_to_enrichment_table():
    client = FakeSupabase()
    SupabaseActivityLog(client).record({"status": "ok", "kind": "layout"})
    assert client.queries[0][0] == "enrichment_logs"
