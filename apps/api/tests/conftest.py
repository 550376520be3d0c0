import pytest
from fastapi.testclient import TestClient

from grail_tracker.core import db
from grail_tracker.seed import seed_statuses


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Fresh sqlite file per test, schema created and statuses seeded."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{(tmp_path / 'app.db').as_posix()}")
    db.dispose_engine()
    db.init_db()
    seed_statuses()
    yield
    db.dispose_engine()


@pytest.fixture
def client():
    from grail_tracker.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_campaign(client):
    def _make(name: str = "Avalon") -> int:
        r = client.post("/campaigns", json={"name": name})
        assert r.status_code == 200, r.text
        return r.json()["id"]

    return _make


@pytest.fixture
def campaign_id(make_campaign):
    return make_campaign()


@pytest.fixture
def statuses(client):
    """name -> status row from the seeded catalog."""
    return {s["name"]: s for s in client.get("/statuses").json()}


@pytest.fixture
def fail_inserts_on():
    """Install a trigger that aborts every INSERT into the given table."""
    from grail_tracker.core.db import connect

    def _install(table: str) -> None:
        conn = connect()
        try:
            conn.execute(
                f"CREATE TRIGGER trg_fail_{table} BEFORE INSERT ON {table} "
                "BEGIN SELECT RAISE(ABORT, 'insert refused'); END;"
            )
            conn.commit()
        finally:
            conn.close()

    return _install


@pytest.fixture
def count_rows():
    from grail_tracker.core.db import connect

    def _count(table: str) -> int:
        conn = connect()
        try:
            return int(conn.execute(f"SELECT COUNT(1) AS n FROM {table};").fetchone()["n"])
        finally:
            conn.close()

    return _count
