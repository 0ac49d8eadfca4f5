"""Hype toggle tests."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from server.api import hypes as hypes_api
from server.api.hypes import toggle_hype
from server.core.errors import InternalError
from server.database import create_db_engine, init_db
from server.models.hype import Hype
from server.models.post import Post
from server.models.user import User


def _feed_entry(client: TestClient, viewer_id: int, post_id: int) -> dict:
    feed = client.get("/posts", params={"user_id": viewer_id}).json()
    return next(p for p in feed if p["id"] == post_id)


class TestToggleHype:
    def test_add_then_remove(self, client: TestClient, register, publish):
        author = register("ana")
        viewer = register("bia")
        post_id = publish(author["id"], "hello")

        response = client.post("/hypes", json={"user_id": viewer["id"], "post_id": post_id})
        assert response.status_code == 200
        assert response.json() == {"action": "added"}
        entry = _feed_entry(client, viewer["id"], post_id)
        assert entry["hype_count"] == 1
        assert entry["user_hyped"] is True

        response = client.post("/hypes", json={"user_id": viewer["id"], "post_id": post_id})
        assert response.json() == {"action": "removed"}
        entry = _feed_entry(client, viewer["id"], post_id)
        assert entry["hype_count"] == 0
        assert entry["user_hyped"] is False

    def test_toggle_twice_restores_state(self, client: TestClient, register, publish, db):
        author = register("ana")
        fans = [register(f"fan{i}") for i in range(3)]
        post_id = publish(author["id"], "hello")
        for fan in fans[:2]:
            client.post("/hypes", json={"user_id": fan["id"], "post_id": post_id})

        before = _feed_entry(client, author["id"], post_id)["hype_count"]
        for fan in fans:
            client.post("/hypes", json={"user_id": fan["id"], "post_id": post_id})
            client.post("/hypes", json={"user_id": fan["id"], "post_id": post_id})
        assert _feed_entry(client, author["id"], post_id)["hype_count"] == before == 2
        assert db.query(Hype).count() == 2

    def test_count_matches_distinct_active_hypers(self, client: TestClient, register, publish):
        author = register("ana")
        fans = [register(f"fan{i}") for i in range(4)]
        post_id = publish(author["id"], "hello")
        other_id = publish(author["id"], "other")

        for fan in fans:
            client.post("/hypes", json={"user_id": fan["id"], "post_id": post_id})
        client.post("/hypes", json={"user_id": fans[0]["id"], "post_id": post_id})
        client.post("/hypes", json={"user_id": fans[1]["id"], "post_id": other_id})

        assert _feed_entry(client, author["id"], post_id)["hype_count"] == 3
        assert _feed_entry(client, author["id"], other_id)["hype_count"] == 1
        assert _feed_entry(client, fans[0]["id"], post_id)["user_hyped"] is False
        assert _feed_entry(client, fans[1]["id"], post_id)["user_hyped"] is True

    @pytest.mark.parametrize("payload", [{}, {"user_id": 1}, {"post_id": 1}])
    def test_missing_ids_rejected(self, client: TestClient, payload):
        response = client.post("/hypes", json=payload)
        assert response.status_code == 400

    def test_unknown_post_is_a_silent_no_op(self, client: TestClient, register, db):
        viewer = register("bia")
        response = client.post("/hypes", json={"user_id": viewer["id"], "post_id": 42})
        assert response.status_code == 200
        assert response.json() == {"action": "added"}
        assert db.query(Hype).count() == 0

        again = client.post("/hypes", json={"user_id": viewer["id"], "post_id": 42})
        assert again.json() == {"action": "added"}
        assert db.query(Hype).count() == 0

    @pytest.mark.parametrize("failure", [
        OperationalError("INSERT", {}, Exception("database is locked")),
        InternalError("Could not toggle hype"),
    ])
    def test_store_failure_is_a_silent_no_op(self, client: TestClient, monkeypatch, failure):
        def fail(db, user_id, post_id):
            raise failure

        monkeypatch.setattr(hypes_api, "toggle_hype", fail)
        response = client.post("/hypes", json={"user_id": 1, "post_id": 1})
        assert response.status_code == 200
        assert response.json() == {"action": "added"}


class TestToggleRace:
    """A concurrent toggle inserting the same pair between check and insert."""

    @pytest.fixture
    def file_sessions(self, tmp_path):
        engine = create_db_engine(f"sqlite:///{tmp_path / 'race.db'}")
        init_db(engine)
        yield sessionmaker(bind=engine, autoflush=False)
        engine.dispose()

    def test_lost_insert_rechecks_instead_of_failing(self, file_sessions, monkeypatch):
        with file_sessions() as setup:
            setup.add(User(username="ana", password="x"))
            setup.commit()
            setup.add(Post(user_id=1, content="hello", created_at=1))
            setup.commit()

        db = file_sessions()
        original_add = db.add
        raced = []

        def racing_add(obj):
            if isinstance(obj, Hype) and not raced:
                raced.append(True)
                with file_sessions() as other:
                    other.add(Hype(user_id=1, post_id=1))
                    other.commit()
            original_add(obj)

        monkeypatch.setattr(db, "add", racing_add)
        try:
            action = toggle_hype(db, 1, 1)
        finally:
            db.close()

        assert raced
        assert action == "removed"
        with file_sessions() as check:
            assert check.query(Hype).count() == 0
