"""Tests for SessionHandle."""

from mydiary.core.session import SessionHandle


class TestSessionHandle:
    """SessionHandle over a plain dict."""

    def test_set_get_delete(self):
        session = SessionHandle({})
        session.set("key", "value")
        assert session.get("key") == "value"
        assert "key" in session

        session.delete("key")
        assert session.get("key") is None
        assert "key" not in session

    def test_delete_missing_is_noop(self):
        SessionHandle({}).delete("missing")

    def test_take_reads_once(self):
        session = SessionHandle({"key": "value"})
        assert session.take("key") == "value"
        assert session.take("key") is None

    def test_clear(self):
        store = {"a": 1, "b": 2}
        SessionHandle(store).clear()
        assert store == {}

    def test_login_markers(self):
        session = SessionHandle({})
        assert session.is_logged_in is False
        assert session.username is None

        session.set("logged_in", True)
        session.set("username", "user1")
        assert session.is_logged_in is True
        assert session.username == "user1"

    def test_pending_email(self):
        assert SessionHandle({"email": "a@b.com"}).pending_email == "a@b.com"

    def test_session_generation(self):
        assert SessionHandle({}).session_generation is None
        assert SessionHandle({"generation": 2}).session_generation == 2
