"""Unit tests for rollcall.services.session: registry lifecycle and per-session counters."""

import unittest

from rollcall.services.session import SessionRegistry
from tests.fakes import make_actor


class TestSessionRegistry(unittest.TestCase):
    def test_open_get_close(self) -> None:
        registry = SessionRegistry()
        session = registry.open()
        self.assertIs(registry.get(session.id), session)
        self.assertEqual(len(registry), 1)
        registry.close(session.id)
        self.assertIsNone(registry.get(session.id))
        self.assertEqual(len(registry), 0)

    def test_get_or_open_unknown_id_opens_fresh(self) -> None:
        registry = SessionRegistry()
        session = registry.get_or_open("not-a-session")
        self.assertNotEqual(session.id, "not-a-session")
        self.assertIs(registry.get_or_open(session.id), session)
        self.assertIsNone(registry.get(None))

    def test_close_is_idempotent(self) -> None:
        registry = SessionRegistry()
        registry.close("missing")
        self.assertEqual(len(registry), 0)


class TestSessionStore(unittest.TestCase):
    """Counters are per session; signing out keeps them, closing discards them."""

    def test_sign_in_and_out(self) -> None:
        session = SessionRegistry().open()
        self.assertFalse(session.is_authenticated)
        session.sign_in(make_actor(actor_id=8))
        self.assertEqual(session.actor_id, 8)
        session.sign_out()
        self.assertFalse(session.is_authenticated)

    def test_attempts_are_isolated_between_sessions(self) -> None:
        registry = SessionRegistry()
        first, second = registry.open(), registry.open()
        first.attempts.increment("ali")
        self.assertEqual(first.attempts.count("ali"), 1)
        self.assertEqual(second.attempts.count("ali"), 0)


if __name__ == "__main__":
    unittest.main()
