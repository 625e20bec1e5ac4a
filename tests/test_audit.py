"""Unit tests for rollcall.services.audit: best-effort append and the read view."""

import unittest

from rollcall.core.exceptions import StoreUnavailable
from rollcall.services.audit import SYSTEM_SECURITY_ACTOR_ID, AuditLogger, system_security_actor
from tests.fakes import InMemoryAuditStore, make_actor


class TestRecord(unittest.TestCase):
    """record() appends one entry or returns a degraded result."""

    def test_records_user_actor(self) -> None:
        store = InMemoryAuditStore()
        actor = make_actor(actor_id=12, username="shifa", full_name="Shifa Ahmed")
        result = AuditLogger(store).record("admin_block", "Blocked account: ali", actor)
        self.assertTrue(result.recorded)
        self.assertFalse(result.degraded)
        self.assertEqual(result.entry.performed_by, "12")
        self.assertEqual(result.entry.performed_by_name, "Shifa Ahmed")

    def test_records_system_actor(self) -> None:
        store = InMemoryAuditStore()
        result = AuditLogger(store).record("security_lockout", "x", system_security_actor("Sentinel"))
        self.assertEqual(result.entry.performed_by, SYSTEM_SECURITY_ACTOR_ID)
        self.assertEqual(result.entry.performed_by_name, "Sentinel")

    def test_store_failure_is_degraded_not_raised(self) -> None:
        store = InMemoryAuditStore()
        store.fail = True
        with self.assertLogs("rollcall.services.audit", level="WARNING") as logs:
            result = AuditLogger(store).record("update_user", "x", make_actor())
        self.assertFalse(result.recorded)
        self.assertTrue(result.degraded)
        self.assertIn("update_user", result.error.message)
        self.assertIn("update_user", logs.output[0])

    def test_invalid_entry_is_degraded_not_raised(self) -> None:
        store = InMemoryAuditStore()
        with self.assertLogs("rollcall.services.audit", level="WARNING"):
            result = AuditLogger(store).record("x" * 65, "action tag too long", make_actor())
        self.assertTrue(result.degraded)
        self.assertEqual(store.entries, [])


class TestRecent(unittest.TestCase):
    """recent() returns newest first and filters case-insensitively."""

    def setUp(self) -> None:
        self.store = InMemoryAuditStore()
        self.audit = AuditLogger(self.store)
        admin = make_actor(actor_id=1, username="shifa", full_name="Shifa Ahmed")
        self.audit.record("admin_block", "Blocked account: ali", admin)
        self.audit.record("admin_unblock", "Unblocked account: ali", admin)
        self.audit.record("security_lockout", "Account 'moosa' blocked", system_security_actor("System Security"))

    def test_newest_first_with_limit(self) -> None:
        entries = self.audit.recent(2)
        self.assertEqual([e.action for e in entries], ["security_lockout", "admin_unblock"])

    def test_search_matches_details_action_or_name(self) -> None:
        self.assertEqual(len(self.audit.recent(10, "MOOSA")), 1)
        self.assertEqual(len(self.audit.recent(10, "admin_")), 2)
        self.assertEqual(len(self.audit.recent(10, "shifa")), 2)
        self.assertEqual(len(self.audit.recent(10, "   ")), 3)

    def test_read_failure_propagates(self) -> None:
        self.store.fail = True
        with self.assertRaises(StoreUnavailable):
            self.audit.recent(10)


if __name__ == "__main__":
    unittest.main()
