"""Unit tests for the SQLAlchemy store adapters using a mocked Session."""

import unittest
from datetime import UTC, datetime
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from rollcall.core.exceptions import StoreUnavailable
from rollcall.models import AuditLog, User
from rollcall.schemas.audit import AuditEntryCreate
from rollcall.schemas.permissions import PermissionId, Role
from rollcall.services.stores import SqlActorStore, SqlAuditStore
from tests.fakes import make_actor


def _user(**kwargs: object) -> User:
    values = {
        "id": 2,
        "username": "Ali",
        "password_hash": "x",
        "full_name": None,
        "role": "mamdhoob",
        "permissions": None,
        "is_blocked": False,
        "profile_picture_url": None,
    }
    values.update(kwargs)
    return User(**values)


class TestSqlActorStore(unittest.TestCase):
    def test_fetch_actor_maps_row(self) -> None:
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = _user(
            permissions=["view_chat", "gone"]
        )
        actor = SqlActorStore(db).fetch_actor("ALI")
        self.assertEqual(actor.role, Role.PROXY_OFFICER)
        self.assertEqual(actor.full_name, "")
        self.assertEqual(actor.permissions, frozenset({PermissionId.VIEW_CHAT}))
        self.assertEqual(actor.password_hash, "x")

    def test_fetch_actor_missing(self) -> None:
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = None
        self.assertIsNone(SqlActorStore(db).fetch_actor("ghost"))

    def test_database_error_becomes_store_unavailable(self) -> None:
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with self.assertLogs("rollcall.services.stores", level="ERROR"):
            with self.assertRaises(StoreUnavailable):
                SqlActorStore(db).get_actor(1)
        db.rollback.assert_called_once()

    def test_set_blocked_flag_commits(self) -> None:
        db = MagicMock()
        row = _user()
        db.query.return_value.filter.return_value.first.return_value = row
        actor = SqlActorStore(db).set_blocked_flag(2, True)
        self.assertTrue(row.is_blocked)
        self.assertTrue(actor.is_blocked)
        db.commit.assert_called_once()

    def test_set_blocked_flag_unknown_user(self) -> None:
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = None
        self.assertIsNone(SqlActorStore(db).set_blocked_flag(9, True))
        db.commit.assert_not_called()

    def test_persist_actor_writes_sorted_permissions(self) -> None:
        db = MagicMock()
        row = _user()
        db.query.return_value.filter.return_value.first.return_value = row
        actor = make_actor(
            actor_id=2,
            username="Ali",
            role=Role.CANDIDATE,
            permissions={PermissionId.VIEW_TASKS, PermissionId.VIEW_CHAT},
        )
        SqlActorStore(db).persist_actor(actor)
        self.assertEqual(row.role, "candidate")
        self.assertEqual(row.permissions, ["view_chat", "view_tasks"])
        db.commit.assert_called_once()

    def test_persist_actor_missing_row(self) -> None:
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = None
        with self.assertRaises(LookupError):
            SqlActorStore(db).persist_actor(make_actor(actor_id=5))


class TestSqlAuditStore(unittest.TestCase):
    def test_append_adds_and_commits(self) -> None:
        db = MagicMock()

        def _refresh(row: AuditLog) -> None:
            row.id = 1
            row.created_at = datetime(2026, 3, 1, tzinfo=UTC)

        db.refresh.side_effect = _refresh
        entry = SqlAuditStore(db).append_audit_entry(
            AuditEntryCreate(action="admin_block", details="Blocked account: ali", performed_by="1")
        )
        db.add.assert_called_once()
        db.commit.assert_called_once()
        self.assertEqual(entry.id, 1)
        self.assertEqual(entry.action, "admin_block")

    def test_append_failure(self) -> None:
        db = MagicMock()
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("down"))
        with self.assertLogs("rollcall.services.stores", level="ERROR"):
            with self.assertRaises(StoreUnavailable):
                SqlAuditStore(db).append_audit_entry(
                    AuditEntryCreate(action="admin_block", performed_by="1")
                )
        db.rollback.assert_called_once()


if __name__ == "__main__":
    unittest.main()
