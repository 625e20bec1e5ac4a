"""Unit tests for rollcall.services.resolver: precedence of superuser, explicit sets and role fallback."""

import unittest

from rollcall.schemas.actor import Actor
from rollcall.schemas.permissions import Namespace, PermissionId, Role
from rollcall.services.resolver import (
    effective_permissions,
    is_allowed,
    is_bootstrap_account,
    is_superuser,
    visible_ids,
)
from tests.fakes import make_actor

P = PermissionId


class TestSuperuser(unittest.TestCase):
    """Superadmins and the bootstrap account are allowed everything."""

    def test_superadmin_allowed_every_identifier(self) -> None:
        actor = make_actor(role=Role.SUPERADMIN, permissions={P.VIEW_CHAT})
        for pid in PermissionId:
            self.assertTrue(is_allowed(actor, pid), pid)

    def test_bootstrap_username_is_case_insensitive(self) -> None:
        actor = make_actor(username="FaisalHassan", role=Role.STANDARD_USER)
        self.assertTrue(is_bootstrap_account(actor, "faisalhassan"))
        self.assertTrue(is_superuser(actor, "faisalhassan"))
        self.assertTrue(is_allowed(actor, P.ACTION_DELETE_VOTER, "faisalhassan"))

    def test_bootstrap_overrides_narrow_explicit_set(self) -> None:
        actor = make_actor(username="root", permissions={P.VIEW_CHAT})
        self.assertTrue(is_allowed(actor, P.VIEW_ADMIN_PANEL, bootstrap_username="root"))

    def test_other_username_is_not_bootstrap(self) -> None:
        actor = make_actor(username="faisal")
        self.assertFalse(is_bootstrap_account(actor, "faisalhassan"))


class TestOwnProfile(unittest.TestCase):
    """The own-profile identifier is allowed to everyone."""

    def test_allowed_with_empty_fallback_and_narrow_set(self) -> None:
        narrow = make_actor(role=Role.CANDIDATE, permissions={P.VIEW_CHAT})
        legacy = make_actor(role=Role.STANDARD_USER)
        self.assertTrue(is_allowed(narrow, P.OWN_PROFILE))
        self.assertTrue(is_allowed(legacy, P.OWN_PROFILE))


class TestExplicitSetIsAuthoritative(unittest.TestCase):
    """A non-empty explicit set replaces role defaults and the legacy fallback."""

    def test_admin_with_narrow_set_loses_everything_else(self) -> None:
        actor = make_actor(role=Role.ADMIN, permissions={P.VIEW_CHAT})
        self.assertTrue(is_allowed(actor, P.VIEW_CHAT))
        self.assertFalse(is_allowed(actor, P.VIEW_AUDIT_LOGS))
        self.assertFalse(is_allowed(actor, P.ACTION_DELETE_VOTER))

    def test_candidate_explicit_set_not_merged_with_fallback(self) -> None:
        # view_chat is in the candidate fallback but not in this set
        actor = make_actor(role=Role.CANDIDATE, permissions={P.VIEW_ELECTION_OVERVIEW})
        self.assertTrue(is_allowed(actor, P.VIEW_ELECTION_OVERVIEW))
        self.assertFalse(is_allowed(actor, P.VIEW_CHAT))

    def test_explicit_set_can_grant_beyond_role(self) -> None:
        actor = make_actor(role=Role.STANDARD_USER, permissions={P.ACTION_DELETE_VOTER})
        self.assertTrue(is_allowed(actor, P.ACTION_DELETE_VOTER))


class TestRoleFallback(unittest.TestCase):
    """Without an explicit set: admins get the full catalog, others the legacy fallback."""

    def test_admin_without_set_gets_full_catalog(self) -> None:
        actor = make_actor(role=Role.ADMIN)
        self.assertEqual(effective_permissions(actor), frozenset(PermissionId))

    def test_empty_set_behaves_like_no_set(self) -> None:
        empty = make_actor(role=Role.PROXY_OFFICER, permissions=set())
        none = make_actor(role=Role.PROXY_OFFICER)
        self.assertEqual(effective_permissions(empty), effective_permissions(none))

    def test_proxy_officer_fallback(self) -> None:
        actor = make_actor(role=Role.PROXY_OFFICER)
        self.assertTrue(is_allowed(actor, P.ACTION_EDIT_VOTER))
        self.assertTrue(is_allowed(actor, P.EDIT_VOTER_STATUS))
        self.assertFalse(is_allowed(actor, P.EDIT_VOTER_IDENTITY))
        self.assertFalse(is_allowed(actor, P.VIEW_AUDIT_LOGS))

    def test_standard_user_denied_outside_fallback(self) -> None:
        actor = make_actor(role=Role.STANDARD_USER)
        self.assertTrue(is_allowed(actor, P.VIEW_VOTER_REGISTRY))
        self.assertFalse(is_allowed(actor, P.ACTION_EDIT_VOTER))
        self.assertFalse(is_allowed(actor, P.VIEW_METRIC_VOTES_CAST))


class TestStoredValues(unittest.TestCase):
    """Actors built from stored rows: unknown identifiers and legacy role names."""

    def test_unknown_identifiers_are_ignored(self) -> None:
        actor = Actor(id=9, username="hawwa", role="candidate", permissions=["view_chat", "retired_perm"])
        self.assertEqual(actor.permissions, frozenset({P.VIEW_CHAT}))
        self.assertTrue(is_allowed(actor, P.VIEW_CHAT))
        self.assertFalse(is_allowed(actor, P.VIEW_TASKS))

    def test_only_unknown_identifiers_falls_back_to_role(self) -> None:
        actor = Actor(id=9, username="hawwa", role="candidate", permissions=["retired_perm"])
        self.assertFalse(actor.has_explicit_permissions)
        self.assertTrue(is_allowed(actor, P.VIEW_TASKS))

    def test_legacy_role_name(self) -> None:
        actor = Actor(id=3, username="ibrahim", role="mamdhoob")
        self.assertEqual(actor.role, Role.PROXY_OFFICER)
        self.assertTrue(is_allowed(actor, P.EDIT_VOTER_NOTES))


class TestDeterminism(unittest.TestCase):
    """Resolution is a pure function of the actor and the identifier."""

    def test_repeated_calls_agree(self) -> None:
        actor = make_actor(role=Role.CANDIDATE, permissions={P.VIEW_CHAT, P.EDIT_VOTER_NOTES})
        first = effective_permissions(actor)
        for _ in range(3):
            self.assertEqual(effective_permissions(actor), first)


class TestVisibleIds(unittest.TestCase):
    """visible_ids filters one namespace, in catalog order."""

    def test_metric_tiles_for_explicit_set(self) -> None:
        actor = make_actor(
            role=Role.CANDIDATE,
            permissions={P.VIEW_METRIC_VOTES_CAST, P.VIEW_METRIC_TOTAL_REGISTERED, P.VIEW_CHAT},
        )
        self.assertEqual(
            visible_ids(actor, Namespace.METRIC_VISIBILITY),
            [P.VIEW_METRIC_TOTAL_REGISTERED, P.VIEW_METRIC_VOTES_CAST],
        )

    def test_menu_always_includes_own_profile(self) -> None:
        actor = make_actor(role=Role.CANDIDATE, permissions={P.VIEW_CHAT})
        menu = visible_ids(actor, Namespace.MENU_VISIBILITY)
        self.assertIn(P.OWN_PROFILE, menu)
        self.assertIn(P.VIEW_CHAT, menu)
        self.assertNotIn(P.VIEW_TASKS, menu)


if __name__ == "__main__":
    unittest.main()
