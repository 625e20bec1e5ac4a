"""Closed vocabularies for authorization: roles, permission identifiers and their namespaces."""

import logging
from collections.abc import Iterable
from enum import StrEnum

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Role names written by the previous system, still present on old rows.
LEGACY_ROLE_ALIASES = {
    "mamdhoob": "proxy-officer",
    "user": "standard-user",
}


class Role(StrEnum):
    """Coarse actor category. superadmin and admin are the privileged roles."""

    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    CANDIDATE = "candidate"
    PROXY_OFFICER = "proxy-officer"
    STANDARD_USER = "standard-user"

    @classmethod
    def _missing_(cls, value: object) -> "Role | None":
        if isinstance(value, str):
            normalized = value.strip().lower()
            normalized = LEGACY_ROLE_ALIASES.get(normalized, normalized)
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class Namespace(StrEnum):
    """The five disjoint families a permission identifier belongs to."""

    MENU_VISIBILITY = "menu_visibility"
    MENU_ACCESS = "menu_access"
    GLOBAL_ACTION = "global_action"
    METRIC_VISIBILITY = "metric_visibility"
    FIELD_EDIT = "field_edit"


class PermissionId(StrEnum):
    """Every permission identifier the system knows. Values are the stored strings."""

    # Menu visibility
    OWN_PROFILE = "profile"
    VIEW_ELECTION_OVERVIEW = "view_election_overview"
    VIEW_LIVE_RESULTS = "view_live_results"
    VIEW_TURNOUT_ANALYTICS = "view_turnout_analytics"
    VIEW_QUICK_SUMMARY = "view_quick_summary"
    VIEW_VOTER_REGISTRY = "view_voter_registry"
    VIEW_ADD_VOTER = "view_add_voter"
    VIEW_IMPORT_EXPORT_VOTERS = "view_import_export_voters"
    VIEW_SEARCH_FILTER_VOTERS = "view_search_filter_voters"
    VIEW_SUSPENDED_INACTIVE_VOTERS = "view_suspended_inactive_voters"
    VIEW_CANDIDATES = "view_candidates"
    VIEW_PARTY_DISTRIBUTION = "view_party_distribution"
    VIEW_CANDIDATE_PERFORMANCE = "view_candidate_performance"
    VIEW_REAL_TIME_RESULTS = "view_real_time_results"
    VIEW_DETAILED_REPORTS = "view_detailed_reports"
    VIEW_EXPORT_RESULTS = "view_export_results"
    VIEW_HISTORICAL_DATA = "view_historical_data"
    VIEW_CHAT = "view_chat"
    VIEW_TASKS = "view_tasks"
    VIEW_ANNOUNCEMENTS = "view_announcements"
    VIEW_NOTEPAD = "view_notepad"
    VIEW_CHANGE_PASSWORD = "view_change_password"
    VIEW_ADMIN_PANEL = "view_admin_panel"
    VIEW_SECURITY_SETTINGS = "view_security_settings"
    VIEW_AUDIT_LOGS = "view_audit_logs"

    # Menu access (voter record screens)
    VIEW_VOTER_PROFILE = "view_voter_profile"
    ACTION_CREATE_VOTER = "action_create_voter"
    ACTION_EDIT_VOTER = "action_edit_voter"

    # Global actions
    ACTION_DELETE_VOTER = "action_delete_voter"
    ACTION_EXPORT_DATA = "action_export_data"
    ACTION_UPDATE_PROFILE_PICTURE = "action_update_profile_picture"
    ACTION_CREATE_ANNOUNCEMENT = "action_create_announcement"
    ACTION_EDIT_ANNOUNCEMENT = "action_edit_announcement"
    ACTION_DELETE_ANNOUNCEMENT = "action_delete_announcement"

    # Metric visibility
    VIEW_METRIC_TOTAL_REGISTERED = "view_metric_total_registered"
    VIEW_METRIC_VOTES_CAST = "view_metric_votes_cast"
    VIEW_METRIC_PENDING_VOTES = "view_metric_pending_votes"
    VIEW_METRIC_CANDIDATE_SHEEMA = "view_metric_candidate_sheema"
    VIEW_METRIC_CANDIDATE_SADIQ = "view_metric_candidate_sadiq"
    VIEW_METRIC_TOTAL_MALE_VOTERS = "view_metric_total_male_voters"
    VIEW_METRIC_TOTAL_FEMALE_VOTERS = "view_metric_total_female_voters"
    VIEW_METRIC_R_ROSHI = "view_metric_r_roshi"
    VIEW_METRIC_RF_SEEMA = "view_metric_rf_seema"
    VIEW_METRIC_ISLAND_TURNOUT = "view_metric_island_turnout"

    # Field edit
    EDIT_VOTER_IDENTITY = "edit_voter_identity"
    EDIT_VOTER_LOCATION = "edit_voter_location"
    EDIT_VOTER_CONTACT = "edit_voter_contact"
    EDIT_VOTER_PARTY = "edit_voter_party"
    EDIT_VOTER_STATUS = "edit_voter_status"
    EDIT_VOTER_SHEEMA = "edit_voter_sheema"
    EDIT_VOTER_SHADDA = "edit_voter_shadda"
    EDIT_VOTER_RROSHI = "edit_voter_rroshi"
    EDIT_VOTER_COMMUNICATED = "edit_voter_communicated"
    EDIT_VOTER_NOTES = "edit_voter_notes"
    # Coarse grant from before the four campaign flags were split out.
    EDIT_VOTER_CAMPAIGN = "edit_voter_campaign"


def parse_permission_ids(raw: Iterable[str]) -> list[PermissionId]:
    """
    Convert stored or submitted strings to identifiers, preserving order.

    Unknown strings are dropped (logged); duplicates are collapsed.
    """
    out: list[PermissionId] = []
    for value in raw:
        try:
            pid = PermissionId(value)
        except ValueError:
            logger.warning("Dropping unknown permission identifier %r", value)
            continue
        if pid not in out:
            out.append(pid)
    return out


class PermissionItem(BaseModel):
    """One checkbox in the admin permission editor."""

    id: PermissionId
    label: str
    namespace: Namespace


class CatalogResponse(BaseModel):
    """Response for GET /permissions/catalog: identifiers grouped by namespace."""

    namespaces: dict[Namespace, list[PermissionItem]]


class RoleDefaultsResponse(BaseModel):
    """Response for GET /permissions/roles/{role}."""

    role: Role
    defaults: list[PermissionId]
    legacy_fallback: list[PermissionId] = Field(
        default_factory=list,
        description="Grants used for accounts with no explicit permission set.",
    )


class EffectivePermissionsResponse(BaseModel):
    """Response for GET /permissions/me."""

    role: Role
    is_superuser: bool
    has_explicit_permissions: bool
    permissions: list[PermissionId]


class PermissionCheckResponse(BaseModel):
    """Response for GET /permissions/check/{permission_id}."""

    permission_id: PermissionId
    allowed: bool
