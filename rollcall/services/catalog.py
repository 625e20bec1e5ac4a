"""Permission catalog: namespaces, labels, role default sets and legacy fallback grants.

Pure data. The resolver reads LEGACY_FALLBACK for accounts without an explicit
permission set; administrative "reset to role defaults" reads ROLE_DEFAULTS.
The two tables are deliberately kept separate (the fallback is narrower).
"""

from rollcall.schemas.permissions import Namespace, PermissionId, Role

P = PermissionId

# Namespace -> (identifier, label). Order is the order an admin UI lists them.
_CATALOG: dict[Namespace, tuple[tuple[PermissionId, str], ...]] = {
    Namespace.MENU_VISIBILITY: (
        (P.OWN_PROFILE, "My Profile"),
        (P.VIEW_ELECTION_OVERVIEW, "Election Overview"),
        (P.VIEW_LIVE_RESULTS, "Live Results"),
        (P.VIEW_TURNOUT_ANALYTICS, "Turnout Analytics"),
        (P.VIEW_QUICK_SUMMARY, "Quick Summary"),
        (P.VIEW_VOTER_REGISTRY, "Voter Registry"),
        (P.VIEW_ADD_VOTER, "Add Voter"),
        (P.VIEW_IMPORT_EXPORT_VOTERS, "Import / Export Voters"),
        (P.VIEW_SEARCH_FILTER_VOTERS, "Search & Filter Voters"),
        (P.VIEW_SUSPENDED_INACTIVE_VOTERS, "Suspended / Inactive Voters"),
        (P.VIEW_CANDIDATES, "Candidates"),
        (P.VIEW_PARTY_DISTRIBUTION, "Party Distribution"),
        (P.VIEW_CANDIDATE_PERFORMANCE, "Candidate Performance"),
        (P.VIEW_REAL_TIME_RESULTS, "Real-time Results"),
        (P.VIEW_DETAILED_REPORTS, "Detailed Reports"),
        (P.VIEW_EXPORT_RESULTS, "Export Results"),
        (P.VIEW_HISTORICAL_DATA, "Historical Data"),
        (P.VIEW_CHAT, "Community Chat"),
        (P.VIEW_TASKS, "Task Management"),
        (P.VIEW_ANNOUNCEMENTS, "Announcements"),
        (P.VIEW_NOTEPAD, "Campaign Notes"),
        (P.VIEW_CHANGE_PASSWORD, "Change Password Page"),
        (P.VIEW_ADMIN_PANEL, "Admin Panel"),
        (P.VIEW_SECURITY_SETTINGS, "Security Settings"),
        (P.VIEW_AUDIT_LOGS, "Audit Logs"),
    ),
    Namespace.MENU_ACCESS: (
        (P.VIEW_VOTER_PROFILE, "Show Voter Profile (Read Only)"),
        (P.ACTION_CREATE_VOTER, "Show Registration Form (Create New)"),
        (P.ACTION_EDIT_VOTER, "Show Edit Voter Form (Enable Editing)"),
    ),
    Namespace.GLOBAL_ACTION: (
        (P.ACTION_DELETE_VOTER, "Delete Member"),
        (P.ACTION_EXPORT_DATA, "Export Data (CSV/PDF)"),
        (P.ACTION_UPDATE_PROFILE_PICTURE, "Update Profile Picture"),
        (P.ACTION_CREATE_ANNOUNCEMENT, "Create Announcement"),
        (P.ACTION_EDIT_ANNOUNCEMENT, "Edit Announcement"),
        (P.ACTION_DELETE_ANNOUNCEMENT, "Delete Announcement"),
    ),
    Namespace.METRIC_VISIBILITY: (
        (P.VIEW_METRIC_TOTAL_REGISTERED, "Show Total Registered"),
        (P.VIEW_METRIC_VOTES_CAST, "Show Votes Cast"),
        (P.VIEW_METRIC_PENDING_VOTES, "Show Pending Votes"),
        (P.VIEW_METRIC_CANDIDATE_SHEEMA, "Show Candidate Seema"),
        (P.VIEW_METRIC_CANDIDATE_SADIQ, "Show Shadda elections"),
        (P.VIEW_METRIC_TOTAL_MALE_VOTERS, "Show Male Voters for Seema"),
        (P.VIEW_METRIC_TOTAL_FEMALE_VOTERS, "Show Female Voters for Seema"),
        (P.VIEW_METRIC_R_ROSHI, "Show R-Roshi Status"),
        (P.VIEW_METRIC_RF_SEEMA, "Show RF-Seema"),
        (P.VIEW_METRIC_ISLAND_TURNOUT, "Show Voter Turnout by Island"),
    ),
    Namespace.FIELD_EDIT: (
        (P.EDIT_VOTER_IDENTITY, "Edit Identity (ID, Name, Gender)"),
        (P.EDIT_VOTER_LOCATION, "Edit Location (Address, Island)"),
        (P.EDIT_VOTER_CONTACT, "Edit Contact Info"),
        (P.EDIT_VOTER_PARTY, "Edit Registrar Party"),
        (P.EDIT_VOTER_STATUS, "Edit Voting Status"),
        (P.EDIT_VOTER_SHEEMA, "Edit Sheema Checkbox"),
        (P.EDIT_VOTER_SHADDA, "Edit Shadda Checkbox"),
        (P.EDIT_VOTER_RROSHI, "Edit R-Roshi Checkbox"),
        (P.EDIT_VOTER_COMMUNICATED, "Edit Communicated Checkbox"),
        (P.EDIT_VOTER_NOTES, "Edit Notepad"),
        (P.EDIT_VOTER_CAMPAIGN, "Edit Campaign Data (all campaign checkboxes)"),
    ),
}

_NAMESPACE_BY_ID: dict[PermissionId, Namespace] = {
    pid: ns for ns, entries in _CATALOG.items() for pid, _ in entries
}
_LABEL_BY_ID: dict[PermissionId, str] = {
    pid: label for entries in _CATALOG.values() for pid, label in entries
}

_missing = set(PermissionId) - set(_NAMESPACE_BY_ID)
if _missing:
    raise RuntimeError(f"Permission identifiers without a namespace: {sorted(_missing)}")
if sum(len(entries) for entries in _CATALOG.values()) != len(_NAMESPACE_BY_ID):
    raise RuntimeError("Permission namespaces overlap")

ALL_PERMISSION_IDS: tuple[PermissionId, ...] = tuple(
    pid for entries in _CATALOG.values() for pid, _ in entries
)

ROLE_DEFAULTS: dict[Role, tuple[PermissionId, ...]] = {
    Role.SUPERADMIN: ALL_PERMISSION_IDS,
    Role.ADMIN: ALL_PERMISSION_IDS,
    Role.CANDIDATE: (
        P.VIEW_ELECTION_OVERVIEW, P.VIEW_VOTER_REGISTRY, P.VIEW_PARTY_DISTRIBUTION,
        P.VIEW_CHAT, P.VIEW_TASKS, P.VIEW_NOTEPAD,
        P.VIEW_VOTER_PROFILE, P.ACTION_EDIT_VOTER,
        P.EDIT_VOTER_STATUS, P.EDIT_VOTER_NOTES,
        P.EDIT_VOTER_SHEEMA, P.EDIT_VOTER_SHADDA, P.EDIT_VOTER_RROSHI, P.EDIT_VOTER_COMMUNICATED,
        P.VIEW_METRIC_TOTAL_REGISTERED, P.VIEW_METRIC_VOTES_CAST, P.VIEW_METRIC_PENDING_VOTES,
        P.VIEW_METRIC_CANDIDATE_SHEEMA, P.VIEW_METRIC_CANDIDATE_SADIQ,
        P.VIEW_METRIC_R_ROSHI, P.VIEW_METRIC_RF_SEEMA, P.VIEW_METRIC_ISLAND_TURNOUT,
    ),
    Role.PROXY_OFFICER: (
        P.VIEW_ELECTION_OVERVIEW, P.VIEW_VOTER_REGISTRY, P.VIEW_PARTY_DISTRIBUTION,
        P.VIEW_CHAT, P.VIEW_NOTEPAD,
        P.VIEW_VOTER_PROFILE, P.ACTION_EDIT_VOTER,
        P.EDIT_VOTER_STATUS, P.EDIT_VOTER_NOTES,
        P.VIEW_METRIC_TOTAL_REGISTERED, P.VIEW_METRIC_VOTES_CAST, P.VIEW_METRIC_PENDING_VOTES,
        P.VIEW_METRIC_CANDIDATE_SHEEMA, P.VIEW_METRIC_CANDIDATE_SADIQ,
    ),
    Role.STANDARD_USER: (
        P.VIEW_ELECTION_OVERVIEW, P.VIEW_VOTER_REGISTRY, P.VIEW_PARTY_DISTRIBUTION,
        P.VIEW_VOTER_PROFILE,
        P.VIEW_METRIC_TOTAL_REGISTERED, P.VIEW_METRIC_VOTES_CAST, P.VIEW_METRIC_PENDING_VOTES,
    ),
}

# Hand-maintained grants for accounts created before explicit permission sets existed.
# Diverges from ROLE_DEFAULTS (no metrics; candidate keeps the coarse campaign grant;
# proxy officers keep the task menu). Kept as-is until the divergence is confirmed.
LEGACY_FALLBACK: dict[Role, frozenset[PermissionId]] = {
    Role.CANDIDATE: frozenset({
        P.VIEW_ELECTION_OVERVIEW, P.VIEW_VOTER_REGISTRY, P.VIEW_PARTY_DISTRIBUTION,
        P.VIEW_CHAT, P.VIEW_TASKS, P.VIEW_NOTEPAD,
        P.VIEW_VOTER_PROFILE, P.ACTION_EDIT_VOTER,
        P.EDIT_VOTER_CAMPAIGN, P.EDIT_VOTER_STATUS, P.EDIT_VOTER_NOTES,
        P.EDIT_VOTER_SHEEMA, P.EDIT_VOTER_SHADDA, P.EDIT_VOTER_RROSHI, P.EDIT_VOTER_COMMUNICATED,
    }),
    Role.PROXY_OFFICER: frozenset({
        P.VIEW_ELECTION_OVERVIEW, P.VIEW_VOTER_REGISTRY, P.VIEW_PARTY_DISTRIBUTION,
        P.VIEW_CHAT, P.VIEW_TASKS, P.VIEW_NOTEPAD,
        P.VIEW_VOTER_PROFILE, P.ACTION_EDIT_VOTER,
        P.EDIT_VOTER_STATUS, P.EDIT_VOTER_NOTES,
    }),
    Role.STANDARD_USER: frozenset({
        P.VIEW_ELECTION_OVERVIEW, P.VIEW_VOTER_REGISTRY, P.VIEW_PARTY_DISTRIBUTION,
        P.VIEW_VOTER_PROFILE,
    }),
}


def all_ids() -> frozenset[PermissionId]:
    """Every identifier in the catalog."""
    return frozenset(ALL_PERMISSION_IDS)


def defaults_for(role: Role) -> tuple[PermissionId, ...]:
    """Default permission set used to seed an account of this role (ordered)."""
    return ROLE_DEFAULTS[role]


def legacy_fallback_for(role: Role) -> frozenset[PermissionId]:
    """Grants for an account of this role that has no explicit set. Empty for privileged roles."""
    return LEGACY_FALLBACK.get(role, frozenset())


def ids_in(namespace: Namespace) -> tuple[PermissionId, ...]:
    return tuple(pid for pid, _ in _CATALOG[namespace])


def label_for(permission_id: PermissionId) -> str:
    return _LABEL_BY_ID[permission_id]

