"""Field-level access for the voter record form, derived from permission resolution.

A form opened in edit mode is read-only unless the actor holds action_edit_voter.
Each field is then editable only if its own field-edit permission (or a legacy
coarse grant that covers it) is allowed. Create mode is never read-only here;
whether the actor may create at all is decided before the form is opened.
"""

from rollcall.schemas.actor import Actor
from rollcall.schemas.permissions import PermissionId
from rollcall.schemas.voter_form import FieldState, FormMode, VoterField, VoterForm
from rollcall.services.resolver import is_allowed

P = PermissionId

MASTER_EDIT_PERMISSION = P.ACTION_EDIT_VOTER

# Field -> field-edit permission gating it.
FIELD_PERMISSIONS: dict[VoterField, PermissionId] = {
    VoterField.ID_CARD_NUMBER: P.EDIT_VOTER_IDENTITY,
    VoterField.FULL_NAME: P.EDIT_VOTER_IDENTITY,
    VoterField.GENDER: P.EDIT_VOTER_IDENTITY,
    VoterField.ADDRESS: P.EDIT_VOTER_LOCATION,
    VoterField.ISLAND: P.EDIT_VOTER_LOCATION,
    VoterField.PHONE_NUMBER: P.EDIT_VOTER_CONTACT,
    VoterField.REGISTRAR_PARTY: P.EDIT_VOTER_PARTY,
    VoterField.HAS_VOTED: P.EDIT_VOTER_STATUS,
    VoterField.SHEEMA: P.EDIT_VOTER_SHEEMA,
    VoterField.SHADDA: P.EDIT_VOTER_SHADDA,
    VoterField.R_ROSHI: P.EDIT_VOTER_RROSHI,
    VoterField.COMMUNICATED: P.EDIT_VOTER_COMMUNICATED,
    VoterField.NOTES: P.EDIT_VOTER_NOTES,
}

# Granular permission -> older coarse grants that also satisfy it (OR semantics).
LEGACY_EQUIVALENTS: dict[PermissionId, tuple[PermissionId, ...]] = {
    P.EDIT_VOTER_SHEEMA: (P.EDIT_VOTER_CAMPAIGN,),
    P.EDIT_VOTER_SHADDA: (P.EDIT_VOTER_CAMPAIGN,),
    P.EDIT_VOTER_RROSHI: (P.EDIT_VOTER_CAMPAIGN,),
    P.EDIT_VOTER_COMMUNICATED: (P.EDIT_VOTER_CAMPAIGN,),
}

ID_CARD_PREFIX = "A"
ID_CARD_MIN_LEN = 3


def form_is_read_only(actor: Actor, mode: FormMode) -> bool:
    """True iff editing an existing record without the master edit permission."""
    return mode == "edit" and not is_allowed(actor, MASTER_EDIT_PERMISSION)


def can_edit_field(actor: Actor, field_permission: PermissionId) -> bool:
    """Field permission check ignoring form mode; legacy equivalents count."""
    if is_allowed(actor, field_permission):
        return True
    return any(is_allowed(actor, legacy) for legacy in LEGACY_EQUIVALENTS.get(field_permission, ()))


def field_state(actor: Actor, mode: FormMode, field_permission: PermissionId) -> FieldState:
    """Editable decision for a single field-edit permission."""
    editable = not form_is_read_only(actor, mode) and can_edit_field(actor, field_permission)
    return FieldState(permission_id=field_permission, editable=editable)


def form_field_states(actor: Actor, mode: FormMode) -> list[FieldState]:
    """States for every voter form field, in form order."""
    read_only = form_is_read_only(actor, mode)
    states: list[FieldState] = []
    for field, permission in FIELD_PERMISSIONS.items():
        editable = not read_only and can_edit_field(actor, permission)
        states.append(FieldState(field=field, permission_id=permission, editable=editable))
    return states


def editable_fields(actor: Actor, mode: FormMode) -> frozenset[VoterField]:
    return frozenset(s.field for s in form_field_states(actor, mode) if s.editable and s.field)


def validate_voter_form(actor: Actor, mode: FormMode, form: VoterForm) -> dict[VoterField, str]:
    """
    Validate only the fields this actor may edit; read-only fields are trusted as stored.

    Returns field -> error message (empty when valid).
    """
    editable = editable_fields(actor, mode)
    errors: dict[VoterField, str] = {}

    if VoterField.ID_CARD_NUMBER in editable:
        id_card = (form.id_card_number or "").strip()
        if not id_card.startswith(ID_CARD_PREFIX):
            errors[VoterField.ID_CARD_NUMBER] = f'ID Card Number must start with "{ID_CARD_PREFIX}"'
        elif len(id_card) < ID_CARD_MIN_LEN:
            errors[VoterField.ID_CARD_NUMBER] = "ID Card Number is too short"
    if VoterField.FULL_NAME in editable and not (form.full_name or "").strip():
        errors[VoterField.FULL_NAME] = "Full Name cannot be empty"
    if VoterField.GENDER in editable and not form.gender:
        errors[VoterField.GENDER] = "Gender is required"
    if VoterField.ADDRESS in editable and not (form.address or "").strip():
        errors[VoterField.ADDRESS] = "Address is required"

    return errors
