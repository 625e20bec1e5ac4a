"""Voter form gating: per-field editability and submission validation."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from rollcall.api.v1.auth import get_current_actor
from rollcall.schemas.actor import Actor
from rollcall.schemas.permissions import PermissionId
from rollcall.schemas.voter_form import (
    FormMode,
    FormStateResponse,
    VoterFormValidationRequest,
    VoterFormValidationResponse,
)
from rollcall.services.field_gate import form_field_states, form_is_read_only, validate_voter_form
from rollcall.services.resolver import is_allowed

logger = logging.getLogger(__name__)
router = APIRouter()


def _require_form_access(actor: Actor, mode: FormMode) -> None:
    # Creating needs the create action; viewing an existing record needs the profile view.
    needed = PermissionId.ACTION_CREATE_VOTER if mode == "create" else PermissionId.VIEW_VOTER_PROFILE
    if not is_allowed(actor, needed):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Permission '{needed.value}' required",
        )


@router.get("/form-state", response_model=FormStateResponse)
def get_form_state(
    actor: Annotated[Actor, Depends(get_current_actor)],
    mode: Annotated[FormMode, Query()] = "edit",
) -> FormStateResponse:
    """Which voter form fields the caller may change in the given mode."""
    _require_form_access(actor, mode)
    return FormStateResponse(
        mode=mode,
        read_only=form_is_read_only(actor, mode),
        fields=form_field_states(actor, mode),
    )


@router.post("/validate", response_model=VoterFormValidationResponse)
def validate_form(
    body: VoterFormValidationRequest,
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> VoterFormValidationResponse:
    """
    Validate a submission. Only fields the caller may edit are checked; values
    in read-only fields are ignored.
    """
    _require_form_access(actor, body.mode)
    errors = validate_voter_form(actor, body.mode, body.form)
    if errors:
        logger.debug("Voter form rejected for %s: %s", actor.username, sorted(errors))
    return VoterFormValidationResponse(
        valid=not errors,
        read_only=form_is_read_only(actor, body.mode),
        errors=errors,
    )
