"""Schemas for field-level gating of the voter record form."""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field

from rollcall.schemas.permissions import PermissionId

FormMode = Literal["create", "edit"]


class VoterField(StrEnum):
    """Editable attributes of a voter record."""

    ID_CARD_NUMBER = "id_card_number"
    FULL_NAME = "full_name"
    GENDER = "gender"
    ADDRESS = "address"
    ISLAND = "island"
    PHONE_NUMBER = "phone_number"
    REGISTRAR_PARTY = "registrar_party"
    HAS_VOTED = "has_voted"
    SHEEMA = "sheema"
    SHADDA = "shadda"
    R_ROSHI = "r_roshi"
    COMMUNICATED = "communicated"
    NOTES = "notes"


class FieldState(BaseModel):
    """Editable/read-only decision for one form field."""

    field: VoterField | None = None
    permission_id: PermissionId
    editable: bool


class FormStateResponse(BaseModel):
    """Response for GET /voters/form-state."""

    mode: FormMode
    read_only: bool
    fields: list[FieldState]


class VoterForm(BaseModel):
    """Submitted voter form contents. All optional: read-only fields may be omitted."""

    id_card_number: str | None = None
    full_name: str | None = None
    gender: Literal["Male", "Female"] | None = None
    address: str | None = None
    island: str | None = None
    phone_number: str | None = None
    registrar_party: str | None = None
    has_voted: bool | None = None
    sheema: bool | None = None
    shadda: bool | None = None
    r_roshi: bool | None = None
    communicated: bool | None = None
    notes: str | None = None


class VoterFormValidationRequest(BaseModel):
    """Request for POST /voters/validate."""

    mode: FormMode = "edit"
    form: VoterForm = Field(default_factory=VoterForm)


class VoterFormValidationResponse(BaseModel):
    """Response for POST /voters/validate; errors is keyed by field name."""

    valid: bool
    read_only: bool
    errors: dict[VoterField, str] = Field(default_factory=dict)
