# Copyright (C) 2025 the contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""Pydantic models for will/trust records, exports, drafts and reports.

Every user-supplied field is optional: the wizard autosaves partial
progress, and the composer renders a bracketed placeholder wherever a
field is still blank.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

DOCX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


# ── Enums ──────────────────────────────────────────────────────────────────────

class DocumentKind(str, Enum):
    WILL = "will"
    TRUST = "trust"


class MaritalStatus(str, Enum):
    SINGLE = "single"
    MARRIED = "married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"


class RemainsDisposition(str, Enum):
    CREMATED = "Cremated"
    BURIED = "Buried"


class AccountAction(str, Enum):
    CLOSED = "closed"
    MAINTAINED = "maintained"


# ── Will record ────────────────────────────────────────────────────────────────

class Child(BaseModel):
    name: str = ""
    birth_date: date | None = None


class ResiduaryShare(BaseModel):
    beneficiary: str = ""
    relation: str = ""
    percentage: int | None = Field(default=None, ge=0, le=100)


class RealPropertyBequest(BaseModel):
    address: str = ""
    beneficiary: str = ""


class PersonalPropertyBequest(BaseModel):
    description: str = ""
    beneficiary: str = ""
    alternate_beneficiary: str = ""


class DigitalAccount(BaseModel):
    """An email, social or tech account to be closed or kept open."""
    name: str = ""
    provider: str = ""
    action: AccountAction | None = None


class DigitalTransfer(BaseModel):
    """A crypto wallet or exchange account passed to a named beneficiary."""
    name: str = ""
    provider: str = ""
    beneficiary: str = ""


class DigitalAssets(BaseModel):
    digital_executor: str = ""
    successor_digital_executor: str = ""
    email_accounts: list[DigitalAccount] = Field(default_factory=list)
    social_accounts: list[DigitalAccount] = Field(default_factory=list)
    tech_accounts: list[DigitalAccount] = Field(default_factory=list)
    crypto_wallets: list[DigitalTransfer] = Field(default_factory=list)
    crypto_exchanges: list[DigitalTransfer] = Field(default_factory=list)


class FuneralInstructions(BaseModel):
    remains_disposition: RemainsDisposition | None = None
    location: str = ""
    memorial_service_held: bool | None = None
    representative: str = ""
    alternate_representative: str = ""


class Attestation(BaseModel):
    execution_date: date | None = None
    execution_city: str = ""
    county: str = ""
    notarization_date: date | None = None
    notary_name: str = ""
    notary_address: str = ""


class WillRecord(BaseModel):
    """Everything the will wizard collects, complete or not."""
    testator_name: str = ""
    marital_status: MaritalStatus | None = None
    spouse_name: str = ""
    former_spouse_name: str = ""
    has_children: bool = False
    children: list[Child] = Field(default_factory=list)
    has_minor_children: bool = False
    residuary_beneficiaries: list[ResiduaryShare] = Field(default_factory=list)
    real_property_bequests: list[RealPropertyBequest] = Field(default_factory=list)
    personal_property_bequests: list[PersonalPropertyBequest] = Field(
        default_factory=list
    )
    digital_assets: DigitalAssets = Field(default_factory=DigitalAssets)
    funeral: FuneralInstructions = Field(default_factory=FuneralInstructions)
    primary_executor: str = ""
    successor_executor: str = ""
    executor_bond_waived: bool = False
    primary_guardian: str = ""
    successor_guardian: str = ""
    guardian_bond_waived: bool = False
    witnesses: list[str] = Field(default_factory=lambda: ["", ""])
    attestation: Attestation = Field(default_factory=Attestation)
    completion_percentage: int = Field(default=0, ge=0, le=100)

    @field_validator("witnesses")
    @classmethod
    def _exactly_two_witnesses(cls, value: list[str]) -> list[str]:
        if len(value) > 2:
            raise ValueError(
                f"a will takes exactly two witnesses, got {len(value)}"
            )
        return value + [""] * (2 - len(value))


# ── Trust record ───────────────────────────────────────────────────────────────

class TrustAsset(BaseModel):
    asset_type: str = ""
    description: str = ""


class TrustBeneficiary(BaseModel):
    name: str = ""
    percentage: int | None = Field(default=None, ge=0, le=100)


class TrustRecord(BaseModel):
    """Everything the trust wizard collects, complete or not."""
    trustor_name: str = ""
    trust_name: str = ""
    trustee_name: str = ""
    successor_trustee_name: str = ""
    trust_assets: list[TrustAsset] = Field(default_factory=list)
    beneficiaries: list[TrustBeneficiary] = Field(default_factory=list)
    distribution_terms: str = ""
    execution_date: date | None = None
    county: str = ""
    notarization_date: date | None = None
    notary_name: str = ""
    notary_address: str = ""
    completion_percentage: int = Field(default=0, ge=0, le=100)


# ── Export ─────────────────────────────────────────────────────────────────────

class DocxBlob(BaseModel):
    """Archive bytes tagged with the Word MIME type."""
    data: bytes
    mime_type: str = DOCX_MIME_TYPE


class ExportedDocument(BaseModel):
    filename: str
    title: str
    mime_type: str = DOCX_MIME_TYPE
    data: bytes
    warnings: list[str] = Field(default_factory=list)


class DocumentPreview(BaseModel):
    title: str
    text: str


# ── verify_document ───────────────────────────────────────────────────────────

class ArchiveEntry(BaseModel):
    path: str
    size: int
    crc: int
    header_offset: int


class ArchiveReport(BaseModel):
    entries: list[ArchiveEntry]
    missing_parts: list[str]
    malformed_parts: list[str]
    crc_ok: bool
    valid: bool


# ── Drafts ─────────────────────────────────────────────────────────────────────

class Draft(BaseModel):
    """A saved wizard draft. Every save supersedes the previous content."""
    draft_id: str
    kind: DocumentKind
    title: str = ""
    record: dict
    completion_percentage: int = 0
    last_modified: datetime | None = None


class DraftSummary(BaseModel):
    draft_id: str
    kind: DocumentKind
    title: str
    completion_percentage: int
    last_modified: datetime | None = None


# ── HTTP transport errors ──────────────────────────────────────────────────────

class JsonRpcError(BaseModel):
    code: int
    message: str
    data: dict = Field(default_factory=dict)


class JsonRpcErrorResponse(BaseModel):
    """Body for HTTP failures that never reach a tool (wrong path, method)."""
    jsonrpc: str = "2.0"
    id: int | str | None = None
    error: JsonRpcError
