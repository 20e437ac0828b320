"""Validation wrappers that produce rich, agent-friendly error messages.

When an agent passes a bad record, the error names the tool, lists every
offending field with what was received, and includes a mini usage
example, so any agent can self-correct in one retry.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ValidationError

from willwisher.drafts import DraftNotFoundError, DraftStore
from willwisher.models import (
    AccountAction,
    DocumentKind,
    MaritalStatus,
    RemainsDisposition,
    TrustRecord,
    WillRecord,
)
from willwisher.samples import sample_record
from willwisher.validators import resolve_docx_input, validate_document_kind


# ── Usage examples per tool ──────────────────────────────────────────────────

USAGE: dict[str, str] = {
    "generate_will": (
        'generate_will(record={"testator_name": "Jane Doe", '
        '"residuary_beneficiaries": [{"beneficiary": "John Doe", '
        '"relation": "son", "percentage": 100}], "witnesses": ["A", "B"]})'
    ),
    "generate_trust": (
        'generate_trust(record={"trustor_name": "Jane Doe", '
        '"trust_name": "Doe Family Trust", "beneficiaries": '
        '[{"name": "John Doe", "percentage": 60}, {"name": "Mary Doe", '
        '"percentage": 40}]})'
    ),
    "preview_document": (
        'preview_document(kind="will", record={"testator_name": "Jane Doe"})'
    ),
    "verify_document": (
        'verify_document(file_path="Jane_Doe_Last_Will_and_Testament.docx")'
    ),
    "save_draft": (
        'save_draft(kind="will", draft_id="jane-will", '
        'record={"testator_name": "Jane Doe"}, title="My will")'
    ),
    "get_draft": 'get_draft(draft_id="jane-will")',
    "list_drafts": 'list_drafts(kind="trust")',
    "delete_draft": 'delete_draft(draft_id="jane-will")',
}

_RECORD_MODELS: dict[DocumentKind, type[BaseModel]] = {
    DocumentKind.WILL: WillRecord,
    DocumentKind.TRUST: TrustRecord,
}


def enum_values(enum_cls: type[Enum]) -> str:
    """Return a formatted string of all enum member values."""
    return ", ".join(f"'{m.value}'" for m in enum_cls)


_ENUM_HINTS = (
    f"  Valid 'marital_status' values: {enum_values(MaritalStatus)}\n"
    f"  Valid 'remains_disposition' values: {enum_values(RemainsDisposition)}\n"
    f"  Valid account 'action' values: {enum_values(AccountAction)}\n"
)


def _format_validation_error(exc: ValidationError) -> str:
    lines = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<record>"
        lines.append(
            f"  {location}: {err['msg']} (received {err.get('input')!r})"
        )
    return "\n".join(lines)


# ── Record wrappers ──────────────────────────────────────────────────────────

def validate_record(
    tool_name: str,
    kind: DocumentKind,
    record: dict | None,
) -> WillRecord | TrustRecord:
    """Build a WillRecord or TrustRecord with rich errors on failure.

    None or {} is accepted: every field is optional and renders as a
    placeholder.
    """
    model = _RECORD_MODELS[kind]
    if record is not None and not isinstance(record, dict):
        raise ValueError(
            f"{tool_name} error: record must be a JSON object, "
            f"got {type(record).__name__}.\n"
            f"  Example: {USAGE[tool_name]}"
        )
    try:
        return model.model_validate(record or {})
    except ValidationError as exc:
        hints = _ENUM_HINTS if kind == DocumentKind.WILL else ""
        raise ValueError(
            f"{tool_name} validation failed "
            f"({exc.error_count()} invalid field(s)):\n"
            f"{_format_validation_error(exc)}\n"
            f"{hints}"
            f"  Example: {USAGE[tool_name]}"
        ) from exc


def validate_kind_for_tool(tool_name: str, kind: str) -> DocumentKind:
    """Parse a kind string with a rich error listing valid values."""
    try:
        return validate_document_kind(kind)
    except ValueError as exc:
        raise ValueError(
            f"{tool_name} error: {exc}\n"
            f"  Example: {USAGE[tool_name]}"
        ) from exc


def resolve_record_for_tool(
    tool_name: str,
    kind: DocumentKind,
    record: dict | None,
    draft_id: str,
    store: DraftStore,
    sample: bool = False,
    persona: str = "",
) -> WillRecord | TrustRecord:
    """Take the record inline, load it from a saved draft, or use a persona.

    At most one of record and draft_id may be given. With neither, a sample
    request gets a built-in persona and anything else yields an
    all-placeholder document.
    """
    if record and draft_id:
        raise ValueError(
            f"{tool_name} error: pass either record or draft_id, not both.\n"
            f"  Example: {USAGE[tool_name]}"
        )
    if persona and (record or draft_id or not sample):
        raise ValueError(
            f"{tool_name} error: persona needs sample=True and no record "
            f"or draft_id.\n"
            f"  Example: {USAGE[tool_name]}"
        )
    if sample and not record and not draft_id:
        try:
            return sample_record(kind, persona)
        except ValueError as exc:
            raise ValueError(
                f"{tool_name} error: {exc}\n"
                f"  Example: {USAGE[tool_name]}"
            ) from exc
    if not draft_id:
        return validate_record(tool_name, kind, record)

    try:
        draft = store.get(draft_id)
    except DraftNotFoundError as exc:
        raise ValueError(
            f"{tool_name} error: {exc}. Use list_drafts to see saved ids."
        ) from exc
    if draft.kind != kind:
        raise ValueError(
            f"{tool_name} error: draft {draft_id!r} is a {draft.kind.value} "
            f"draft, not a {kind.value} draft."
        )
    return validate_record(tool_name, kind, draft.record)


# ── File input wrapper ───────────────────────────────────────────────────────

def resolve_docx_for_tool(
    tool_name: str,
    file_bytes_b64: str | None,
    file_path: str | None,
) -> bytes:
    """Wrap resolve_docx_input with tool-specific context on failure."""
    try:
        return resolve_docx_input(file_bytes_b64, file_path)
    except ValueError as exc:
        raise ValueError(
            f"{tool_name} error: {exc}\n"
            f"  Example: {USAGE[tool_name]}"
        ) from exc
