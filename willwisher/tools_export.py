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

"""MCP tools for generating, previewing and verifying will/trust documents.

Each function is decorated with @mcp.tool() to register it on the shared
FastMCP instance.
"""

from __future__ import annotations

import base64

from willwisher.drafts import default_store
from willwisher.handlers.docx_verifier import inspect_archive
from willwisher.handlers.export import (
    export_trust,
    export_will,
    preview_trust,
    preview_will,
)
from willwisher.mcp_app import mcp
from willwisher.models import DocumentKind, ExportedDocument
from willwisher.tool_errors import (
    USAGE,
    resolve_docx_for_tool,
    resolve_record_for_tool,
    validate_kind_for_tool,
)
from willwisher.validators import validate_path_safe


def _export_response(exported: ExportedDocument, output_file_path: str) -> dict:
    """Write to disk when output_file_path is set, otherwise inline as base64."""
    response: dict = {
        "filename": exported.filename,
        "title": exported.title,
        "mime_type": exported.mime_type,
    }
    if output_file_path:
        out = validate_path_safe(output_file_path)
        if out.is_dir():
            out = out / exported.filename
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(exported.data)
        response["file_path"] = str(out)
    else:
        response["file_bytes_b64"] = base64.b64encode(exported.data).decode()
    if exported.warnings:
        response["warnings"] = exported.warnings
    return response


@mcp.tool()
def generate_will(
    record: dict | None = None,
    draft_id: str = "",
    sample: bool = False,
    persona: str = "",
    output_file_path: str = "",
) -> dict:
    """Generate a California Last Will and Testament as a .docx file.

    record: will fields (testator_name, marital_status, children,
        residuary_beneficiaries, witnesses, ...). Every field is optional;
        blank fields appear as bracketed placeholders in the document.
    draft_id: load the record from a saved will draft instead.
    sample: mark the document as a sample (watermark, notice, SAMPLE_ prefix).
        With no record or draft_id, a fictional persona fills every field.
    persona: which sample persona to use: 'jane-smith' (default),
        'michael-rodriguez' or 'patricia-williams'.
    output_file_path: when provided, writes the file to disk (a directory
        gets the generated filename) instead of returning b64.

    Returns {filename, title, mime_type, file_bytes_b64 | file_path}.
    May include a 'warnings' key when residuary percentages do not total 100.
    """
    will = resolve_record_for_tool(
        "generate_will", DocumentKind.WILL, record, draft_id, default_store(),
        sample=sample, persona=persona,
    )
    return _export_response(export_will(will, sample=sample), output_file_path)


@mcp.tool()
def generate_trust(
    record: dict | None = None,
    draft_id: str = "",
    sample: bool = False,
    persona: str = "",
    output_file_path: str = "",
) -> dict:
    """Generate a California Revocable Living Trust Agreement as a .docx file.

    record: trust fields (trustor_name, trust_name, trustee_name,
        successor_trustee_name, trust_assets, beneficiaries,
        distribution_terms, ...). Every field is optional.
    draft_id: load the record from a saved trust draft instead.
    sample: mark the document as a sample (watermark, notice, SAMPLE_ prefix).
        With no record or draft_id, the 'sarah-johnson' persona supplies
        the record.
    persona: which sample persona to use.
    output_file_path: when provided, writes the file to disk instead of
        returning b64.

    Returns {filename, title, mime_type, file_bytes_b64 | file_path}.
    May include a 'warnings' key when beneficiary percentages do not total 100.
    """
    trust = resolve_record_for_tool(
        "generate_trust", DocumentKind.TRUST, record, draft_id, default_store(),
        sample=sample, persona=persona,
    )
    return _export_response(export_trust(trust, sample=sample), output_file_path)


@mcp.tool()
def preview_document(
    kind: str,
    record: dict | None = None,
    draft_id: str = "",
    sample: bool = False,
    persona: str = "",
) -> dict:
    """Return the document text without packaging it, for review before export.

    kind: 'will' or 'trust'.
    record / draft_id / sample / persona: as for generate_will and
        generate_trust.

    Returns {title, text}.
    """
    doc_kind = validate_kind_for_tool("preview_document", kind)
    parsed = resolve_record_for_tool(
        "preview_document", doc_kind, record, draft_id, default_store(),
        sample=sample, persona=persona,
    )
    if doc_kind == DocumentKind.WILL:
        return preview_will(parsed, sample=sample).model_dump()
    return preview_trust(parsed, sample=sample).model_dump()


@mcp.tool()
def verify_document(
    file_path: str = "",
    file_bytes_b64: str = "",
) -> dict:
    """Re-read a generated .docx with a standard ZIP reader and check it.

    Reports every entry (path, size, CRC, header offset), any missing
    required OOXML part, any part that is not well-formed XML, and whether
    every CRC matches. valid is True only when all three checks pass.

    file_path: path to the .docx on disk.
    file_bytes_b64: base64-encoded file bytes (for programmatic use).
    """
    raw = resolve_docx_for_tool(
        "verify_document", file_bytes_b64 or None, file_path or None
    )
    try:
        report = inspect_archive(raw)
    except ValueError as exc:
        raise ValueError(
            f"verify_document error: {exc}\n"
            f"  Example: {USAGE['verify_document']}"
        ) from exc
    return report.model_dump()
