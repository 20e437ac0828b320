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

"""Record -> OOXML part set -> .docx bytes.

Every export builds its part set and archive from scratch. Nothing is
cached between calls.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from willwisher.handlers import docx_parts
from willwisher.handlers.paragraphs import (
    Composition,
    render_body_xml,
    render_plain_text,
)
from willwisher.handlers.trust_composer import compose_trust
from willwisher.handlers.will_composer import compose_will
from willwisher.handlers.zip_writer import build_archive
from willwisher.models import (
    DocumentKind,
    DocumentPreview,
    ExportedDocument,
    TrustRecord,
    WillRecord,
)
from willwisher.xml_utils import is_well_formed_xml

logger = logging.getLogger(__name__)

SAMPLE_FILENAME_PREFIX = "SAMPLE_"
SAMPLE_TITLE_PREFIX = "SAMPLE - "

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


class CompositionError(ValueError):
    """A generated part is not well-formed XML."""


def sanitize_filename(name: str, fallback: str = "Untitled") -> str:
    """Strip everything but ASCII letters, digits and whitespace, then
    collapse whitespace runs to underscores.

    >>> sanitize_filename("Jane  O'Neil-Doe")
    'Jane_ONeilDoe'
    """
    cleaned = _WHITESPACE.sub("_", _UNSAFE_FILENAME_CHARS.sub("", name).strip())
    return cleaned or fallback


def percentage_warnings(label: str, percentages: list[int | None]) -> list[str]:
    """Warn (never fail) when the supplied shares do not add up to 100%.

    Shares still left blank are ignored; a list with no supplied share at
    all produces no warning.
    """
    supplied = [p for p in percentages if p is not None]
    if not supplied:
        return []
    total = sum(supplied)
    if total == 100:
        return []
    message = (
        f"{label} percentages total {total}%, not 100%. "
        "The document states them as entered."
    )
    logger.warning(message)
    return [message]


# ── Titles and filenames ───────────────────────────────────────────────────────


def will_title(record: WillRecord, *, sample: bool = False) -> str:
    name = record.testator_name.strip() or "[Full Legal Name of Testator]"
    title = f"Last Will and Testament of {name}"
    return SAMPLE_TITLE_PREFIX + title if sample else title


def trust_title(record: TrustRecord, *, sample: bool = False) -> str:
    name = record.trust_name.strip() or "[Name of Trust]"
    title = f"Revocable Living Trust Agreement - {name}"
    return SAMPLE_TITLE_PREFIX + title if sample else title


def will_filename(record: WillRecord, *, sample: bool = False) -> str:
    prefix = SAMPLE_FILENAME_PREFIX if sample else ""
    return f"{prefix}{sanitize_filename(record.testator_name)}_Last_Will_and_Testament.docx"


def trust_filename(record: TrustRecord, *, sample: bool = False) -> str:
    prefix = SAMPLE_FILENAME_PREFIX if sample else ""
    return f"{prefix}{sanitize_filename(record.trust_name)}_Revocable_Living_Trust.docx"


# ── Part sets ──────────────────────────────────────────────────────────────────


def _assemble_parts(
    composition: Composition,
    title: str,
    *,
    sample: bool,
    now: datetime | None,
) -> dict[str, str]:
    now = now or datetime.now(timezone.utc)
    parts = {
        docx_parts.DOCUMENT_PATH: render_body_xml(composition.paragraphs(sample=sample)),
        **docx_parts.support_parts(title, now),
    }
    for path, xml in parts.items():
        ok, error = is_well_formed_xml(xml)
        if not ok:
            raise CompositionError(f"Generated part {path} is not well-formed: {error}")
    return parts


def build_will_parts(
    record: WillRecord,
    *,
    sample: bool = False,
    now: datetime | None = None,
) -> dict[str, str]:
    """Every OOXML part of the will, keyed by archive path."""
    return _assemble_parts(
        compose_will(record), will_title(record, sample=sample), sample=sample, now=now
    )


def build_trust_parts(
    record: TrustRecord,
    *,
    sample: bool = False,
    now: datetime | None = None,
) -> dict[str, str]:
    """Every OOXML part of the trust agreement, keyed by archive path."""
    return _assemble_parts(
        compose_trust(record), trust_title(record, sample=sample), sample=sample, now=now
    )


# ── Export ─────────────────────────────────────────────────────────────────────


def _package(
    kind: DocumentKind,
    parts: dict[str, str],
    filename: str,
    title: str,
    warnings: list[str],
    now: datetime,
) -> ExportedDocument:
    # ZIP timestamps carry no zone and are read back as local time.
    blob = build_archive(parts, modified=now.astimezone())
    logger.info("Exported %s %s (%d bytes)", kind.value, filename, len(blob.data))
    return ExportedDocument(
        filename=filename,
        title=title,
        mime_type=blob.mime_type,
        data=blob.data,
        warnings=warnings,
    )


def export_will(
    record: WillRecord,
    *,
    sample: bool = False,
    now: datetime | None = None,
) -> ExportedDocument:
    """Compose and package a will.

    Blank fields become placeholders; the only failures are CompositionError
    and ArchiveError, both of which mean no file was produced.
    """
    now = now or datetime.now(timezone.utc)
    parts = build_will_parts(record, sample=sample, now=now)
    warnings = percentage_warnings(
        "Residuary estate",
        [share.percentage for share in record.residuary_beneficiaries],
    )
    return _package(
        DocumentKind.WILL,
        parts,
        will_filename(record, sample=sample),
        will_title(record, sample=sample),
        warnings,
        now,
    )


def export_trust(
    record: TrustRecord,
    *,
    sample: bool = False,
    now: datetime | None = None,
) -> ExportedDocument:
    """Compose and package a trust agreement."""
    now = now or datetime.now(timezone.utc)
    parts = build_trust_parts(record, sample=sample, now=now)
    warnings = percentage_warnings(
        "Trust beneficiary",
        [beneficiary.percentage for beneficiary in record.beneficiaries],
    )
    return _package(
        DocumentKind.TRUST,
        parts,
        trust_filename(record, sample=sample),
        trust_title(record, sample=sample),
        warnings,
        now,
    )


# ── Preview ────────────────────────────────────────────────────────────────────


def preview_will(record: WillRecord, *, sample: bool = False) -> DocumentPreview:
    text = render_plain_text(compose_will(record).paragraphs(sample=sample))
    return DocumentPreview(title=will_title(record, sample=sample), text=text)


def preview_trust(record: TrustRecord, *, sample: bool = False) -> DocumentPreview:
    text = render_plain_text(compose_trust(record).paragraphs(sample=sample))
    return DocumentPreview(title=trust_title(record, sample=sample), text=text)
