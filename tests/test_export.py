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

"""Tests for .docx export, preview and archive verification."""

import logging
import zipfile
from io import BytesIO

import pytest
from docx import Document

from willwisher.handlers.docx_parts import (
    APPLICATION_NAME,
    CORE_PATH,
    DOCUMENT_PATH,
    REQUIRED_PARTS,
)
from willwisher.handlers.docx_verifier import inspect_archive
from willwisher.handlers.export import (
    build_will_parts,
    export_trust,
    export_will,
    percentage_warnings,
    preview_trust,
    preview_will,
    sanitize_filename,
)
from willwisher.handlers.paragraphs import SAMPLE_NOTICE, SAMPLE_WATERMARK
from willwisher.handlers.zip_writer import build_archive
from willwisher.models import (
    DOCX_MIME_TYPE,
    ResiduaryShare,
    TrustRecord,
    WillRecord,
)
from willwisher.xml_utils import parse_part, text_of

from tests.conftest import FIXED_NOW


def _read_part(data: bytes, path: str) -> bytes:
    with zipfile.ZipFile(BytesIO(data)) as zf:
        return zf.read(path)


def _document_texts(data: bytes) -> list[str]:
    return text_of(parse_part(_read_part(data, DOCUMENT_PATH)))


# ── Package contents ──────────────────────────────────────────────────────────


class TestPackage:
    def test_required_parts_present(self, jane_doe_will) -> None:
        exported = export_will(jane_doe_will, now=FIXED_NOW)
        with zipfile.ZipFile(BytesIO(exported.data)) as zf:
            assert sorted(zf.namelist()) == sorted(REQUIRED_PARTS)
            assert zf.testzip() is None

    def test_entry_timestamp_is_local_export_time(self, jane_doe_will) -> None:
        exported = export_will(jane_doe_will, now=FIXED_NOW)
        with zipfile.ZipFile(BytesIO(exported.data)) as zf:
            stamped = zf.getinfo(DOCUMENT_PATH).date_time
        local = FIXED_NOW.astimezone()
        assert stamped == (
            local.year, local.month, local.day, local.hour, local.minute, local.second
        )

    def test_core_dates_stay_utc(self, jane_doe_will) -> None:
        core = _read_part(export_will(jane_doe_will, now=FIXED_NOW).data, CORE_PATH)
        assert b">2025-01-05T10:30:00Z<" in core

    def test_same_moment_same_bytes(self, jane_doe_will) -> None:
        first = export_will(jane_doe_will, now=FIXED_NOW)
        second = export_will(jane_doe_will, now=FIXED_NOW)
        assert first.data == second.data

    def test_mime_type(self, jane_doe_will) -> None:
        assert export_will(jane_doe_will, now=FIXED_NOW).mime_type == DOCX_MIME_TYPE

    def test_every_part_is_well_formed(self, doe_trust) -> None:
        exported = export_trust(doe_trust, now=FIXED_NOW)
        for path in REQUIRED_PARTS:
            parse_part(_read_part(exported.data, path))

    def test_opens_in_python_docx(self, jane_doe_will) -> None:
        exported = export_will(jane_doe_will, now=FIXED_NOW)
        document = Document(BytesIO(exported.data))
        texts = [p.text for p in document.paragraphs]
        assert texts[0] == "LAST WILL AND TESTAMENT"
        assert "To John Doe, son, 100% of my estate." in texts
        assert document.core_properties.title == "Last Will and Testament of Jane Doe"

    def test_trust_opens_in_python_docx(self, doe_trust) -> None:
        document = Document(BytesIO(export_trust(doe_trust, now=FIXED_NOW).data))
        texts = [p.text for p in document.paragraphs]
        assert "1. 60% to John Doe, if he/she survives me." in texts


# ── Core properties ───────────────────────────────────────────────────────────


class TestCoreProperties:
    def test_title_creator_and_dates(self, jane_doe_will) -> None:
        core = _read_part(export_will(jane_doe_will, now=FIXED_NOW).data, CORE_PATH)
        text = core.decode("utf-8")
        assert "<dc:title>Last Will and Testament of Jane Doe</dc:title>" in text
        assert f"<dc:creator>{APPLICATION_NAME}</dc:creator>" in text
        assert text.count("2025-01-05T10:30:00Z") == 2

    def test_title_is_escaped(self) -> None:
        parts = build_will_parts(WillRecord(testator_name="A & B <C>"), now=FIXED_NOW)
        assert "Last Will and Testament of A &amp; B &lt;C&gt;" in parts[CORE_PATH]

    def test_sample_title_prefix(self, doe_trust) -> None:
        exported = export_trust(doe_trust, sample=True, now=FIXED_NOW)
        assert exported.title == (
            "SAMPLE - Revocable Living Trust Agreement - Doe Family Trust"
        )
        core = _read_part(exported.data, CORE_PATH).decode("utf-8")
        assert f"<dc:title>{exported.title}</dc:title>" in core


# ── Filenames ─────────────────────────────────────────────────────────────────


class TestFilenames:
    def test_will_filename(self, jane_doe_will) -> None:
        exported = export_will(jane_doe_will, now=FIXED_NOW)
        assert exported.filename == "Jane_Doe_Last_Will_and_Testament.docx"

    def test_trust_filename(self, doe_trust) -> None:
        exported = export_trust(doe_trust, now=FIXED_NOW)
        assert exported.filename == "Doe_Family_Trust_Revocable_Living_Trust.docx"

    def test_sample_prefix(self, jane_doe_will) -> None:
        exported = export_will(jane_doe_will, sample=True, now=FIXED_NOW)
        assert exported.filename == "SAMPLE_Jane_Doe_Last_Will_and_Testament.docx"

    def test_untitled_fallback(self) -> None:
        assert export_will(WillRecord(), now=FIXED_NOW).filename == (
            "Untitled_Last_Will_and_Testament.docx"
        )
        assert export_trust(TrustRecord(), now=FIXED_NOW).filename == (
            "Untitled_Revocable_Living_Trust.docx"
        )

    @pytest.mark.parametrize("name, expected", [
        ("Jane Doe", "Jane_Doe"),
        ("  Jane   Doe  ", "Jane_Doe"),
        ("Jane O'Neil-Doe", "Jane_ONeilDoe"),
        ("José Núñez", "Jos_Nez"),
        ("../../etc/passwd", "etcpasswd"),
        ("***", "Untitled"),
        ("", "Untitled"),
    ])
    def test_sanitize_filename(self, name: str, expected: str) -> None:
        assert sanitize_filename(name) == expected


# ── Sample mode ───────────────────────────────────────────────────────────────


class TestSampleMode:
    def test_watermark_first_and_notice_before_signing(self, jane_doe_will) -> None:
        texts = _document_texts(
            export_will(jane_doe_will, sample=True, now=FIXED_NOW).data
        )
        assert texts[0] == SAMPLE_WATERMARK
        assert texts.count(SAMPLE_WATERMARK) == 1
        assert texts.count(SAMPLE_NOTICE) == 1
        assert texts[texts.index(SAMPLE_NOTICE) + 1] == "ARTICLE X - ATTESTATION"

    def test_trust_notice_before_execution(self, doe_trust) -> None:
        texts = _document_texts(export_trust(doe_trust, sample=True, now=FIXED_NOW).data)
        after = texts[texts.index(SAMPLE_NOTICE) + 1]
        assert after.startswith("IN WITNESS WHEREOF")

    def test_not_sample_has_no_marks(self, jane_doe_will) -> None:
        texts = _document_texts(export_will(jane_doe_will, now=FIXED_NOW).data)
        assert SAMPLE_WATERMARK not in texts
        assert SAMPLE_NOTICE not in texts


# ── Percentage warnings ───────────────────────────────────────────────────────


class TestPercentageWarnings:
    def test_no_warning_at_100(self, jane_doe_will, doe_trust) -> None:
        assert export_will(jane_doe_will, now=FIXED_NOW).warnings == []
        assert export_trust(doe_trust, now=FIXED_NOW).warnings == []

    def test_warns_but_exports(self, caplog) -> None:
        record = WillRecord(
            residuary_beneficiaries=[
                ResiduaryShare(beneficiary="A", percentage=50),
                ResiduaryShare(beneficiary="B", percentage=30),
            ]
        )
        with caplog.at_level(logging.WARNING):
            exported = export_will(record, now=FIXED_NOW)
        assert exported.warnings == [
            "Residuary estate percentages total 80%, not 100%. "
            "The document states them as entered."
        ]
        assert "total 80%" in caplog.text
        assert "To A, [Your Relationship], 50% of my estate." in _document_texts(
            exported.data
        )

    def test_blank_shares_ignored(self) -> None:
        assert percentage_warnings("Trust beneficiary", [None, None]) == []
        assert percentage_warnings("Trust beneficiary", [60, None, 40]) == []
        assert percentage_warnings("Trust beneficiary", []) == []


# ── Preview ───────────────────────────────────────────────────────────────────


class TestPreview:
    def test_will_preview_matches_document(self, jane_doe_will) -> None:
        preview = preview_will(jane_doe_will)
        assert preview.title == "Last Will and Testament of Jane Doe"
        lines = [line for line in preview.text.splitlines() if line]
        exported = export_will(jane_doe_will, now=FIXED_NOW)
        assert lines == _document_texts(exported.data)

    def test_trust_preview_sample(self, doe_trust) -> None:
        preview = preview_trust(doe_trust, sample=True)
        assert preview.title.startswith("SAMPLE - ")
        assert preview.text.startswith(SAMPLE_WATERMARK + "\n")
        assert SAMPLE_NOTICE in preview.text


# ── Control characters ────────────────────────────────────────────────────────


class TestControlCharacters:
    def test_will_with_control_characters_exports(self) -> None:
        record = WillRecord(
            testator_name="Jane\x0bDoe",
            residuary_beneficiaries=[
                ResiduaryShare(beneficiary="John\x0cDoe\x01", relation="son", percentage=100)
            ],
        )
        exported = export_will(record, now=FIXED_NOW)
        assert inspect_archive(exported.data).valid
        texts = _document_texts(exported.data)
        assert "JANE DOE" in texts
        assert "To John Doe, son, 100% of my estate." in texts
        assert exported.filename == "Jane_Doe_Last_Will_and_Testament.docx"

    def test_trust_with_control_characters_exports(self) -> None:
        record = TrustRecord(
            trust_name="Doe\x0bFamily\x0cTrust",
            distribution_terms="Outright\x1b.",
        )
        exported = export_trust(record, now=FIXED_NOW)
        assert inspect_archive(exported.data).valid
        assert "Distribution Terms: Outright." in _document_texts(exported.data)
        core = _read_part(exported.data, CORE_PATH).decode("utf-8")
        assert "Revocable Living Trust Agreement - Doe Family Trust" in core


# ── Verification ──────────────────────────────────────────────────────────────


class TestInspectArchive:
    def test_exported_will_is_valid(self, jane_doe_will) -> None:
        exported = export_will(jane_doe_will, now=FIXED_NOW)
        report = inspect_archive(exported.data)
        assert report.valid
        assert report.crc_ok
        assert report.missing_parts == []
        assert report.malformed_parts == []
        assert [e.path for e in report.entries][0] == DOCUMENT_PATH
        assert report.entries[0].header_offset == 0

    def test_corrupted_content_fails_crc(self, jane_doe_will) -> None:
        data = bytearray(export_will(jane_doe_will, now=FIXED_NOW).data)
        index = data.index(b"Jane Doe")
        data[index] = ord("X")
        report = inspect_archive(bytes(data))
        assert not report.crc_ok
        assert not report.valid

    def test_missing_parts_reported(self) -> None:
        blob = build_archive({DOCUMENT_PATH: "<document/>"})
        report = inspect_archive(blob.data)
        assert DOCUMENT_PATH not in report.missing_parts
        assert CORE_PATH in report.missing_parts
        assert not report.valid

    def test_malformed_part_reported(self) -> None:
        blob = build_archive({DOCUMENT_PATH: "<document>"})
        report = inspect_archive(blob.data)
        assert report.malformed_parts == [DOCUMENT_PATH]
        assert report.crc_ok

    def test_not_a_zip(self) -> None:
        with pytest.raises(ValueError, match="Not a valid ZIP archive"):
            inspect_archive(b"plain text, not an archive")
