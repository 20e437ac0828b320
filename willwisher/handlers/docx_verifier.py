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

"""Exported .docx verification: re-read the archive with an independent reader.

Uses the standard zipfile reader rather than our own writer's assumptions,
so a report with valid=True means a mainstream unzip will accept the file.
"""

from __future__ import annotations

import logging
import zipfile
from io import BytesIO

from lxml import etree

from willwisher.handlers.docx_parts import REQUIRED_PARTS
from willwisher.models import ArchiveEntry, ArchiveReport
from willwisher.xml_utils import parse_part

logger = logging.getLogger(__name__)

_XML_SUFFIXES = (".xml", ".rels")


def _malformed_parts(zf: zipfile.ZipFile) -> list[str]:
    """Names of XML members that do not parse."""
    bad: list[str] = []
    for name in zf.namelist():
        if not name.endswith(_XML_SUFFIXES):
            continue
        try:
            parse_part(zf.read(name))
        except etree.XMLSyntaxError as exc:
            logger.debug("Part %s is not well-formed: %s", name, exc)
            bad.append(name)
    return bad


def inspect_archive(file_bytes: bytes) -> ArchiveReport:
    """Check CRCs, required OOXML parts and XML well-formedness.

    Raises ValueError when the bytes are not a ZIP archive at all.
    """
    try:
        zf = zipfile.ZipFile(BytesIO(file_bytes))
    except zipfile.BadZipFile as exc:
        raise ValueError(f"Not a valid ZIP archive: {exc}") from exc

    with zf:
        entries = [
            ArchiveEntry(
                path=info.filename,
                size=info.file_size,
                crc=info.CRC,
                header_offset=info.header_offset,
            )
            for info in zf.infolist()
        ]
        try:
            first_bad = zf.testzip()
        except zipfile.BadZipFile as exc:
            logger.debug("Archive failed integrity test: %s", exc)
            first_bad = "?"
        crc_ok = first_bad is None

        names = set(zf.namelist())
        missing = [part for part in REQUIRED_PARTS if part not in names]
        # Members with a bad CRC raise on read, so only parse a clean archive.
        malformed = _malformed_parts(zf) if crc_ok else []

    return ArchiveReport(
        entries=entries,
        missing_parts=missing,
        malformed_parts=malformed,
        crc_ok=crc_ok,
        valid=crc_ok and not missing and not malformed,
    )
