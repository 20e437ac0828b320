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

"""Minimal ZIP container writer for .docx packages.

Writes every part with the *stored* method (no compression): one local file
header plus raw content per part, then one central directory entry per part,
then a single end-of-central-directory record. All integers are little-endian.

The archive is rebuilt from scratch on every call. Offsets, sizes and CRCs are
always computed from the bytes actually written, never patched in place.
"""

from __future__ import annotations

import logging
import struct
from collections.abc import Iterable, Mapping
from datetime import datetime

from willwisher.models import DocxBlob

logger = logging.getLogger(__name__)

LOCAL_FILE_HEADER_SIGNATURE = 0x04034B50
CENTRAL_DIRECTORY_SIGNATURE = 0x02014B50
END_OF_CENTRAL_DIRECTORY_SIGNATURE = 0x06054B50

VERSION = 20  # 2.0: stored entries, no ZIP64
METHOD_STORED = 0
FLAG_UTF8_NAMES = 0x0800

# signature, version needed, flags, method, time, date, crc, csize, usize,
# name length, extra length
_LOCAL_HEADER = struct.Struct("<IHHHHHIIIHH")
# signature, version made by, version needed, flags, method, time, date, crc,
# csize, usize, name length, extra length, comment length, disk start,
# internal attrs, external attrs, local header offset
_CENTRAL_ENTRY = struct.Struct("<IHHHHHHIIIHHHHHII")
# signature, this disk, cd disk, entries on disk, total entries, cd size,
# cd offset, comment length
_END_RECORD = struct.Struct("<IHHHHIIH")

MAX_ENTRIES = 0xFFFF
MAX_NAME_BYTES = 0xFFFF
MAX_32 = 0xFFFFFFFF

_DOS_EPOCH = datetime(1980, 1, 1)


class ArchiveError(ValueError):
    """The part set cannot be written as a valid stored ZIP archive."""


def _make_crc_table() -> tuple[int, ...]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = (0xEDB88320 ^ (c >> 1)) if c & 1 else (c >> 1)
        table.append(c)
    return tuple(table)


_CRC_TABLE = _make_crc_table()


def crc32(data: bytes) -> int:
    """IEEE 802.3 CRC-32 (reflected polynomial 0xEDB88320), as used by ZIP."""
    crc = 0xFFFFFFFF
    for byte in data:
        crc = _CRC_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ 0xFFFFFFFF


def dos_datetime(moment: datetime) -> tuple[int, int]:
    """Encode *moment* as the (time, date) pair of MS-DOS timestamps.

    Dates before 1980 clamp to 1980-01-01; seconds have 2 s resolution.
    """
    if moment.year < 1980:
        moment = _DOS_EPOCH
    dos_time = (moment.hour << 11) | (moment.minute << 5) | (moment.second // 2)
    dos_date = ((moment.year - 1980) << 9) | (moment.month << 5) | moment.day
    return dos_time, dos_date


def _normalise_parts(
    parts: Mapping[str, str] | Iterable[tuple[str, str]],
) -> list[tuple[str, str]]:
    """Turn a part set into an ordered list and reject what ZIP can't hold."""
    items = list(parts.items()) if isinstance(parts, Mapping) else list(parts)

    if not items:
        raise ArchiveError("Part set is empty; an archive needs at least one part")
    if len(items) > MAX_ENTRIES:
        raise ArchiveError(
            f"Too many parts ({len(items)}). Max is {MAX_ENTRIES} without ZIP64."
        )

    seen: set[str] = set()
    for path, _ in items:
        if not path:
            raise ArchiveError("Part path is empty")
        if "\\" in path or path.startswith("/"):
            raise ArchiveError(
                f"Part path {path!r} must be relative and use forward slashes"
            )
        if path in seen:
            raise ArchiveError(f"Duplicate part path: {path!r}")
        seen.add(path)
    return items


def _local_header(
    name: bytes, flags: int, crc: int, size: int, dos_time: int, dos_date: int
) -> bytes:
    return _LOCAL_HEADER.pack(
        LOCAL_FILE_HEADER_SIGNATURE,
        VERSION,
        flags,
        METHOD_STORED,
        dos_time,
        dos_date,
        crc,
        size,
        size,
        len(name),
        0,
    ) + name


def _central_entry(
    name: bytes,
    flags: int,
    crc: int,
    size: int,
    dos_time: int,
    dos_date: int,
    offset: int,
) -> bytes:
    return _CENTRAL_ENTRY.pack(
        CENTRAL_DIRECTORY_SIGNATURE,
        VERSION,
        VERSION,
        flags,
        METHOD_STORED,
        dos_time,
        dos_date,
        crc,
        size,
        size,
        len(name),
        0,
        0,
        0,
        0,
        0,
        offset,
    ) + name


def _end_record(count: int, cd_size: int, cd_offset: int) -> bytes:
    # Single-disk archive: both entry counts are the same.
    return _END_RECORD.pack(
        END_OF_CENTRAL_DIRECTORY_SIGNATURE, 0, 0, count, count, cd_size, cd_offset, 0
    )


def build_archive(
    parts: Mapping[str, str] | Iterable[tuple[str, str]],
    *,
    modified: datetime | None = None,
) -> DocxBlob:
    """Package *parts* (path -> UTF-8 text) into a stored ZIP archive.

    parts: a mapping or an ordered sequence of (path, text) pairs. Entries
        are written in the given order.
    modified: timestamp stamped on every entry. Defaults to 1980-01-01 so
        identical input yields identical bytes.

    Raises ArchiveError for an empty part set, duplicate or malformed paths,
    or anything that would overflow the 16/32-bit ZIP fields.
    """
    items = _normalise_parts(parts)
    dos_time, dos_date = dos_datetime(modified or _DOS_EPOCH)

    local_chunks: list[bytes] = []
    central_chunks: list[bytes] = []
    offset = 0

    for path, text in items:
        name = path.encode("utf-8")
        if len(name) > MAX_NAME_BYTES:
            raise ArchiveError(f"Part path too long ({len(name)} bytes): {path[:40]!r}...")
        flags = 0 if path.isascii() else FLAG_UTF8_NAMES
        content = text.encode("utf-8")
        size = len(content)
        if size > MAX_32:
            raise ArchiveError(f"Part {path!r} exceeds 4 GiB; ZIP64 is not supported")
        crc = crc32(content)

        header = _local_header(name, flags, crc, size, dos_time, dos_date)
        local_chunks.append(header)
        local_chunks.append(content)
        central_chunks.append(
            _central_entry(name, flags, crc, size, dos_time, dos_date, offset)
        )
        offset += len(header) + size
        if offset > MAX_32:
            raise ArchiveError("Archive exceeds 4 GiB; ZIP64 is not supported")

    central_directory = b"".join(central_chunks)
    end = _end_record(len(items), len(central_directory), offset)

    data = b"".join(local_chunks) + central_directory + end
    logger.debug(
        "Built stored archive: %d entries, %d bytes (central directory at %d)",
        len(items), len(data), offset,
    )
    return DocxBlob(data=data)
