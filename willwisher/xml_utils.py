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

"""OOXML utilities: namespaces, text escaping and well-formedness checks.

The composer builds XML as strings, so every user-supplied value goes through
escape_xml() before interpolation. is_well_formed_xml() is the safety net run
over each finished part before it is packaged.
"""

from __future__ import annotations

import re

from lxml import etree

# OOXML namespaces (canonical source, shared across all XML modules)
NAMESPACES = {
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "pr": "http://schemas.openxmlformats.org/package/2006/relationships",
    "ct": "http://schemas.openxmlformats.org/package/2006/content-types",
    "cp": "http://schemas.openxmlformats.org/package/2006/metadata/core-properties",
    "ep": "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties",
    "dc": "http://purl.org/dc/elements/1.1/",
    "dcterms": "http://purl.org/dc/terms/",
    "dcmitype": "http://purl.org/dc/dcmitype/",
    "xsi": "http://www.w3.org/2001/XMLSchema-instance",
}

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'

# No DTD loading, no entity expansion, no network access.
SECURE_PARSER = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    load_dtd=False,
    huge_tree=False,
)

_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)

# Characters XML 1.0 does not allow anywhere in a document, even escaped.
_FORBIDDEN_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def escape_xml(text: str) -> str:
    """Replace the five XML special characters with their entities.

    Control characters XML 1.0 forbids are dropped first; vertical tab and
    form feed become a space so the words on either side stay apart.
    Ampersand goes first so the entities added afterwards are not
    escaped a second time.
    """
    text = _FORBIDDEN_CHARS.sub(
        lambda m: " " if m.group() in "\x0b\x0c" else "", text
    )
    for raw, entity in _ESCAPES:
        text = text.replace(raw, entity)
    return text


def is_well_formed_xml(xml_string: str) -> tuple[bool, str | None]:
    """Check that *xml_string* parses as a complete XML document.

    Returns (True, None) on success, (False, error_message) on failure.
    """
    try:
        etree.fromstring(xml_string.encode("utf-8"), SECURE_PARSER)
    except etree.XMLSyntaxError as e:
        return False, f"XML syntax error: {e}"
    return True, None


def parse_part(xml_bytes: bytes) -> etree._Element:
    """Parse a stored package part with the hardened parser."""
    return etree.fromstring(xml_bytes, SECURE_PARSER)


def text_of(root: etree._Element) -> list[str]:
    """Return the text of every <w:p> under *root*, one string per paragraph."""
    w_ns = NAMESPACES["w"]
    return [
        "".join(t.text or "" for t in para.iter(f"{{{w_ns}}}t"))
        for para in root.iter(f"{{{w_ns}}}p")
    ]
