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

"""Fixed OOXML support parts: content types, relationships, styles, metadata.

Word refuses a package without these, so every export carries all of
REQUIRED_PARTS. Only core.xml varies per document (title and timestamps).
"""

from __future__ import annotations

from datetime import datetime, timezone

from willwisher.xml_utils import NAMESPACES, XML_DECLARATION, escape_xml

CONTENT_TYPES_PATH = "[Content_Types].xml"
PACKAGE_RELS_PATH = "_rels/.rels"
DOCUMENT_PATH = "word/document.xml"
STYLES_PATH = "word/styles.xml"
DOCUMENT_RELS_PATH = "word/_rels/document.xml.rels"
APP_PATH = "docProps/app.xml"
CORE_PATH = "docProps/core.xml"

REQUIRED_PARTS = (
    CONTENT_TYPES_PATH,
    PACKAGE_RELS_PATH,
    DOCUMENT_PATH,
    STYLES_PATH,
    DOCUMENT_RELS_PATH,
    APP_PATH,
    CORE_PATH,
)

APPLICATION_NAME = "Will Wisher Legal Will and Trust Creation App"
APP_VERSION = "1.0"

_REL_TYPE_BASE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
_FONT = "Times New Roman"


def content_types_xml() -> str:
    return (
        f"{XML_DECLARATION}\n"
        f'<Types xmlns="{NAMESPACES["ct"]}">'
        '<Default Extension="rels" '
        'ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
        '<Default Extension="xml" ContentType="application/xml"/>'
        '<Override PartName="/word/document.xml" ContentType="application/'
        'vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>'
        '<Override PartName="/word/styles.xml" ContentType="application/'
        'vnd.openxmlformats-officedocument.wordprocessingml.styles+xml"/>'
        '<Override PartName="/docProps/app.xml" ContentType="application/'
        'vnd.openxmlformats-officedocument.extended-properties+xml"/>'
        '<Override PartName="/docProps/core.xml" ContentType="application/'
        'vnd.openxmlformats-package.core-properties+xml"/>'
        "</Types>"
    )


def package_rels_xml() -> str:
    return (
        f"{XML_DECLARATION}\n"
        f'<Relationships xmlns="{NAMESPACES["pr"]}">'
        f'<Relationship Id="rId1" Type="{_REL_TYPE_BASE}/officeDocument" '
        'Target="word/document.xml"/>'
        '<Relationship Id="rId2" Type="http://schemas.openxmlformats.org/package/'
        '2006/relationships/metadata/core-properties" Target="docProps/core.xml"/>'
        f'<Relationship Id="rId3" Type="{_REL_TYPE_BASE}/extended-properties" '
        'Target="docProps/app.xml"/>'
        "</Relationships>"
    )


def document_rels_xml() -> str:
    return (
        f"{XML_DECLARATION}\n"
        f'<Relationships xmlns="{NAMESPACES["pr"]}">'
        f'<Relationship Id="rId1" Type="{_REL_TYPE_BASE}/styles" Target="styles.xml"/>'
        "</Relationships>"
    )


def _paragraph_style(
    style_id: str,
    name: str,
    *,
    justify: str = "",
    before: int = 0,
    after: int = 200,
    bold: bool = False,
    underline: bool = False,
    size: int = 24,
    color: str = "",
) -> str:
    ppr = f'<w:spacing w:before="{before}" w:after="{after}"/>'
    if justify:
        ppr = f'<w:jc w:val="{justify}"/>' + ppr
    rpr = ""
    if bold:
        rpr += "<w:b/>"
    if underline:
        rpr += '<w:u w:val="single"/>'
    if color:
        rpr += f'<w:color w:val="{color}"/>'
    rpr += f'<w:sz w:val="{size}"/><w:szCs w:val="{size}"/>'
    return (
        f'<w:style w:type="paragraph" w:customStyle="1" w:styleId="{style_id}">'
        f'<w:name w:val="{name}"/><w:basedOn w:val="Normal"/><w:qFormat/>'
        f"<w:pPr>{ppr}</w:pPr><w:rPr>{rpr}</w:rPr></w:style>"
    )


def styles_xml() -> str:
    """Document defaults (Times New Roman 12pt, 1.5 line spacing) and the
    paragraph styles referenced by the composers."""
    styles = [
        _paragraph_style("Title", "Title", justify="center", after=400,
                         bold=True, size=28),
        _paragraph_style("Subtitle", "Subtitle", justify="center", after=600,
                         bold=True),
        _paragraph_style("ArticleHeading", "Article Heading", before=400,
                         bold=True, underline=True),
        _paragraph_style("SectionHeading", "Section Heading", justify="center",
                         before=400, bold=True, underline=True),
        _paragraph_style("Body", "Body", justify="both"),
        _paragraph_style("ListItem", "List Item", justify="both", after=100),
        _paragraph_style("SignatureLine", "Signature Line", after=100),
        _paragraph_style("Watermark", "Watermark", justify="center", after=400,
                         bold=True, size=48, color="CCCCCC"),
        _paragraph_style("SampleNotice", "Sample Notice", justify="center",
                         before=600, after=400, bold=True, size=20,
                         color="FF0000"),
    ]
    return (
        f"{XML_DECLARATION}\n"
        f'<w:styles xmlns:w="{NAMESPACES["w"]}">'
        "<w:docDefaults><w:rPrDefault><w:rPr>"
        f'<w:rFonts w:ascii="{_FONT}" w:hAnsi="{_FONT}" w:cs="{_FONT}"/>'
        '<w:sz w:val="24"/><w:szCs w:val="24"/>'
        "</w:rPr></w:rPrDefault>"
        '<w:pPrDefault><w:pPr><w:spacing w:line="360" w:lineRule="auto"/>'
        "</w:pPr></w:pPrDefault></w:docDefaults>"
        '<w:style w:type="paragraph" w:default="1" w:styleId="Normal">'
        '<w:name w:val="Normal"/><w:qFormat/></w:style>'
        + "".join(styles)
        + "</w:styles>"
    )


def app_xml() -> str:
    return (
        f"{XML_DECLARATION}\n"
        f'<Properties xmlns="{NAMESPACES["ep"]}">'
        f"<Application>{escape_xml(APPLICATION_NAME)}</Application>"
        "<DocSecurity>0</DocSecurity>"
        "<ScaleCrop>false</ScaleCrop>"
        "<SharedDoc>false</SharedDoc>"
        "<HyperlinksChanged>false</HyperlinksChanged>"
        f"<AppVersion>{APP_VERSION}</AppVersion>"
        "</Properties>"
    )


def w3cdtf(moment: datetime) -> str:
    """UTC timestamp in the W3CDTF form core.xml expects (2025-01-05T10:00:00Z)."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment.replace(microsecond=0).isoformat() + "Z"


def core_xml(title: str, now: datetime) -> str:
    stamp = w3cdtf(now)
    return (
        f"{XML_DECLARATION}\n"
        f'<cp:coreProperties xmlns:cp="{NAMESPACES["cp"]}" '
        f'xmlns:dc="{NAMESPACES["dc"]}" xmlns:dcterms="{NAMESPACES["dcterms"]}" '
        f'xmlns:dcmitype="{NAMESPACES["dcmitype"]}" xmlns:xsi="{NAMESPACES["xsi"]}">'
        f"<dc:title>{escape_xml(title)}</dc:title>"
        f"<dc:creator>{escape_xml(APPLICATION_NAME)}</dc:creator>"
        f'<dcterms:created xsi:type="dcterms:W3CDTF">{stamp}</dcterms:created>'
        f'<dcterms:modified xsi:type="dcterms:W3CDTF">{stamp}</dcterms:modified>'
        "</cp:coreProperties>"
    )


def support_parts(title: str, now: datetime) -> dict[str, str]:
    """Every required part except word/document.xml."""
    return {
        CONTENT_TYPES_PATH: content_types_xml(),
        PACKAGE_RELS_PATH: package_rels_xml(),
        STYLES_PATH: styles_xml(),
        DOCUMENT_RELS_PATH: document_rels_xml(),
        APP_PATH: app_xml(),
        CORE_PATH: core_xml(title, now),
    }
