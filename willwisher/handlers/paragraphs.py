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

"""Paragraph model shared by the will and trust composers.

Articles are built as lists of Paragraph values (text plus one of the fixed
paragraph styles declared in word/styles.xml). Rendering to OOXML and to
plain preview text happens here, in one place, so escaping cannot be
forgotten by an individual article.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from willwisher.xml_utils import NAMESPACES, XML_DECLARATION, escape_xml

SIGNATURE_RULE = "____________________________________"
SAMPLE_WATERMARK = "DRAFT - SAMPLE FOR REFERENCE"
SAMPLE_NOTICE = "THIS IS A SAMPLE DOCUMENT FOR REFERENCE PURPOSES ONLY"

_ROMAN = ["I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X"]


class Style(str, Enum):
    TITLE = "Title"
    SUBTITLE = "Subtitle"
    ARTICLE_HEADING = "ArticleHeading"
    SECTION_HEADING = "SectionHeading"
    BODY = "Body"
    LIST_ITEM = "ListItem"
    SIGNATURE_LINE = "SignatureLine"
    WATERMARK = "Watermark"
    SAMPLE_NOTICE = "SampleNotice"


@dataclass(frozen=True)
class Paragraph:
    text: str
    style: Style = Style.BODY


def roman(number: int) -> str:
    """Article numeral, I through X."""
    return _ROMAN[number - 1]


def heading(number: int, title: str) -> Paragraph:
    return Paragraph(f"ARTICLE {roman(number)} - {title}", Style.ARTICLE_HEADING)


def body(text: str) -> Paragraph:
    return Paragraph(text)


def item(text: str) -> Paragraph:
    return Paragraph(text, Style.LIST_ITEM)


def placeholder(value: str | None, token: str) -> str:
    """Return *value* stripped, or the bracketed *token* when it is blank."""
    if value is None or not value.strip():
        return f"[{token}]"
    return value.strip()


def format_date(value: date | None, token: str) -> str:
    """Full-text date ("January 5, 2025"), or the bracketed *token*."""
    if value is None:
        return f"[{token}]"
    return f"{value:%B} {value.day}, {value.year}"


def format_percentage(value: int | None) -> str:
    return "[%]" if value is None else f"{value}%"


def signature_block(*lines: str) -> list[Paragraph]:
    """A blank signature rule followed by the printed lines under it."""
    block = [Paragraph(SIGNATURE_RULE, Style.SIGNATURE_LINE)]
    block.extend(Paragraph(line, Style.SIGNATURE_LINE) for line in lines)
    return block


@dataclass
class Composition:
    """A composed document split at the point where signing begins.

    *provisions* holds the title block and every article before execution;
    *signing* holds the execution, signature and notarization paragraphs.
    """
    provisions: list[Paragraph]
    signing: list[Paragraph]

    def paragraphs(self, *, sample: bool = False) -> list[Paragraph]:
        """Flatten to one list, adding the sample watermark and notice when asked."""
        if not sample:
            return [*self.provisions, *self.signing]
        return [
            Paragraph(SAMPLE_WATERMARK, Style.WATERMARK),
            *self.provisions,
            Paragraph(SAMPLE_NOTICE, Style.SAMPLE_NOTICE),
            *self.signing,
        ]


# ── Rendering ──────────────────────────────────────────────────────────────────


def _paragraph_xml(paragraph: Paragraph) -> str:
    text = escape_xml(paragraph.text)
    space = ""
    if text and (text[0] == " " or text[-1] == " "):
        space = ' xml:space="preserve"'
    return (
        f'<w:p><w:pPr><w:pStyle w:val="{paragraph.style.value}"/></w:pPr>'
        f"<w:r><w:t{space}>{text}</w:t></w:r></w:p>"
    )


def render_body_xml(paragraphs: list[Paragraph]) -> str:
    """Render a complete word/document.xml for *paragraphs* (US Letter, 1" margins)."""
    body_xml = "".join(_paragraph_xml(p) for p in paragraphs)
    return (
        f"{XML_DECLARATION}\n"
        f'<w:document xmlns:w="{NAMESPACES["w"]}" xmlns:r="{NAMESPACES["r"]}">'
        f"<w:body>{body_xml}"
        "<w:sectPr>"
        '<w:pgSz w:w="12240" w:h="15840"/>'
        '<w:pgMar w:top="1440" w:right="1440" w:bottom="1440" w:left="1440" '
        'w:header="720" w:footer="720" w:gutter="0"/>'
        "</w:sectPr>"
        "</w:body></w:document>"
    )


def render_plain_text(paragraphs: list[Paragraph]) -> str:
    """Render *paragraphs* as preview text, one paragraph per line."""
    lines: list[str] = []
    for p in paragraphs:
        if p.style in (Style.ARTICLE_HEADING, Style.SECTION_HEADING) and lines:
            lines.append("")
        lines.append(p.text)
    return "\n".join(lines) + "\n"


def notarization_block(
    person: str,
    county: str,
    notarized_on: str,
    notary_lines: list[str],
) -> list[Paragraph]:
    """California notarial acknowledgment closing both the will and the trust."""
    return [
        Paragraph("NOTARIZATION", Style.SECTION_HEADING),
        body("State of California"),
        body(f"County of {county}"),
        body(
            f"On this {notarized_on}, before me personally appeared {person}, who "
            "proved to me on the basis of satisfactory evidence to be the person "
            "whose name is subscribed to the within instrument and acknowledged to "
            "me that he/she executed the same in his/her authorized capacity, and "
            "that by his/her signature on the instrument the person, or the entity "
            "upon behalf of which the person acted, executed the instrument."
        ),
        body(
            "I certify under PENALTY OF PERJURY under the laws of the State of "
            "California that the foregoing paragraph is true and correct."
        ),
        body("WITNESS my hand and official seal."),
        *signature_block(*notary_lines),
    ]
