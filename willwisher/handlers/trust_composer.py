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

"""California Revocable Living Trust Agreement, article by article."""

from __future__ import annotations

from willwisher.handlers.paragraphs import (
    Composition,
    Paragraph,
    Style,
    body,
    format_date,
    format_percentage,
    heading,
    item,
    notarization_block,
    placeholder,
    signature_block,
)
from willwisher.models import TrustRecord


def _trustor(record: TrustRecord) -> str:
    return placeholder(record.trustor_name, "Full Legal Name of Trustor")


def _trust_name(record: TrustRecord) -> str:
    return placeholder(record.trust_name, "Name of Trust")


def _trustee(record: TrustRecord) -> str:
    return placeholder(record.trustee_name, "Full Name of Initial Trustee")


def title_block(record: TrustRecord) -> list[Paragraph]:
    return [
        Paragraph("REVOCABLE LIVING TRUST AGREEMENT", Style.TITLE),
        Paragraph(_trust_name(record).upper(), Style.SUBTITLE),
    ]


def article_creation(record: TrustRecord) -> list[Paragraph]:
    return [
        heading(1, "CREATION OF TRUST"),
        body(
            f"I, {_trustor(record)}, a resident of the State of California, hereby "
            "create this revocable living trust agreement, to be known as "
            f'"{_trust_name(record)}" (the "Trust"). This Trust Agreement shall be '
            "governed by the laws of the State of California."
        ),
    ]


def article_trustee(record: TrustRecord) -> list[Paragraph]:
    successor = placeholder(record.successor_trustee_name, "Full Name of Successor Trustee")
    return [
        heading(2, "APPOINTMENT OF TRUSTEE"),
        body(
            f"I hereby appoint {_trustee(record)} as the initial Trustee of this "
            "Trust. Upon my death, incapacity, or resignation, I appoint "
            f"{successor} as the successor Trustee. The Trustee shall have all "
            "powers necessary for the proper administration of this Trust as "
            "provided by California law and this Trust Agreement."
        ),
    ]


def article_property(record: TrustRecord) -> list[Paragraph]:
    paragraphs = [
        heading(3, "TRUST PROPERTY"),
        body(
            "The Trust shall consist of the following property and any additional "
            "property that may be added to the Trust:"
        ),
    ]
    # An empty schedule still shows one fill-in line.
    assets = record.trust_assets or [None]
    for n, asset in enumerate(assets, start=1):
        asset_type = placeholder(asset and asset.asset_type, f"Asset Type {n}")
        description = placeholder(asset and asset.description, f"Description of Asset {n}")
        paragraphs.append(item(f"{n}. {asset_type}: {description}"))
    return paragraphs


def article_lifetime(record: TrustRecord) -> list[Paragraph]:
    return [
        heading(4, "DISTRIBUTIONS DURING TRUSTOR'S LIFETIME"),
        body(
            "During my lifetime, while I am competent, the Trustee shall distribute "
            "to me or for my benefit such amounts of the net income and principal "
            "of the Trust as I may request from time to time. If I become "
            "incapacitated, the Trustee may distribute such amounts of income and "
            "principal as the Trustee deems necessary for my health, education, "
            "maintenance, and support."
        ),
    ]


def article_after_death(record: TrustRecord) -> list[Paragraph]:
    paragraphs = [
        heading(5, "DISTRIBUTION AFTER TRUSTOR'S DEATH"),
        body(
            "Upon my death, the Trustee shall distribute the Trust property to the "
            "following beneficiaries:"
        ),
    ]
    beneficiaries = record.beneficiaries or [None]
    for n, beneficiary in enumerate(beneficiaries, start=1):
        name = placeholder(beneficiary and beneficiary.name, f"Full Name of Trust Beneficiary {n}")
        share = format_percentage(beneficiary.percentage if beneficiary else None)
        paragraphs.append(item(f"{n}. {share} to {name}, if he/she survives me."))

    terms = placeholder(record.distribution_terms, "Distribution Terms")
    paragraphs.append(body(f"Distribution Terms: {terms}"))
    return paragraphs


def article_powers(record: TrustRecord) -> list[Paragraph]:
    return [
        heading(6, "POWERS OF TRUSTEE"),
        body(
            "The Trustee shall have all powers granted by California law, including "
            "but not limited to the power to: (a) buy, sell, exchange, lease, and "
            "manage real and personal property; (b) invest and reinvest Trust "
            "assets; (c) borrow money and mortgage Trust property; (d) make "
            "distributions to beneficiaries; (e) employ agents, attorneys, and "
            "other professionals; and (f) do all other acts necessary for the "
            "proper administration of the Trust."
        ),
    ]


def article_revocation(record: TrustRecord) -> list[Paragraph]:
    return [
        heading(7, "REVOCATION AND AMENDMENT"),
        body(
            "During my lifetime, while I am competent, I reserve the right to "
            "revoke or amend this Trust Agreement in whole or in part by written "
            "instrument delivered to the Trustee. Upon my death or incapacity, this "
            "Trust shall become irrevocable and may not be amended or revoked."
        ),
    ]


def article_general(record: TrustRecord) -> list[Paragraph]:
    return [
        heading(8, "GENERAL PROVISIONS"),
        body("A. This Trust Agreement shall be governed by California law."),
        body(
            "B. If any provision of this Trust Agreement is held invalid, such "
            "invalidity shall not affect other provisions that can be given effect "
            "without the invalid provision."
        ),
        body("C. The Trustee shall not be required to post bond or other security."),
    ]


def signing(record: TrustRecord) -> list[Paragraph]:
    trustor = _trustor(record)
    executed_on = format_date(record.execution_date, "Execution Date")
    return [
        body(
            "IN WITNESS WHEREOF, I have executed this Trust Agreement on "
            f"{executed_on}."
        ),
        *signature_block(f"{trustor}, Trustor"),
        *signature_block(f"{_trustee(record)}, Initial Trustee"),
        *notarization_block(
            trustor,
            placeholder(record.county, "County"),
            format_date(record.notarization_date, "Date of Notarization"),
            [
                placeholder(record.notary_name, "Notary Name"),
                "Notary Public",
                placeholder(record.notary_address, "Notary Address"),
            ],
        ),
    ]


PROVISIONS = (
    article_creation,
    article_trustee,
    article_property,
    article_lifetime,
    article_after_death,
    article_powers,
    article_revocation,
    article_general,
)


def compose_trust(record: TrustRecord) -> Composition:
    provisions = title_block(record)
    for article in PROVISIONS:
        provisions.extend(article(record))
    return Composition(provisions=provisions, signing=signing(record))
