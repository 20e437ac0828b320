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

"""California Last Will and Testament, article by article.

Each article_* function takes a WillRecord and returns the heading plus the
paragraphs of that article. Blank fields become bracketed placeholders, so
a half-finished record still yields a complete, readable document.

Article numbers are fixed. When the testator has no minor children,
Article VIII (Guardianship) is left out and the next article is still IX.
"""

from __future__ import annotations

from willwisher.handlers.paragraphs import (
    SIGNATURE_RULE,
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
)
from willwisher.models import (
    DigitalAccount,
    DigitalTransfer,
    MaritalStatus,
    WillRecord,
)

EMAIL_PROVIDERS = "Gmail / Yahoo Mail / Microsoft Mail / AOL Mail / iCloud Mail / Other"
SOCIAL_PLATFORMS = (
    "Meta, Instagram / Meta Messenger / TikTok / iMessage / X (Twitter) / "
    "Pinterest / Snapchat / LinkedIn / Reddit / Other"
)
TECH_PLATFORMS = (
    "YouTube / Amazon / eBay / Etsy / Walmart / Netflix / Discord / Go Daddy / Other"
)
WALLET_TYPES = "OISY Wallet / MetaMask / Trust Wallet / Other"
EXCHANGE_PLATFORMS = (
    "Coinbase / Binance / Kraken / Gemini / Crypto.com / Robinhood Crypto / "
    "Bitstamp / Other"
)


def _testator(record: WillRecord) -> str:
    return placeholder(record.testator_name, "Full Legal Name of Testator")


def _bond(waived: bool, role: str) -> Paragraph:
    requirement = "no bond" if waived else "bond"
    return body(
        f"I direct that {requirement} be required of any {role} named herein "
        "to post bond for the faithful performance of their duties."
    )


def title_block(record: WillRecord) -> list[Paragraph]:
    return [
        Paragraph("LAST WILL AND TESTAMENT", Style.TITLE),
        Paragraph("OF", Style.TITLE),
        Paragraph(_testator(record).upper(), Style.SUBTITLE),
    ]


# ── Article I: Declaration ─────────────────────────────────────────────────────


def _marital_clause(record: WillRecord) -> str:
    status = record.marital_status
    if status is None:
        return "I am [single/married/divorced/widowed]."
    clause = f"I am {status.value}"
    spouse = record.spouse_name.strip()
    former = record.former_spouse_name.strip()
    if status is MaritalStatus.MARRIED and spouse:
        clause += f" to {spouse}"
    elif status is MaritalStatus.DIVORCED and former:
        clause += (
            f". My former spouse is {former}, "
            "and our marriage was terminated by divorce"
        )
    elif status is MaritalStatus.WIDOWED and former:
        clause += (
            f". My former spouse was {former}, "
            "and our marriage was terminated by death"
        )
    return clause + "."


def article_declaration(record: WillRecord) -> list[Paragraph]:
    paragraphs = [
        heading(1, "DECLARATION"),
        body(
            f"I, {_testator(record)}, a resident of the State of California, "
            "being of sound mind and memory, and not acting under duress, menace, "
            "fraud, or undue influence, do hereby make, publish, and declare this "
            "to be my Last Will and Testament, revoking all prior wills and "
            "codicils made by me."
        ),
        body(_marital_clause(record)),
    ]

    if not record.has_children:
        paragraphs.append(body("I have no children."))
        return paragraphs

    paragraphs.append(body("I have the following children:"))
    if not record.children:
        for n in (1, 2):
            paragraphs.append(
                item(f"[Full Name of Child {n}], born [Date of Birth of Child {n}]")
            )
        return paragraphs

    for n, child in enumerate(record.children, start=1):
        name = placeholder(child.name, f"Full Name of Child {n}")
        born = format_date(child.birth_date, f"Date of Birth of Child {n}")
        paragraphs.append(item(f"{name}, born {born}"))
    return paragraphs


# ── Article II: Debts and Expenses ─────────────────────────────────────────────


def article_debts(record: WillRecord) -> list[Paragraph]:
    return [
        heading(2, "DEBTS AND EXPENSES"),
        body(
            "I direct that all my legally enforceable debts, funeral expenses, "
            "expenses of last illness and administration of my estate be paid as "
            "soon as practicable after my death."
        ),
    ]


# ── Article III: Residuary Estate ──────────────────────────────────────────────


def article_residuary(record: WillRecord) -> list[Paragraph]:
    paragraphs = [
        heading(3, "RESIDUARY ESTATE"),
        body(
            "I give, devise, and bequeath all my property, both real and personal, "
            "of every kind and nature, and wherever situated, which I may own at "
            'the time of my death (my "residuary estate"), to the following '
            "beneficiaries in the proportions specified:"
        ),
    ]

    shares = record.residuary_beneficiaries
    if not shares:
        for n in (1, 2):
            paragraphs.append(
                item(
                    f"To [Full Name of Residuary Beneficiary {n}], "
                    "[Your Relationship], [%] of my estate."
                )
            )
    for n, share in enumerate(shares, start=1):
        name = placeholder(share.beneficiary, f"Full Name of Residuary Beneficiary {n}")
        relation = placeholder(share.relation, "Your Relationship")
        paragraphs.append(
            item(
                f"To {name}, {relation}, "
                f"{format_percentage(share.percentage)} of my estate."
            )
        )

    paragraphs.append(
        body(
            "If any beneficiary named above does not survive me by the California "
            "default 120 hours (5 days), that beneficiary's share shall be "
            "distributed equally among the surviving beneficiaries named above."
        )
    )
    return paragraphs


# ── Article IV: Specific Bequests ──────────────────────────────────────────────


def article_bequests(record: WillRecord) -> list[Paragraph]:
    paragraphs = [heading(4, "SPECIFIC BEQUESTS")]

    for n, bequest in enumerate(record.real_property_bequests, start=1):
        address = placeholder(
            bequest.address, f"Address or Legal Description of Property {n}"
        )
        beneficiary = placeholder(bequest.beneficiary, f"Full Name of Beneficiary {n}")
        paragraphs.append(
            body(
                f"I give my real property located at {address} to {beneficiary}, "
                "subject to any encumbrances or liens existing at the time of my "
                "death."
            )
        )

    for n, bequest in enumerate(record.personal_property_bequests, start=1):
        description = placeholder(bequest.description, f"Description of Property {n}")
        beneficiary = placeholder(
            bequest.beneficiary, f"Full Name of Specific Beneficiary {n}"
        )
        alternate = placeholder(
            bequest.alternate_beneficiary, f"Full Name of Alternate Beneficiary {n}"
        )
        paragraphs.append(
            body(
                f"I give {description} to {beneficiary}. If {beneficiary} does not "
                f"survive me, this bequest shall go to {alternate}. If any "
                "beneficiary named in this section predeceases me, the gift to that "
                "beneficiary shall lapse and become part of my residuary estate "
                "unless otherwise specified."
            )
        )

    if len(paragraphs) == 1:
        paragraphs.append(body("No specific bequests have been designated."))
    return paragraphs


# ── Article V: Digital Assets ──────────────────────────────────────────────────


def _account_line(account: DigitalAccount, name_token: str, provider_token: str) -> str:
    name = placeholder(account.name, name_token)
    provider = placeholder(account.provider, provider_token)
    action = account.action.value if account.action else "[closed / maintained]"
    return f"{name}, {provider}, should be {action}"


def _transfer_line(asset: DigitalTransfer, name_token: str, provider_token: str) -> str:
    name = placeholder(asset.name, name_token)
    provider = placeholder(asset.provider, provider_token)
    beneficiary = placeholder(asset.beneficiary, "Digital Assets Beneficiary")
    return f"{name}, {provider}, shall be transferred to {beneficiary}"


def article_digital_assets(record: WillRecord) -> list[Paragraph]:
    assets = record.digital_assets
    executor = placeholder(assets.digital_executor, "Full Name of Digital Executor")
    successor = placeholder(
        assets.successor_digital_executor, "Full Name of Successor Digital Executor"
    )

    paragraphs = [
        heading(5, "DIGITAL ASSETS"),
        body(
            f"I hereby nominate and appoint {executor} as my Digital Executor to "
            f"manage my digital assets. If {executor} is unable or unwilling to "
            f"serve, I nominate {successor} as my successor Digital Executor."
        ),
        body(
            '"Digital Assets" include, without limitation, emails, social media, '
            "cloud, server, domain names, electronic files, and cryptocurrencies, "
            "regardless of their storage medium or location. I direct that the "
            "following Digital Assets be handled as follows:"
        ),
        body(
            "The Digital Executor is authorized to access, manage, control, "
            "transfer, or close Digital Assets to the extent permitted by law and "
            "provider terms. The Executor may request usernames, passwords, and "
            "decryption keys and may seek court orders, if necessary, under the "
            "Revised Uniform Fiduciary Access to Digital Assets Act (Cal. Prob. "
            "Code §§870–884). This grant does not require the Executor to violate "
            "applicable Terms of Service or criminal law; where access requires "
            "additional legal process, the Digital Executor may seek court "
            "authority. For cryptocurrency or private keys, the Testator expressly "
            "authorizes transfer of private keys and cryptocurrency to the Digital "
            "Executor."
        ),
        body("DIGITAL ASSETS TO BE CLOSED OR MAINTAINED:"),
    ]
    for account in assets.email_accounts:
        paragraphs.append(
            item(_account_line(account, "Email Account Name", EMAIL_PROVIDERS))
        )
    for account in assets.social_accounts:
        paragraphs.append(
            item(_account_line(account, "Social Account Name", SOCIAL_PLATFORMS))
        )
    for account in assets.tech_accounts:
        paragraphs.append(
            item(_account_line(account, "Tech Account Name", TECH_PLATFORMS))
        )

    paragraphs.append(body("DIGITAL ASSETS TO BE TRANSFERRED TO A SPECIFIC BENEFICIARY:"))
    for wallet in assets.crypto_wallets:
        paragraphs.append(item(_transfer_line(wallet, "Crypto Wallet Name", WALLET_TYPES)))
    for exchange in assets.crypto_exchanges:
        paragraphs.append(
            item(_transfer_line(exchange, "Crypto Exchange Name", EXCHANGE_PLATFORMS))
        )
    return paragraphs


# ── Article VI: Funeral and Burial Instructions ────────────────────────────────


def article_funeral(record: WillRecord) -> list[Paragraph]:
    funeral = record.funeral
    disposition = (
        funeral.remains_disposition.value
        if funeral.remains_disposition
        else "[Cremated/Buried]"
    )
    location = placeholder(funeral.location, "Buried Location")
    if funeral.memorial_service_held is None:
        service = "[held/not held]"
    else:
        service = "held" if funeral.memorial_service_held else "not held"
    representative = placeholder(
        funeral.representative, "Full Name of Funeral Representative"
    )
    alternate = placeholder(
        funeral.alternate_representative,
        "Full Name of Alternative Funeral Representative",
    )
    return [
        heading(6, "FUNERAL AND BURIAL INSTRUCTIONS"),
        body(
            f"I direct that my remains be {disposition} at {location}. A funeral "
            f"or memorial service shall be {service} as per my written or verbal "
            f"instructions provided to my Executor. I nominate {representative} as "
            "the individual responsible for arranging my funeral and burial "
            f"services. If {representative} is unable or unwilling to serve, I "
            f"nominate {alternate} as a substitute."
        ),
    ]


# ── Article VII: Executor ──────────────────────────────────────────────────────


def article_executor(record: WillRecord) -> list[Paragraph]:
    primary = placeholder(record.primary_executor, "Full Name of Primary Executor")
    successor = placeholder(record.successor_executor, "Full Name of Successor Executor")
    return [
        heading(7, "EXECUTOR"),
        body(
            f"I hereby nominate and appoint {primary} as the Executor of this "
            f"Will. If {primary} is unable or unwilling to serve, I nominate "
            f"{successor} as Successor Executor."
        ),
        body(
            "I grant to my Executor full power and authority to sell, transfer, "
            "and convey any and all property, real or personal, at public or "
            "private sale, with or without notice, and to execute and deliver any "
            "and all deeds, assignments, and other instruments necessary to carry "
            "out the provisions of this Will."
        ),
        _bond(record.executor_bond_waived, "Executor"),
    ]


# ── Article VIII: Guardianship ─────────────────────────────────────────────────


def article_guardianship(record: WillRecord) -> list[Paragraph]:
    """Empty when the testator has no minor children (no heading either)."""
    if not record.has_minor_children:
        return []
    primary = placeholder(record.primary_guardian, "Full Name of Primary Guardian")
    successor = placeholder(record.successor_guardian, "Full Name of Successor Guardian")
    return [
        heading(8, "GUARDIANSHIP"),
        body(
            "If I have any minor children at the time of my death, I nominate "
            f"{primary} to serve as Guardian of the person and estate of my minor "
            f"children. If {primary} is unable or unwilling to serve, I nominate "
            f"{successor} as Successor Guardian."
        ),
        _bond(record.guardian_bond_waived, "Guardian"),
    ]


# ── Article IX: Miscellaneous Provisions ───────────────────────────────────────


def article_miscellaneous(record: WillRecord) -> list[Paragraph]:
    return [
        heading(9, "MISCELLANEOUS PROVISIONS"),
        body(
            "No Contest: If any person contests or attempts to invalidate any "
            "provision of this Will without probable cause, such person shall "
            "forfeit any interest in my estate."
        ),
        body(
            "Simultaneous Death: If any beneficiary and I die under circumstances "
            "where the order of death cannot be determined, it shall be presumed "
            "that I survived the beneficiary."
        ),
        body(
            "Severability Clause: If any provision of this Will is determined to "
            "be invalid or unenforceable, the remaining provisions shall remain in "
            "full force and effect."
        ),
        body(
            "Governing Law: This Will shall be governed by the laws of the State "
            "of California."
        ),
    ]


# ── Article X: Attestation ─────────────────────────────────────────────────────


def _witness_block(n: int, name: str) -> list[Paragraph]:
    printed = placeholder(name, f"Full Name of Witness {n}")
    return [
        Paragraph(f"Witness {n}: {SIGNATURE_RULE}", Style.SIGNATURE_LINE),
        Paragraph(f"Name: {printed}", Style.SIGNATURE_LINE),
        Paragraph(f"Address: {SIGNATURE_RULE}", Style.SIGNATURE_LINE),
    ]


def article_attestation(record: WillRecord) -> list[Paragraph]:
    attestation = record.attestation
    testator = _testator(record)
    executed_on = format_date(attestation.execution_date, "Execution Date")
    city = placeholder(attestation.execution_city, "Execution City")

    paragraphs = [
        heading(10, "ATTESTATION"),
        body(
            "I declare that this document is my Last Will and Testament. I sign it "
            "knowingly and voluntarily, in the presence of the witnesses below."
        ),
        body(f"Executed on {executed_on}, at {city}, California."),
        Paragraph(f"Signature of Testator: {SIGNATURE_RULE}", Style.SIGNATURE_LINE),
        Paragraph(f"Printed Name of Testator: {testator}", Style.SIGNATURE_LINE),
        Paragraph("WITNESSES' ATTESTATION", Style.SECTION_HEADING),
        body("We, the undersigned, declare:"),
        body("The Testator signed this Will in our presence."),
        body(
            "We signed as witnesses in the presence of the Testator and each other."
        ),
    ]
    for n, witness in enumerate(record.witnesses, start=1):
        paragraphs.extend(_witness_block(n, witness))

    paragraphs.extend(
        notarization_block(
            testator,
            placeholder(attestation.county, "County"),
            format_date(attestation.notarization_date, "Date of Notarization"),
            [
                placeholder(attestation.notary_name, "Notary Name"),
                placeholder(attestation.notary_address, "Notary Address"),
            ],
        )
    )
    return paragraphs


PROVISIONS = (
    article_declaration,
    article_debts,
    article_residuary,
    article_bequests,
    article_digital_assets,
    article_funeral,
    article_executor,
    article_guardianship,
    article_miscellaneous,
)


def compose_will(record: WillRecord) -> Composition:
    provisions = title_block(record)
    for article in PROVISIONS:
        provisions.extend(article(record))
    return Composition(provisions=provisions, signing=article_attestation(record))
