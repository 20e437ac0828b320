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

"""Built-in fictional personas for sample documents.

Each persona is a complete record, so a sample export shows every article
filled in. The builders return a fresh record on every call.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from willwisher.models import (
    AccountAction,
    Attestation,
    Child,
    DigitalAccount,
    DigitalAssets,
    DigitalTransfer,
    DocumentKind,
    FuneralInstructions,
    MaritalStatus,
    PersonalPropertyBequest,
    RealPropertyBequest,
    RemainsDisposition,
    ResiduaryShare,
    TrustAsset,
    TrustBeneficiary,
    TrustRecord,
    WillRecord,
)

CLOSED = AccountAction.CLOSED
MAINTAINED = AccountAction.MAINTAINED


def jane_smith() -> WillRecord:
    """Married, two minor children, bonds waived."""
    return WillRecord(
        testator_name="Jane Elizabeth Smith",
        marital_status=MaritalStatus.MARRIED,
        spouse_name="Robert James Smith",
        has_children=True,
        children=[
            Child(name="Emily Rose Smith", birth_date=date(2010, 6, 12)),
            Child(name="Thomas William Smith", birth_date=date(2012, 9, 8)),
        ],
        has_minor_children=True,
        residuary_beneficiaries=[
            ResiduaryShare(beneficiary="Robert James Smith", relation="spouse", percentage=60),
            ResiduaryShare(
                beneficiary="Emily Rose Smith and Thomas William Smith",
                relation="children",
                percentage=40,
            ),
        ],
        real_property_bequests=[
            RealPropertyBequest(
                address="123 Main Street, Los Angeles, CA 90210",
                beneficiary="Emily Rose Smith",
            ),
            RealPropertyBequest(
                address="456 Beach Drive, Malibu, CA 90265",
                beneficiary="Thomas William Smith",
            ),
        ],
        personal_property_bequests=[
            PersonalPropertyBequest(
                description="my grandmother's diamond ring",
                beneficiary="Emily Rose Smith",
                alternate_beneficiary="Thomas William Smith",
            ),
            PersonalPropertyBequest(
                description="my collection of first-edition books",
                beneficiary="Los Angeles Public Library",
                alternate_beneficiary="Thomas William Smith",
            ),
            PersonalPropertyBequest(
                description="the sum of $10,000",
                beneficiary="American Red Cross",
                alternate_beneficiary="Robert James Smith",
            ),
        ],
        digital_assets=DigitalAssets(
            digital_executor="Robert James Smith",
            successor_digital_executor="Sarah Michelle Johnson",
            email_accounts=[
                DigitalAccount(name="jane.smith@gmail.com", provider="Gmail", action=CLOSED),
                DigitalAccount(
                    name="jane.smith@yahoo.com", provider="Yahoo Mail", action=MAINTAINED
                ),
            ],
            social_accounts=[
                DigitalAccount(
                    name="Jane Smith Facebook", provider="Meta, Instagram", action=CLOSED
                ),
                DigitalAccount(name="@janesmith", provider="X (Twitter)", action=MAINTAINED),
            ],
            tech_accounts=[
                DigitalAccount(name="Jane Smith YouTube", provider="YouTube", action=MAINTAINED),
                DigitalAccount(name="Jane Smith Amazon", provider="Amazon", action=CLOSED),
            ],
            crypto_wallets=[
                DigitalTransfer(
                    name="Jane Main Wallet", provider="MetaMask", beneficiary="Robert James Smith"
                ),
                DigitalTransfer(
                    name="Jane Savings Wallet",
                    provider="Trust Wallet",
                    beneficiary="Emily Rose Smith",
                ),
            ],
            crypto_exchanges=[
                DigitalTransfer(
                    name="Jane Coinbase Account",
                    provider="Coinbase",
                    beneficiary="Robert James Smith",
                ),
                DigitalTransfer(
                    name="Jane Binance Account",
                    provider="Binance",
                    beneficiary="Thomas William Smith",
                ),
            ],
        ),
        funeral=FuneralInstructions(
            remains_disposition=RemainsDisposition.CREMATED,
            location="Forest Lawn Memorial Park, Los Angeles, CA",
            memorial_service_held=True,
            representative="Robert James Smith",
            alternate_representative="Sarah Michelle Johnson",
        ),
        primary_executor="Robert James Smith",
        successor_executor="Sarah Michelle Johnson",
        executor_bond_waived=True,
        primary_guardian="Sarah Michelle Johnson",
        successor_guardian="Michael David Smith",
        guardian_bond_waived=True,
        witnesses=["Robert Charles Wilson", "Maria Elena Rodriguez"],
        attestation=Attestation(
            execution_date=date(2024, 3, 15),
            execution_city="Los Angeles",
            county="Los Angeles",
            notarization_date=date(2024, 3, 15),
            notary_name="Maria Elena Rodriguez",
            notary_address="1234 Notary Street, Los Angeles, CA 90210",
        ),
        completion_percentage=100,
    )


def michael_rodriguez() -> WillRecord:
    """Single, no children, executor bond required."""
    return WillRecord(
        testator_name="Michael Anthony Rodriguez",
        marital_status=MaritalStatus.SINGLE,
        residuary_beneficiaries=[
            ResiduaryShare(beneficiary="Maria Elena Rodriguez", relation="sister", percentage=50),
            ResiduaryShare(
                beneficiary="Carlos Miguel Rodriguez", relation="brother", percentage=30
            ),
            ResiduaryShare(
                beneficiary="San Francisco Music Conservatory",
                relation="charitable organization",
                percentage=20,
            ),
        ],
        real_property_bequests=[
            RealPropertyBequest(
                address="789 Valencia Street, San Francisco, CA 94110",
                beneficiary="Maria Elena Rodriguez",
            ),
        ],
        personal_property_bequests=[
            PersonalPropertyBequest(
                description="my vintage guitar collection",
                beneficiary="San Francisco Music Conservatory",
                alternate_beneficiary="Diego Rodriguez",
            ),
            PersonalPropertyBequest(
                description="my art collection",
                beneficiary="Diego Rodriguez",
                alternate_beneficiary="Maria Elena Rodriguez",
            ),
            PersonalPropertyBequest(
                description="the sum of $25,000",
                beneficiary="SPCA of San Francisco",
                alternate_beneficiary="Carlos Miguel Rodriguez",
            ),
        ],
        digital_assets=DigitalAssets(
            digital_executor="Maria Elena Rodriguez",
            successor_digital_executor="Carlos Miguel Rodriguez",
            email_accounts=[
                DigitalAccount(
                    name="michael.rodriguez@gmail.com", provider="Gmail", action=MAINTAINED
                ),
                DigitalAccount(name="mike@icloud.com", provider="iCloud Mail", action=CLOSED),
            ],
            social_accounts=[
                DigitalAccount(
                    name="@michaelrodriguezart", provider="Meta, Instagram", action=MAINTAINED
                ),
                DigitalAccount(name="Michael Rodriguez", provider="LinkedIn", action=MAINTAINED),
            ],
            tech_accounts=[
                DigitalAccount(name="Michael Rodriguez", provider="YouTube", action=MAINTAINED),
                DigitalAccount(name="MichaelR_SF", provider="Netflix", action=CLOSED),
            ],
            crypto_wallets=[
                DigitalTransfer(
                    name="Michael Main BTC",
                    provider="OISY Wallet",
                    beneficiary="Maria Elena Rodriguez",
                ),
            ],
            crypto_exchanges=[
                DigitalTransfer(
                    name="Michael Kraken",
                    provider="Kraken",
                    beneficiary="Carlos Miguel Rodriguez",
                ),
            ],
        ),
        funeral=FuneralInstructions(
            remains_disposition=RemainsDisposition.BURIED,
            location="Colma Cemetery, Colma, CA",
            memorial_service_held=True,
            representative="Maria Elena Rodriguez",
            alternate_representative="Carlos Miguel Rodriguez",
        ),
        primary_executor="Maria Elena Rodriguez",
        successor_executor="Carlos Miguel Rodriguez",
        witnesses=["Jennifer Marie Williams", "Robert Charles Wilson"],
        attestation=Attestation(
            execution_date=date(2024, 8, 22),
            execution_city="San Francisco",
            county="San Francisco",
            notarization_date=date(2024, 8, 22),
            notary_name="Jennifer Marie Williams",
            notary_address="567 Notary Avenue, San Francisco, CA 94103",
        ),
        completion_percentage=100,
    )


def patricia_williams() -> WillRecord:
    """Divorced, adult children, no real property."""
    return WillRecord(
        testator_name="Patricia Ann Williams",
        marital_status=MaritalStatus.DIVORCED,
        former_spouse_name="Mark Steven Williams",
        has_children=True,
        children=[
            Child(name="Jennifer Marie Williams", birth_date=date(2008, 4, 3)),
            Child(name="Robert Paul Williams", birth_date=date(2011, 11, 15)),
        ],
        residuary_beneficiaries=[
            ResiduaryShare(
                beneficiary="Jennifer Marie Williams", relation="daughter", percentage=50
            ),
            ResiduaryShare(beneficiary="Robert Paul Williams", relation="son", percentage=50),
        ],
        personal_property_bequests=[
            PersonalPropertyBequest(
                description="my jewelry collection",
                beneficiary="Jennifer Marie Williams",
                alternate_beneficiary="Robert Paul Williams",
            ),
            PersonalPropertyBequest(
                description="my beach house furniture",
                beneficiary="Robert Paul Williams",
                alternate_beneficiary="Jennifer Marie Williams",
            ),
            PersonalPropertyBequest(
                description="the sum of $15,000",
                beneficiary="Orange County Food Bank",
                alternate_beneficiary="Jennifer Marie Williams",
            ),
        ],
        digital_assets=DigitalAssets(
            digital_executor="Jennifer Marie Williams",
            successor_digital_executor="Susan Carol Thompson",
            email_accounts=[
                DigitalAccount(
                    name="patricia.williams@yahoo.com", provider="Yahoo Mail", action=CLOSED
                ),
            ],
            social_accounts=[
                DigitalAccount(name="Patricia Williams", provider="LinkedIn", action=MAINTAINED),
                DigitalAccount(name="PatriciaW_OC", provider="Pinterest", action=CLOSED),
            ],
            tech_accounts=[
                DigitalAccount(name="Patricia Williams", provider="Amazon", action=MAINTAINED),
            ],
            crypto_wallets=[
                DigitalTransfer(
                    name="Patricia DOGE Wallet",
                    provider="Trust Wallet",
                    beneficiary="Robert Paul Williams",
                ),
            ],
            crypto_exchanges=[
                DigitalTransfer(
                    name="Patricia Robinhood",
                    provider="Robinhood Crypto",
                    beneficiary="Jennifer Marie Williams",
                ),
            ],
        ),
        funeral=FuneralInstructions(
            remains_disposition=RemainsDisposition.CREMATED,
            location="Pacific View Memorial Park, Newport Beach, CA",
            memorial_service_held=False,
            representative="Jennifer Marie Williams",
            alternate_representative="Susan Carol Thompson",
        ),
        primary_executor="Jennifer Marie Williams",
        successor_executor="Robert Paul Williams",
        executor_bond_waived=True,
        witnesses=["Maria Elena Rodriguez", "Robert Charles Wilson"],
        attestation=Attestation(
            execution_date=date(2024, 11, 8),
            execution_city="Newport Beach",
            county="Orange",
            notarization_date=date(2024, 11, 8),
            notary_name="Harold Eugene Thompson",
            notary_address="890 Legal Plaza, Newport Beach, CA 92660",
        ),
        completion_percentage=100,
    )


def sarah_johnson_trust() -> TrustRecord:
    return TrustRecord(
        trustor_name="Sarah Elizabeth Johnson",
        trust_name="The Sarah E. Johnson Revocable Living Trust",
        trustee_name="Sarah Elizabeth Johnson",
        successor_trustee_name="Michael Robert Johnson",
        trust_assets=[
            TrustAsset(
                asset_type="Real Estate",
                description="Primary residence at 1234 Oak Street, Sacramento, CA 95814",
            ),
            TrustAsset(
                asset_type="Bank Account",
                description="Wells Fargo Checking Account #1234567890",
            ),
            TrustAsset(
                asset_type="Investment Account",
                description="Fidelity Investment Account #9876543210",
            ),
            TrustAsset(
                asset_type="Personal Property",
                description="All household furnishings, artwork, and personal effects",
            ),
        ],
        beneficiaries=[
            TrustBeneficiary(name="Emily Rose Johnson", percentage=50),
            TrustBeneficiary(name="James Michael Johnson", percentage=50),
        ],
        distribution_terms=(
            "Upon my death, distribute all trust assets equally to my children "
            "Emily Rose Johnson and James Michael Johnson. If either child "
            "predeceases me, their share shall go to their surviving children, or "
            "if none, to the surviving child."
        ),
        completion_percentage=100,
    )


# First entry of each kind is the default persona.
PERSONAS: dict[DocumentKind, dict[str, Callable[[], WillRecord | TrustRecord]]] = {
    DocumentKind.WILL: {
        "jane-smith": jane_smith,
        "michael-rodriguez": michael_rodriguez,
        "patricia-williams": patricia_williams,
    },
    DocumentKind.TRUST: {
        "sarah-johnson": sarah_johnson_trust,
    },
}


def persona_names(kind: DocumentKind) -> list[str]:
    return list(PERSONAS[kind])


def sample_record(kind: DocumentKind, persona: str = "") -> WillRecord | TrustRecord:
    """Return a fresh record for *persona*, or the default persona of *kind*.

    Raises ValueError for a persona name that does not exist for *kind*.
    """
    builders = PERSONAS[kind]
    if not persona:
        return next(iter(builders.values()))()
    try:
        return builders[persona]()
    except KeyError:
        valid = ", ".join(builders)
        raise ValueError(
            f"Unknown {kind.value} persona {persona!r}. Must be one of: {valid}"
        ) from None
