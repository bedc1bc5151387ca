"""Money-laundering risk categories reported by the AML authority."""

from __future__ import annotations

from enum import StrEnum


class Category(StrEnum):
    """Closed set of AML risk categories.

    Values are the canonical names used in the JSON form. Declaration order
    is the iteration order and the tag written by the binary codec, so new
    members go at the end.
    """

    # Applies to every category without its own threshold.
    ALL = "All"
    # The authority has no record for the address.
    NONE = "None"
    # Custodial or mixed wallets
    WALLET_SERVICE = "WalletService"
    MERCHANT_SERVICE = "MerchantService"
    MINING_POOL = "MiningPool"
    EXCHANGE = "Exchange"
    DEFI = "DeFi"
    OTC_BROKER = "OTCBroker"
    # Cryptocurrency ATM
    ATM = "ATM"
    GAMBLING = "Gambling"
    ILLICIT_ORGANIZATION = "IllicitOrganization"
    MIXER = "Mixer"
    # Darknet market or service
    DARKNET_SERVICE = "DarknetService"
    SCAM = "Scam"
    RANSOMWARE = "Ransomware"
    # Stolen funds
    THEFT = "Theft"
    # Fake assets
    COUNTERFEIT = "Counterfeit"
    TERRORIST_FINANCING = "TerroristFinancing"
    SANCTIONS = "Sanctions"
    CHILD_ABUSE = "ChildAbuse"

    @property
    def discriminant(self) -> int:
        """Position of the member in declaration order."""
        return _DISCRIMINANTS[self]

    @classmethod
    def from_discriminant(cls, tag: int) -> Category:
        if isinstance(tag, bool) or not isinstance(tag, int) or not 0 <= tag < len(_MEMBERS):
            raise ValueError(f"Unknown category discriminant: {tag!r}")
        return _MEMBERS[tag]


_MEMBERS: tuple[Category, ...] = tuple(Category)
_DISCRIMINANTS: dict[Category, int] = {member: index for index, member in enumerate(_MEMBERS)}
