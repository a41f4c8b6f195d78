"""Catalog of investable instruments with default rates and risk levels.

Rates are annual percentages. Risk scores are on a 0-100 scale, derived
from the instrument's risk level.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class RiskLevel(Enum):
    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    MEDIUM_HIGH = "medium_high"
    HIGH = "high"
    VERY_HIGH = "very_high"


RISK_SCORES: dict[RiskLevel, Decimal] = {
    RiskLevel.VERY_LOW: Decimal("10"),
    RiskLevel.LOW: Decimal("25"),
    RiskLevel.MEDIUM: Decimal("50"),
    RiskLevel.MEDIUM_HIGH: Decimal("65"),
    RiskLevel.HIGH: Decimal("80"),
    RiskLevel.VERY_HIGH: Decimal("95"),
}


@dataclass(frozen=True)
class InstrumentProfile:
    id: str
    name: str
    default_rate_percent: Decimal
    risk_level: RiskLevel
    return_guarantee: int  # 0-100
    description: str
    supports_expense_ratio: bool = False
    default_expense_ratio_percent: Decimal = Decimal("0")

    @property
    def risk_score(self) -> Decimal:
        return RISK_SCORES[self.risk_level]


INVESTMENT_INSTRUMENTS: list[InstrumentProfile] = [
    InstrumentProfile(
        id="fd",
        name="Fixed Deposit",
        default_rate_percent=Decimal("7.0"),
        risk_level=RiskLevel.VERY_LOW,
        return_guarantee=98,
        description="Bank fixed deposits with guaranteed returns",
    ),
    InstrumentProfile(
        id="govt_bonds",
        name="Government Bonds",
        default_rate_percent=Decimal("6.5"),
        risk_level=RiskLevel.LOW,
        return_guarantee=95,
        description="Sovereign bonds backed by government",
    ),
    InstrumentProfile(
        id="corp_bonds",
        name="Corporate Bonds",
        default_rate_percent=Decimal("8.0"),
        risk_level=RiskLevel.MEDIUM,
        return_guarantee=70,
        description="Bonds issued by corporations",
    ),
    InstrumentProfile(
        id="gold",
        name="Gold",
        default_rate_percent=Decimal("8.0"),
        risk_level=RiskLevel.MEDIUM,
        return_guarantee=60,
        description="Physical gold or gold ETFs",
        supports_expense_ratio=True,
        default_expense_ratio_percent=Decimal("0.5"),
    ),
    InstrumentProfile(
        id="mutual_funds",
        name="Mutual Funds / ETF",
        default_rate_percent=Decimal("12.0"),
        risk_level=RiskLevel.MEDIUM_HIGH,
        return_guarantee=50,
        description="Diversified fund investments",
        supports_expense_ratio=True,
        default_expense_ratio_percent=Decimal("1.0"),
    ),
    InstrumentProfile(
        id="equity",
        name="Direct Equity",
        default_rate_percent=Decimal("15.0"),
        risk_level=RiskLevel.HIGH,
        return_guarantee=30,
        description="Individual stock investments",
    ),
]

_BY_ID = {i.id: i for i in INVESTMENT_INSTRUMENTS}


def get_instrument(instrument_id: str) -> InstrumentProfile | None:
    return _BY_ID.get(instrument_id)
