"""CSV export of amortization schedules and display-currency conversion.

Formatting only: engine values are read, never modified.
"""

import csv
import io
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path

from findash.models.loan import ScheduleEntry

TWO_PLACES = Decimal("0.01")

SCHEDULE_COLUMNS = [
    "Month",
    "EMI",
    "Extra Monthly",
    "Bulk Payment",
    "Penalty",
    "Total Payment",
    "Principal",
    "Interest",
    "Balance",
]


def convert_currency(amount: Decimal, rate: Decimal) -> Decimal:
    """Value in the secondary display currency at a fixed rate."""
    return (amount * rate).quantize(TWO_PLACES, ROUND_HALF_UP)


def schedule_header(secondary_currency: str | None = None) -> list[str]:
    if secondary_currency:
        return SCHEDULE_COLUMNS + [f"Balance {secondary_currency}"]
    return list(SCHEDULE_COLUMNS)


def schedule_rows(
    schedule: list[ScheduleEntry],
    secondary_rate: Decimal | None = None,
) -> list[list[str]]:
    rows = []
    for e in schedule:
        row = [
            str(e.month),
            str(e.scheduled_payment),
            str(e.extra_payment),
            str(e.prepayment_amount),
            str(e.penalty_amount),
            str(e.total_payment),
            str(e.principal_component),
            str(e.interest_component),
            str(e.ending_balance),
        ]
        if secondary_rate is not None:
            row.append(str(convert_currency(e.ending_balance, secondary_rate)))
        rows.append(row)
    return rows


def schedule_to_csv(
    schedule: list[ScheduleEntry],
    secondary_currency: str | None = None,
    secondary_rate: Decimal | None = None,
) -> str:
    """Render a schedule as CSV text. The secondary column needs both currency and rate."""
    with_secondary = bool(secondary_currency) and secondary_rate is not None
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(schedule_header(secondary_currency if with_secondary else None))
    writer.writerows(schedule_rows(schedule, secondary_rate if with_secondary else None))
    return buf.getvalue()


def export_schedule_csv(
    path: Path,
    schedule: list[ScheduleEntry],
    secondary_currency: str | None = None,
    secondary_rate: Decimal | None = None,
) -> None:
    path.write_text(schedule_to_csv(schedule, secondary_currency, secondary_rate), encoding="utf-8")
