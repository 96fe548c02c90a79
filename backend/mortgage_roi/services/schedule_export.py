"""Export the monthly schedule as a DataFrame or an Excel workbook."""
from __future__ import annotations

import logging
from io import BytesIO

import pandas as pd

from mortgage_roi.models.schedule import ScheduleResult, ScheduleRow

logger = logging.getLogger(__name__)

SHEET_NAME = "Schedule"

_COLUMN_TITLES: dict[str, str] = {
    "month": "Month",
    "payment_a": "{a} payment",
    "payment_b": "{b} payment",
    "principal_paid_a": "{a} principal",
    "principal_paid_b": "{b} principal",
    "interest_paid_a": "{a} interest",
    "interest_paid_b": "{b} interest",
    "pmi_paid_a": "{a} PMI",
    "pmi_paid_b": "{b} PMI",
    "balance_a": "{a} balance",
    "balance_b": "{b} balance",
    "delta_sum": "Cumulative payment delta",
    "interest_delta_sum": "Cumulative interest saved",
    "portfolio_value": "{a} portfolio value",
    "portfolio_gain": "{a} portfolio gain",
    "portfolio_value_alt": "{b} portfolio value",
    "portfolio_gain_alt": "{b} portfolio gain",
    "break_even_rate": "Break-even return (%)",
    "break_even_label": "Break-even return",
}


def schedule_frame(schedule: ScheduleResult) -> pd.DataFrame:
    """One row per month; undefined values become NaN."""
    columns = list(ScheduleRow.model_fields)
    records = [row.model_dump() for row in schedule.rows]
    return pd.DataFrame.from_records(records, columns=columns)


def export_schedule_xlsx(
    schedule: ScheduleResult, label_a: str = "Option 1", label_b: str = "Option 2",
) -> bytes:
    """Write the schedule to a single-sheet .xlsx workbook and return its bytes."""
    titles = {
        key: title.format(a=label_a or "Option 1", b=label_b or "Option 2")
        for key, title in _COLUMN_TITLES.items()
    }
    df = schedule_frame(schedule).rename(columns=titles)

    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)

    logger.info("Exported schedule — %d rows", len(df))
    return buf.getvalue()
