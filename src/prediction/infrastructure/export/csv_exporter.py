"""
Exports the knowledge base to CSV for offline analysis.
"""
import logging
import os
from typing import List

import pandas as pd

from ...domain.entities import HistoricalIncident
from ..persistence.codec import to_record

logger = logging.getLogger(__name__)


def incidents_to_frame(incidents: List[HistoricalIncident]) -> pd.DataFrame:
    """One row per incident, enums as stable codes, sorted by timestamp."""
    rows = [to_record(i).model_dump(mode="json") for i in incidents]
    df = pd.DataFrame(rows, columns=list(_COLUMNS))
    if not df.empty:
        df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True, format="ISO8601")
        df["duration_minutes"] = (df["duration"] / 60.0).round(1)
        df = df.sort_values(by="timestamp").reset_index(drop=True)
    return df


def export_incidents_csv(incidents: List[HistoricalIncident], output_file: str) -> int:
    df = incidents_to_frame(incidents)
    directory = os.path.dirname(output_file)
    if directory:
        os.makedirs(directory, exist_ok=True)
    df.to_csv(output_file, index=False)
    logger.info(f"Exported {len(df)} incidents to {output_file}")
    return len(df)


_COLUMNS = (
    "id", "timestamp", "transport_type", "route", "location", "duration", "reason",
    "severity", "weather_condition", "day_of_week", "hour_of_day", "passenger_load",
    "is_holiday", "description",
)
