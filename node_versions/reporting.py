"""
Reporting and export utilities.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from .versions import NodeVersions


logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "csv", "xlsx")


def build_status_frame(
    nv: NodeVersions, identifiers: Iterable[str], camel_case: bool = False
) -> pd.DataFrame:
    """One row per version with every lifecycle predicate as a column."""
    rows = []
    for identifier in identifiers:
        row = {"version": identifier}
        row.update(nv.classify(identifier).to_dict(camel_case=camel_case))
        rows.append(row)
    frame = pd.DataFrame(rows)
    if frame.empty:
        frame = pd.DataFrame(columns=["version"])
    return frame


def print_summary(frame: pd.DataFrame, now) -> None:
    logger.info("=" * 60)
    logger.info("VERSION STATUS AT %s", now.date())
    logger.info("=" * 60)
    for record in frame.to_dict(orient="records"):
        flags = [key for key, value in record.items() if key != "version" and bool(value)]
        logger.info("%s: %s", record["version"], ", ".join(flags) or "-")
    logger.info("=" * 60)


def save_status_json(frame: pd.DataFrame, output_dir: Path, name: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    results_file = output_dir / f"{name}_status.json"
    records = {
        record.pop("version"): record for record in frame.to_dict(orient="records")
    }
    with open(results_file, 'w') as f:
        json.dump(records, f, indent=2, default=bool)
    return results_file


def export_status_csv(frame: pd.DataFrame, output_dir: Path, name: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_file = output_dir / f"{name}_status.csv"
    frame.to_csv(csv_file, index=False)
    return csv_file


def export_status_worksheet(frame: pd.DataFrame, output_dir: Path, name: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    excel_file = output_dir / f"{name}_status.xlsx"
    with pd.ExcelWriter(excel_file, engine='openpyxl') as writer:
        # Excel sheet names have a 31 character limit
        frame.to_excel(writer, sheet_name=name[:31] or "status", index=False)
    return excel_file


def export_status(frame: pd.DataFrame, output_dir: Path, name: str, fmt: str) -> Path:
    if fmt == "json":
        return save_status_json(frame, output_dir, name)
    if fmt == "csv":
        return export_status_csv(frame, output_dir, name)
    if fmt == "xlsx":
        return export_status_worksheet(frame, output_dir, name)
    raise ValueError(f"Unsupported export format: {fmt}")
