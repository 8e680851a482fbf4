"""Tabular rendering of sizing reports."""

from pathlib import Path

import pandas as pd

from . import logger
from .models import SizingReport

NOT_FOUND = "NOT FOUND"
MISSING = "-"


def design_label(design_temp: float) -> str:
    return f"Btu@{design_temp:g} max"


def equipment_frame(report: SizingReport) -> pd.DataFrame:
    """
    Build the equipment table with unformatted values.

    Resolved models come first in model-number order, followed by the
    unresolved identifiers marked NOT FOUND.
    """
    design_column = design_label(report.design_temp)
    rows = [
        {
            'Model': row.model_number,
            'Qty': row.quantity,
            'AHRI#': str(row.ahri_number) if row.ahri_number is not None else MISSING,
            'Btu@95 min': row.btu_95_min,
            design_column: row.btu_design_max,
        }
        for row in report.resolved
    ]
    rows.extend(
        {
            'Model': row.identifier,
            'Qty': row.quantity,
            'AHRI#': NOT_FOUND,
            'Btu@95 min': MISSING,
            design_column: MISSING,
        }
        for row in report.unresolved
    )
    return pd.DataFrame(rows, columns=['Model', 'Qty', 'AHRI#', 'Btu@95 min', design_column])


def summary_frame(report: SizingReport) -> pd.DataFrame:
    totals = report.totals
    return pd.DataFrame(
        [
            ('Btu @95 min', totals.btu_95_min),
            ('Btu @5  max', totals.btu_5_max),
            ('Btu @17 max', totals.btu_17_max),
            ('Btu @17 rated', totals.btu_17_rated),
            (f"Btu @{report.design_temp:g} max", totals.btu_design_max),
            ('Design Temp', report.design_temp),
        ],
        columns=['Total', 'Value'],
    )


def format_capacities(df: pd.DataFrame) -> pd.DataFrame:
    """Round every numeric capacity cell to whole Btu for display."""
    df_formatted = df.copy()
    for col in df_formatted.columns:
        if col in ('Model', 'Qty', 'AHRI#', 'Total'):
            continue
        df_formatted[col] = df_formatted[col].apply(
            lambda x: f"{x:.0f}" if isinstance(x, (int, float)) and pd.notna(x) else x
        )
    return df_formatted


def render_recommendation(report: SizingReport) -> str:
    band = report.recommendation
    return f"recommend range: {band.min:.0f} - {band.mid:.0f} - {band.max:.0f}"


def render_report(report: SizingReport) -> str:
    """Render the equipment table, the totals summary and the recommendation line."""
    equipment = format_capacities(equipment_frame(report))
    summary = format_capacities(summary_frame(report))
    summary.loc[summary['Total'] == 'Design Temp', 'Value'] = f"{report.design_temp:g}"
    return "\n\n".join([
        equipment.to_string(index=False),
        summary.to_string(index=False, header=False),
        render_recommendation(report),
    ])


def write_report_csv(report: SizingReport, output_path: Path) -> None:
    """Write the unformatted equipment table to ``output_path``."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    equipment_frame(report).to_csv(output_path, index=False)
    logger.info("Wrote %s equipment rows to %s", len(report.resolved) + len(report.unresolved), output_path)
