"""
Report Generator for traced solves and method comparisons.

Provides:
- pandas tables for a single trace and for the method ranking
- an Excel workbook (summary, ranking, one trace sheet per method)
- a Markdown summary for the console
"""

import io
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
import xlsxwriter

from .comparison import ComparisonResult
from .trace import SolveResult, Step


def _format_rows(step: Step) -> str:
    return ", ".join(str(r) for r in step.highlights.rows)


def _format_cells(step: Step) -> str:
    return ", ".join(f"({r},{c})" for r, c in step.highlights.cells)


def trace_to_dataframe(result: SolveResult) -> pd.DataFrame:
    """
    Flatten a trace into one row per step.

    Direct traces list the working right-hand side (``b1..bn``); iterative
    traces list the current iterate (``x1..xn``) and the latest error.
    """
    n = len(result.solution)
    records: List[Dict[str, Any]] = []
    for index, step in enumerate(result.steps, 1):
        record: Dict[str, Any] = {
            "Step": index,
            "Description": step.description,
            "Active rows": _format_rows(step),
            "Active cells": _format_cells(step),
        }
        if result.is_iterative:
            x_current = step.x_current or [0.0] * n
            for i, value in enumerate(x_current):
                record[f"x{i + 1}"] = value
            history = step.error_history or []
            record["Error"] = history[-1] if history else None
        else:
            for i, value in enumerate(step.vector):
                record[f"b{i + 1}"] = value
        records.append(record)
    return pd.DataFrame.from_records(records)


def ranking_to_dataframe(comparison: ComparisonResult) -> pd.DataFrame:
    """Return the ranking table shown next to the recommendation."""
    records = []
    for position, item in enumerate(comparison.ranking(), 1):
        metric = item.metric
        if metric.is_direct:
            status = "Direct"
        else:
            status = "Converged" if metric.converged else "No Conv."
        records.append({
            "Rank": position,
            "Method": metric.name,
            "Key": metric.key,
            "Type": "Direct" if metric.is_direct else "Iterative",
            "Steps": metric.steps,
            "Status": status,
            "Efficiency": metric.efficiency,
            "Complexity": metric.time_complexity,
            "Score": item.score,
            "Residual": metric.residual,
            "Recommended": metric.key == comparison.best_method,
        })
    return pd.DataFrame.from_records(records)


def solutions_to_dataframe(comparison: ComparisonResult) -> pd.DataFrame:
    """One column per method, one row per unknown."""
    columns = {metric.name: list(metric.solution) for metric in comparison.all_metrics.values()}
    frame = pd.DataFrame(columns)
    frame.index = [f"x{i + 1}" for i in range(len(frame))]
    return frame


class ComparisonReporter:
    """
    Generates Excel comparison reports.

    Usage:
        reporter = ComparisonReporter(matrix, vector, comparison)
        reporter.save("reports/comparison.xlsx")
    """

    def __init__(
        self,
        matrix: Sequence[Sequence[float]],
        vector: Sequence[float],
        comparison: ComparisonResult,
        label: str = "",
    ):
        self.matrix = [list(row) for row in matrix]
        self.vector = list(vector)
        self.comparison = comparison
        self.label = label

    def generate(self, output_path: Optional[str] = None) -> bytes:
        """
        Generate the Excel workbook.

        Args:
            output_path: Optional path to also write the file to

        Returns:
            Excel file as bytes
        """
        output = io.BytesIO()
        # Singular systems produce inf/nan, which Excel can only hold as errors.
        workbook = xlsxwriter.Workbook(output, {"in_memory": True, "nan_inf_to_errors": True})
        formats = self._create_formats(workbook)

        self._write_summary_sheet(workbook, formats)
        self._write_frame_sheet(workbook, formats, "Ranking", "Method Ranking", ranking_to_dataframe(self.comparison))
        for key, result in self.comparison.results.items():
            name = self.comparison.all_metrics[key].name
            self._write_frame_sheet(workbook, formats, key[:31], f"Trace: {name}", trace_to_dataframe(result))

        workbook.close()
        output.seek(0)
        data = output.getvalue()

        if output_path:
            path = Path(output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        return data

    def save(self, output_path: str) -> None:
        self.generate(output_path)

    def _create_formats(self, workbook) -> Dict[str, Any]:
        return {
            "header_main": workbook.add_format({
                'bold': True, 'font_size': 14, 'bg_color': '#1F4E79',
                'font_color': 'white', 'border': 1, 'align': 'center', 'valign': 'vcenter'
            }),
            "header": workbook.add_format({
                'bold': True, 'bg_color': '#D9E1F2', 'border': 1,
                'align': 'center', 'valign': 'vcenter', 'text_wrap': True
            }),
            "best": workbook.add_format({
                'bold': True, 'bg_color': '#C6EFCE', 'font_color': '#006100', 'border': 1
            }),
            "num_4dec": workbook.add_format({'num_format': '0.0000', 'border': 1}),
            "sci": workbook.add_format({'num_format': '0.00E+00', 'border': 1}),
            "text": workbook.add_format({'border': 1, 'align': 'left'}),
        }

    def _write_summary_sheet(self, workbook, formats: Dict[str, Any]) -> None:
        ws = workbook.add_worksheet("Summary")
        n = len(self.vector)

        title = "Linear System Method Comparison"
        if self.label:
            title = f"{title}: {self.label}"
        ws.merge_range(0, 0, 0, max(n, 3), title, formats["header_main"])
        ws.write(1, 0, f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")

        best = self.comparison.best_metric
        ws.write(3, 0, "Recommended", formats["header"])
        ws.write(3, 1, best.name if best else "-", formats["best"])
        ws.write(4, 0, "Reason", formats["header"])
        ws.write(4, 1, self.comparison.reason, formats["text"])

        row = 6
        ws.merge_range(row, 0, row, n, "System A | b", formats["header_main"])
        for i, values in enumerate(self.matrix):
            for j, value in enumerate(values):
                ws.write_number(row + 1 + i, j, value, formats["num_4dec"])
            ws.write_number(row + 1 + i, n, self.vector[i], formats["num_4dec"])

        row += n + 3
        frame = solutions_to_dataframe(self.comparison)
        ws.write(row, 0, "Unknown", formats["header"])
        for col, name in enumerate(frame.columns, 1):
            ws.write(row, col, name, formats["header"])
        for offset, (index, values) in enumerate(frame.iterrows(), 1):
            ws.write(row + offset, 0, index, formats["text"])
            for col, value in enumerate(values, 1):
                ws.write_number(row + offset, col, float(value), formats["num_4dec"])

        ws.set_column(0, 0, 14)
        ws.set_column(1, max(n, len(frame.columns)), 18)

    def _write_frame_sheet(
        self,
        workbook,
        formats: Dict[str, Any],
        sheet_name: str,
        title: str,
        frame: pd.DataFrame,
    ) -> None:
        ws = workbook.add_worksheet(sheet_name)
        last_col = max(len(frame.columns) - 1, 0)
        if last_col:
            ws.merge_range(0, 0, 0, last_col, title, formats["header_main"])
        else:
            ws.write(0, 0, title, formats["header_main"])

        col_widths = [len(str(col)) for col in frame.columns]
        for col, name in enumerate(frame.columns):
            ws.write(1, col, name, formats["header"])

        for row_offset, record in enumerate(frame.itertuples(index=False), 2):
            for col, value in enumerate(record):
                name = frame.columns[col]
                if pd.api.types.is_bool(value):
                    ws.write_boolean(row_offset, col, bool(value), formats["text"])
                elif pd.api.types.is_number(value):
                    # The initial guess has no error yet.
                    if name == "Error" and pd.isna(value):
                        ws.write_blank(row_offset, col, None, formats["text"])
                        continue
                    fmt = formats["sci"] if name in ("Error", "Residual") else formats["num_4dec"]
                    ws.write_number(row_offset, col, float(value), fmt)
                else:
                    text = "" if value is None else str(value)
                    ws.write_string(row_offset, col, text, formats["text"])
                    col_widths[col] = max(col_widths[col], len(text))

        for col, width in enumerate(col_widths):
            ws.set_column(col, col, min(max(width + 2, 10), 80))
        ws.freeze_panes(2, 0)


def generate_markdown_summary(comparison: ComparisonResult) -> str:
    """
    Generate a Markdown summary of a comparison.

    Args:
        comparison: ComparisonResult to summarise

    Returns:
        Markdown formatted string
    """
    best = comparison.best_metric
    lines = [
        "# Method Comparison",
        "",
        f"**Recommended Method:** {best.name if best else '-'}",
        "",
        comparison.reason,
        "",
        "| Rank | Method | Type | Steps | Status | Efficiency | Complexity | Score |",
        "|------|--------|------|-------|--------|------------|------------|-------|",
    ]

    for position, item in enumerate(comparison.ranking(), 1):
        metric = item.metric
        if metric.is_direct:
            status = "✓ Direct"
        else:
            status = "✓ Converged" if metric.converged else "✗ No Conv."
        kind = "Direct" if metric.is_direct else "Iterative"
        lines.append(
            f"| {position} | {metric.name} | {kind} | {metric.steps} | {status} "
            f"| {metric.efficiency * 100:.0f}% | {metric.time_complexity} | {item.score:.2f} |"
        )

    return "\n".join(lines)


__all__ = [
    "trace_to_dataframe",
    "ranking_to_dataframe",
    "solutions_to_dataframe",
    "ComparisonReporter",
    "generate_markdown_summary",
]
