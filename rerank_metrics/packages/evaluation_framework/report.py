"""
Console rendering of a metrics report.
"""

from typing import List

from .models import MetricsReport

COLUMNS = [
    ("Query", "<"),
    ("Baseline P@5", ">"),
    ("Reranked P@5", ">"),
    ("Δ Precision", ">"),
    ("Baseline ms", ">"),
    ("Reranked ms", ">"),
    ("Δ Latency ms", ">"),
]


def format_table(report: MetricsReport) -> List[str]:
    """Render the per-query rows as aligned text lines (header, rule, rows)."""
    cells: List[List[str]] = [
        [
            row.query,
            f"{row.baseline_precision:.2f}",
            f"{row.reranked_precision:.2f}",
            f"{row.precision_delta:.2f}",
            f"{row.baseline_ms:.1f}",
            f"{row.reranked_ms:.1f}",
            f"{row.latency_delta:.1f}",
        ]
        for row in report.rows
    ]

    widths = [
        max([len(name)] + [len(line[i]) for line in cells])
        for i, (name, _) in enumerate(COLUMNS)
    ]

    def render(values: List[str]) -> str:
        return " | ".join(
            f"{value:{align}{width}}"
            for value, (_, align), width in zip(values, COLUMNS, widths)
        )

    lines = [render([name for name, _ in COLUMNS])]
    lines.append("-+-".join("-" * width for width in widths))
    lines.extend(render(line) for line in cells)
    return lines


def format_summary(report: MetricsReport) -> str:
    return (
        f"Average Δ Precision@5: {report.average_precision_delta:.2f} | "
        f"Average Δ Latency: {report.average_latency_delta:.1f}ms"
    )


def format_report(report: MetricsReport) -> str:
    """Full report: title, table and summary line."""
    lines = ["Query Metrics"]
    lines.extend(format_table(report))
    lines.append(format_summary(report))
    return "\n".join(lines)
