"""Validation reporting with multiple export formats."""

from __future__ import annotations

import json
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
from jinja2 import Template
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.errors import Issue, VldError
from ..core.validator import ValidationResult
from ..core.values import format_value_short, to_json_value
from .formatting import prettify_error

ROOT_LABEL = "<root>"


class ValidationReporter:
    """Generate readable validation reports in multiple formats."""

    def __init__(self, result: ValidationResult | VldError) -> None:
        """
        Initialize reporter with a validation outcome.

        Args:
            result: ValidationResult from SchemaValidator, or a VldError raised by parse
        """
        if isinstance(result, VldError):
            result = ValidationResult(False, errors=list(result.issues), metadata={"issues": len(result)})
        self.result = result

    @property
    def issues(self) -> List[Issue]:
        return list(self.result.errors)

    def to_console(self, verbose: bool = False, console: Console | None = None) -> None:
        """
        Print formatted validation report to console using rich.

        Args:
            verbose: Include the most common messages and a prettified listing
            console: Optional custom Console instance
        """
        console = console or Console()
        total_errors = len(self.result.errors)

        summary = Table(title="Validation Summary", show_header=True, header_style="bold magenta")
        summary.add_column("Metric", style="cyan", width=20)
        summary.add_column("Value", style="white", width=30)

        status_text = Text("VALID", style="bold green") if self.result.is_valid else Text("INVALID", style="bold red")
        summary.add_row("Status", status_text)
        summary.add_row("Total Issues", str(total_errors))
        summary.add_row("Affected Paths", str(len(self._group_issues_by_path())))
        for key, value in self.result.metadata.items():
            if key != "issues":
                summary.add_row(key.replace("_", " ").title(), str(value))

        console.print(summary)
        console.print()

        if total_errors == 0:
            return

        path_table = Table(title="Issues by Path", show_header=True)
        path_table.add_column("Path", style="yellow")
        path_table.add_column("Count", style="red", justify="right")
        path_table.add_column("Percentage", style="red", justify="right")
        for path, count in self._group_issues_by_path().most_common(10):
            pct = (count / total_errors) * 100
            path_table.add_row(Text(path), str(count), f"{pct:.1f}%")
        console.print(path_table)
        console.print()

        code_table = Table(title="Issues by Code", show_header=True)
        code_table.add_column("Code", style="cyan")
        code_table.add_column("Count", style="red", justify="right")
        for code, count in self._group_issues_by_code().most_common():
            code_table.add_row(code, str(count))
        console.print(code_table)
        console.print()

        if verbose:
            messages = Counter(issue.message for issue in self.result.errors)
            top_errors = Table(title="Top 10 Error Messages", show_header=True)
            top_errors.add_column("Error Message", style="red", overflow="fold")
            top_errors.add_column("Count", style="red", justify="right")
            for msg, count in messages.most_common(10):
                truncated = msg[:100] + "..." if len(msg) > 100 else msg
                top_errors.add_row(Text(truncated), str(count))
            console.print(top_errors)
            console.print()

            console.print(Panel(Text(prettify_error(VldError(self.result.errors))), title="Details", border_style="red"))

    def to_html(self, filepath: Path | str, title: str = "Validation Report") -> None:
        """
        Generate a standalone HTML report.

        Args:
            filepath: Output path for HTML file
            title: Report title
        """
        filepath = Path(filepath)
        messages = Counter(issue.message for issue in self.result.errors)
        html_content = self._render_html_template(
            title=title,
            is_valid=self.result.is_valid,
            total_errors=len(self.result.errors),
            paths=self._group_issues_by_path().most_common(10),
            codes=self._group_issues_by_code().most_common(),
            top_errors=[{"message": msg[:150], "count": count} for msg, count in messages.most_common(10)],
            issues=[self._issue_record(issue) for issue in self.result.errors],
            metadata=dict(self.result.metadata),
            timestamp=datetime.now().isoformat(),
        )
        filepath.write_text(html_content, encoding="utf-8")

    def to_json(self, filepath: Path | str, indent: int = 2) -> None:
        """
        Export validation result as JSON.

        Args:
            filepath: Output path for JSON file
            indent: JSON indentation level
        """
        filepath = Path(filepath)
        data = {
            "is_valid": self.result.is_valid,
            "summary": {
                "total_errors": len(self.result.errors),
                "by_code": dict(self._group_issues_by_code()),
            },
            "errors": [issue.to_dict() for issue in self.result.errors],
            "metadata": dict(self.result.metadata),
            "timestamp": datetime.now().isoformat(),
        }
        filepath.write_text(json.dumps(to_json_value(data), indent=indent, ensure_ascii=False), encoding="utf-8")

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert issues to DataFrame for analysis.

        Returns:
            DataFrame with columns: path, code, message, received
        """
        columns = ["path", "code", "message", "received"]
        if not self.result.errors:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame([self._issue_record(issue) for issue in self.result.errors], columns=columns)

    def _issue_record(self, issue: Issue) -> Dict[str, Any]:
        return {
            "path": issue.path_str or ROOT_LABEL,
            "code": issue.key,
            "message": issue.message,
            "received": format_value_short(issue.received) if issue.has_received else None,
        }

    def _group_issues_by_path(self) -> Counter[str]:
        counts: Counter[str] = Counter()
        for issue in self.result.errors:
            counts[issue.path_str or ROOT_LABEL] += 1
        return counts

    def _group_issues_by_code(self) -> Counter[str]:
        return Counter(issue.key for issue in self.result.errors)

    def _render_html_template(self, **context: Any) -> str:
        """Render HTML template with validation data."""
        template = Template(HTML_TEMPLATE, autoescape=True)
        return template.render(**context)


HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title }}</title>
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #f3f4f6;
            padding: 20px;
        }
        .container {
            max-width: 1200px;
            margin: 0 auto;
            background: white;
            border-radius: 12px;
            box-shadow: 0 10px 30px rgba(0,0,0,0.15);
            overflow: hidden;
        }
        .header {
            background: {% if is_valid %}#10b981{% else %}#ef4444{% endif %};
            color: white;
            padding: 32px;
            text-align: center;
        }
        .section {
            padding: 32px;
            border-top: 1px solid #e5e7eb;
        }
        table {
            width: 100%;
            border-collapse: collapse;
        }
        th, td {
            padding: 12px;
            text-align: left;
            border-bottom: 1px solid #e5e7eb;
        }
        th {
            background: #f9fafb;
            text-transform: uppercase;
            font-size: 0.85em;
        }
        code {
            background: #f3f4f6;
            padding: 2px 6px;
            border-radius: 4px;
        }
        .footer {
            padding: 16px 32px;
            background: #f9fafb;
            color: #6b7280;
            font-size: 0.9em;
        }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>{{ title }}</h1>
            <div class="status-badge">
                {% if is_valid %}✓ VALID{% else %}✗ INVALID{% endif %}
                ({{ total_errors }} issue{% if total_errors != 1 %}s{% endif %})
            </div>
        </div>

        {% if paths %}
        <div class="section">
            <h2>Issues by Path</h2>
            <table>
                <thead><tr><th>Path</th><th style="text-align: right;">Count</th></tr></thead>
                <tbody>
                    {% for path, count in paths %}
                    <tr><td><code>{{ path }}</code></td><td style="text-align: right;">{{ count }}</td></tr>
                    {% endfor %}
                </tbody>
            </table>
        </div>
        {% endif %}

        {% if codes %}
        <div class="section">
            <h2>Issues by Code</h2>
            <table>
                <thead><tr><th>Code</th><th style="text-align: right;">Count</th></tr></thead>
                <tbody>
                    {% for code, count in codes %}
                    <tr><td>{{ code }}</td><td style="text-align: right;">{{ count }}</td></tr>
                    {% endfor %}
                </tbody>
            </table>
        </div>
        {% endif %}

        {% if issues %}
        <div class="section">
            <h2>All Issues</h2>
            <table>
                <thead><tr><th>Path</th><th>Code</th><th>Message</th><th>Received</th></tr></thead>
                <tbody>
                    {% for issue in issues %}
                    <tr>
                        <td><code>{{ issue.path }}</code></td>
                        <td>{{ issue.code }}</td>
                        <td>{{ issue.message }}</td>
                        <td>{{ issue.received if issue.received is not none else "" }}</td>
                    </tr>
                    {% endfor %}
                </tbody>
            </table>
        </div>
        {% endif %}

        {% if metadata %}
        <div class="section">
            <h2>Metadata</h2>
            <table>
                <tbody>
                    {% for key, value in metadata.items() %}
                    <tr><td>{{ key }}</td><td>{{ value }}</td></tr>
                    {% endfor %}
                </tbody>
            </table>
        </div>
        {% endif %}

        <div class="footer">Generated at {{ timestamp }}</div>
    </div>
</body>
</html>
"""
