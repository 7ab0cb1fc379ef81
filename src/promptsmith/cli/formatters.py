"""Output formatting utilities with rich support."""

import json
import sys
from typing import Any

from rich.console import Console
from rich.json import JSON
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from promptsmith.schemas.generated import (
    GeneratedPrompt,
    PromptAnalysis,
    QualityReport,
    ValidationResult,
)


class OutputFormatter:
    """Formats CLI output, plain text when color is off."""

    def __init__(self, use_rich: bool = True, force_color: bool = False):
        """Initialize formatter."""
        self.use_rich = use_rich
        if self.use_rich:
            self.console = Console(force_terminal=force_color or None, file=sys.stdout)
            self.err_console = Console(force_terminal=force_color or None, file=sys.stderr)
        else:
            self.console = None
            self.err_console = None

    def print_json(self, data: Any, indent: int = 2) -> None:
        """Print JSON with syntax highlighting."""
        text = json.dumps(data, indent=indent, ensure_ascii=False)
        if self.use_rich:
            self.console.print(JSON(text))
        else:
            print(text)

    def print_markdown(self, text: str) -> None:
        """Print markdown with rich rendering."""
        if self.use_rich:
            self.console.print(Markdown(text))
        else:
            print(text)

    def print_prompt(self, result: GeneratedPrompt, show_system: bool = False) -> None:
        """Print a composed prompt, optionally preceded by its system prompt."""
        if self.use_rich:
            if show_system:
                self.console.print(Panel(Text(result.system_prompt), title="System prompt", expand=False))
            self.console.print(
                Panel(
                    Text(result.final_prompt),
                    title=Text(f"Prompt ({result.metadata.framework})"),
                    subtitle=Text(result.metadata.domain),
                )
            )
        else:
            if show_system:
                print(f"[system]\n{result.system_prompt}\n")
            print(result.final_prompt)

    def print_quality(self, report: QualityReport) -> None:
        """Print a quality report."""
        if self.use_rich:
            table = Table(title=f"Quality score: {report.score}/100", show_header=True, header_style="bold magenta")
            table.add_column("Kind", style="cyan")
            table.add_column("Detail")
            for strength in report.strengths:
                table.add_row(Text("strength", style="green"), Text(strength))
            for issue in report.issues:
                table.add_row(Text("issue", style="yellow"), Text(issue))
            self.console.print(table)
        else:
            print(f"\nQuality score: {report.score}/100")
            print("-" * 40)
            for strength in report.strengths:
                print(f"+ {strength}")
            for issue in report.issues:
                print(f"- {issue}")
            print("-" * 40)

    def print_analysis(self, analysis: PromptAnalysis) -> None:
        """Print wording analysis with its suggestions."""
        summary = (
            f"Analysis score: {analysis.score}/100 "
            f"({analysis.word_count} words, readability {analysis.readability_score})"
        )
        if self.use_rich:
            table = Table(title=summary, show_header=True, header_style="bold magenta")
            table.add_column("Kind", style="cyan")
            table.add_column("Detail")
            for strength in analysis.strengths:
                table.add_row(Text("strength", style="green"), Text(strength))
            for item in analysis.suggestions:
                table.add_row(
                    Text(f"{item.severity} {item.type}", style="yellow"),
                    Text(f"{item.message}: {item.suggestion}"),
                )
            self.console.print(table)
        else:
            print(f"\n{summary}")
            print("-" * 40)
            for strength in analysis.strengths:
                print(f"+ {strength}")
            for item in analysis.suggestions:
                print(f"- [{item.severity}] {item.message}: {item.suggestion}")
            print("-" * 40)

    def print_validation(self, config_errors: dict[str, str], result: ValidationResult) -> None:
        """Print field errors and detailed errors/warnings."""
        for field, message in config_errors.items():
            self.print_error(f"{field}: {message}")
        for issue in result.errors:
            self.print_error(f"{issue.field}: {issue.message} [{issue.code}]")
        for issue in result.warnings:
            self.print_warning(f"{issue.field}: {issue.message} [{issue.code}]")

    def print_table(self, title: str, columns: list[str], rows: list[list[str]]) -> None:
        """Print rows in a table."""
        if self.use_rich:
            table = Table(title=title, show_header=True, header_style="bold magenta")
            for column in columns:
                table.add_column(column)
            for row in rows:
                table.add_row(*(Text(cell) for cell in row))
            self.console.print(table)
        else:
            print(f"\n{title}:")
            print(" | ".join(columns))
            print("-" * 40)
            for row in rows:
                print(" | ".join(row))

    def print_success(self, message: str) -> None:
        """Print success message."""
        if self.use_rich:
            self.console.print(Text.assemble(("✓", "green"), " ", message))
        else:
            print(f"✓ {message}")

    def print_error(self, message: str) -> None:
        """Print error message."""
        if self.use_rich:
            self.err_console.print(Text.assemble(("✗", "red"), " ", message))
        else:
            print(f"✗ {message}", file=sys.stderr)

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        if self.use_rich:
            self.err_console.print(Text.assemble(("⚠", "yellow"), " ", message))
        else:
            print(f"⚠ {message}", file=sys.stderr)
