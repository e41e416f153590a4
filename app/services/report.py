"""Terminal and JSON rendering of batch results."""

import json

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from schemas.batch import RequestResult, TestSummary

RULE_WIDTH = 60


def status_tier(result: RequestResult) -> tuple[str, str]:
    """Return ``(marker, style)`` for a result that received a status code."""
    code = result.status_code or 0
    if result.success:
        return "✅", "green"
    if 400 <= code < 500:
        return "⚠️ ", "yellow"
    if code >= 500:
        return "❌", "red"
    return "ℹ️ ", "blue"


def format_body(body: object, limit: int) -> tuple[str, int]:
    """Pretty-print a parsed body, returning the shown text and the number of characters cut."""
    pretty = json.dumps(body, indent=2, ensure_ascii=False)
    if len(pretty) > limit:
        return pretty[:limit], len(pretty) - limit
    return pretty, 0


def summary_lines(summary: TestSummary) -> list[str]:
    lines = [
        f"Total: {summary.total}",
        f"Success: {summary.success}",
        f"Failed: {summary.failed}",
        f"Success rate: {summary.success_rate:.1f}%",
    ]
    failed_names = summary.failed_names
    if failed_names:
        lines.append("")
        lines.append("Failed Requests:")
        lines.extend(f"  - {name}" for name in failed_names)
    return lines


def render_json(summary: TestSummary) -> str:
    return summary.model_dump_json(indent=2)


class PrettyReporter:
    """
    Prints each result as it arrives, then a boxed summary.

    Example usage:
        reporter = PrettyReporter()
        reporter.start(timeout=30)
        summary = await runner.run(specs, on_result=reporter.result)
        reporter.summary(summary)
    """

    def __init__(self, console: Console | None = None, body_preview_limit: int = 500):
        self.console = console or Console(soft_wrap=True)
        self.body_preview_limit = body_preview_limit

    def start(self, timeout: float) -> None:
        rule = Text("=" * RULE_WIDTH, style="bright_blue")
        self.console.print(rule)
        self.console.print(
            Text(f"HTTP Request Test Started (Timeout: {timeout:g}s)", style="bold bright_blue")
        )
        self.console.print(rule)

    def result(self, index: int, total: int, result: RequestResult) -> None:
        console = self.console
        console.print()
        console.print(
            Text.assemble(
                (f"[{index}/{total}]", "bright_cyan"),
                " ",
                (result.name, "bold bright_white"),
            )
        )
        console.print(
            Text.assemble(
                ("Method:", "bright_black"),
                " ",
                (result.method.upper(), "bright_yellow"),
                " ",
                (result.url, "bright_black"),
            )
        )

        if result.status_code is not None:
            marker, style = status_tier(result)
            status_text = result.status_text or ""
            console.print(Text(f"{marker} Status: {result.status_code} {status_text}", style=style))

        console.print(
            Text.assemble(
                ("Response time:", "bright_black"),
                f" {result.response_time_ms / 1000:.2f}s",
            )
        )

        if result.error:
            console.print(
                Text.assemble(("❌ Error:", "bold red"), " ", (result.error, "bright_black"))
            )

        console.print()
        console.print(Text("Response body:", style="bold bright_white"))
        if result.response_body is not None:
            shown, cut = format_body(result.response_body, self.body_preview_limit)
            console.print(Text(shown, style="bright_black"))
            if cut:
                console.print(Text(f"... ({cut} characters truncated)", style="italic bright_black"))
        else:
            console.print(Text("(empty)", style="bright_black"))
        console.print(Text("-" * RULE_WIDTH, style="bright_black"))

    def summary(self, summary: TestSummary) -> None:
        self.console.print()
        self.console.print(
            Panel(
                Text("\n".join(summary_lines(summary))),
                title="Test Summary",
                box=box.SQUARE,
                expand=False,
                padding=(0, 2),
            )
        )
