from typing import Iterable

from pydantic import BaseModel, ConfigDict
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pageshots.console import console as default_console
from pageshots.models import CaptureResult


class RunSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int
    succeeded: int
    failed: int

    @property
    def line(self) -> str:
        return f"Total: {self.total} | Success: {self.succeeded} | Failed: {self.failed}"

    @property
    def exit_code(self) -> int:
        """0 when every task succeeded, 1 as soon as one failed."""
        return 0 if self.failed == 0 else 1


def summarize(results: Iterable[CaptureResult]) -> RunSummary:
    results = list(results)
    succeeded = sum(1 for result in results if result.success)
    return RunSummary(
        total=len(results), succeeded=succeeded, failed=len(results) - succeeded
    )


def report(results: Iterable[CaptureResult], console: Console = default_console) -> RunSummary:
    results = list(results)
    summary = summarize(results)

    console.print("\n=== Summary ===")
    console.print(summary.line)

    if summary.failed:
        table = Table(title="Failed captures")
        table.add_column("URL", overflow="fold")
        table.add_column("Error", overflow="fold")
        for result in results:
            if not result.success:
                table.add_row(escape(result.url), escape(result.error))
        console.print(table)

    return summary
