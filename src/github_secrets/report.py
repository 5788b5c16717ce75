"""Run summaries printed after each pass."""

from rich.markup import escape

from github_secrets import console
from github_secrets.core.aggregator import count_by_outcome, group_by_repository
from github_secrets.models import UpdateResult


def print_summary(results: list[UpdateResult], *, title: str = "Overall Summary") -> None:
    """Print totals for a list of results."""
    successes, failures = count_by_outcome(results)
    console.newline()
    console.summary_panel(
        title,
        {
            "Total operations": str(len(results)),
            "Successful": str(successes),
            "Failed": str(failures),
        },
        border_style="red" if failures else "green",
    )


def print_repository_breakdown(results: list[UpdateResult]) -> None:
    """Print successes and failures per repository, in first-seen order."""
    rows = []
    for repository, group in group_by_repository(results).items():
        successes, failures = count_by_outcome(group)
        rows.append((escape(repository), str(successes), str(failures)))
    console.table("Per-repository breakdown", ["Repository", "Successful", "Failed"], rows)


def print_failures(results: list[UpdateResult]) -> None:
    """List every failed operation with its reason."""
    failed = [result for result in results if not result.success]
    if not failed:
        return
    console.newline()
    console.console.print("[bold]Failed operations:[/bold]")
    for result in failed:
        reason = escape(result.error or "Unknown error")
        console.step(f"{console.highlight(result.secret_name)} in {escape(result.repository)}: {reason}")


def print_report(results: list[UpdateResult]) -> None:
    """Print the full post-pass report: totals, breakdown and failures."""
    print_summary(results)
    if results:
        print_repository_breakdown(results)
    print_failures(results)
