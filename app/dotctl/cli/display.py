"""Rich display of install run results.

Provides the end-of-run summary table listing every managed config
with its status, backup and validation outcome.
"""

from rich.table import Table

from dotctl.models.report import ConfigReport, ConfigStatus, RunReport, ValidationOutcome
from dotctl.utils.formatting import console

_STATUS_MARKUP: dict[ConfigStatus, str] = {
    ConfigStatus.INSTALLED: "[installed]installed[/installed]",
    ConfigStatus.SKIPPED: "[skipped]skipped[/skipped]",
    ConfigStatus.FAILED: "[failed]failed[/failed]",
}

_VALIDATION_MARKUP: dict[ValidationOutcome, str] = {
    ValidationOutcome.PASSED: "[success]passed[/success]",
    ValidationOutcome.FAILED: "[warning]failed[/warning]",
    ValidationOutcome.SKIPPED: "[muted]skipped[/muted]",
}


def _details(config: ConfigReport) -> str:
    """Summarize backup, warnings and errors for one config row."""
    if config.error:
        return f"[muted]{config.error}[/muted]"
    parts: list[str] = []
    if config.backup_path is not None:
        parts.append(f"backup: {config.backup_path.name}")
    if config.warnings:
        parts.append(f"{len(config.warnings)} warning(s)")
    return f"[muted]{'; '.join(parts)}[/muted]"


def create_report_table(report: RunReport) -> Table:
    """Create a Rich table of per-config outcomes.

    Args:
        report: Run report to display.

    Returns:
        Rich Table with Config, Status, Validation, Destination and
        Details columns.
    """
    title = "Configuration Summary"
    if report.platform is not None:
        title = f"{title} ({report.platform.label})"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Config", no_wrap=True, style="config.name")
    table.add_column("Status", width=10, justify="center")
    table.add_column("Validation", width=10, justify="center")
    table.add_column("Destination", style="config.path")
    table.add_column("Details")

    for config in report.configs:
        validation = (
            _VALIDATION_MARKUP[config.validation]
            if config.status == ConfigStatus.INSTALLED
            else "[muted]-[/muted]"
        )
        table.add_row(
            config.name,
            _STATUS_MARKUP[config.status],
            validation,
            str(config.destination),
            _details(config),
        )

    return table


def print_run_summary(report: RunReport) -> None:
    """Print the summary table, if any config was processed.

    Args:
        report: Run report to display.
    """
    if not report.configs:
        return
    console.print()
    console.print(create_report_table(report))
