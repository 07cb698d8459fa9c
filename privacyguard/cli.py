"""
Privacy Guard CLI

Command-line interface for PII and secret scanning.

Commands:
    privacy-guard [staged]          - Scan staged files (for commit hooks)
    privacy-guard full [ROOT]       - Scan the entire codebase
    privacy-guard check FILE...     - Scan specific file(s)
    privacy-guard patterns          - Show PII detection patterns
    privacy-guard init              - Create a default config file
    privacy-guard install-hook      - Install the git pre-commit hook
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Optional

import click

from privacyguard import __version__
from privacyguard.core.config import (
    CONFIG_FILENAME,
    PrivacyGuardConfig,
    generate_default_config,
)
from privacyguard.core.errors import ConfigError, PrivacyGuardError
from privacyguard.core.finding import ScanReport, VerdictResult
from privacyguard.core.scanner import ContentScanner
from privacyguard.core.verdict import evaluate
from privacyguard.integrations.github import (
    emit_annotations,
    is_github_actions,
    write_step_summary,
)
from privacyguard.reporting.console import ConsoleReporter, render_notice
from privacyguard.reporting.json_reporter import JSONReporter
from privacyguard.reporting.sarif import SARIFReporter
from privacyguard.sources.codebase import scan_codebase
from privacyguard.sources.files import scan_files
from privacyguard.sources.git import install_pre_commit_hook
from privacyguard.sources.staged import scan_staged
from privacyguard.utils.logger import configure_logging


FORMAT_OPTION = click.option(
    "--format", "-f", "output_format", type=click.Choice(["console", "json", "sarif"]),
    default=None, help="Output format (default: console).",
)
OUTPUT_OPTION = click.option(
    "--output", "-o", "output_file", type=click.Path(), default=None,
    help="Write the JSON/SARIF report to a file.",
)
CI_OPTION = click.option(
    "--ci", is_flag=True, help="Enable CI mode (GitHub Actions annotations, etc.).",
)
WORKERS_OPTION = click.option(
    "--workers", "-w", type=click.IntRange(min=1), default=None,
    help="Number of files scanned in parallel.",
)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="Privacy Guard")
@click.option("--config", "config_path", type=click.Path(), default=None,
              help=f"Path to {CONFIG_FILENAME} configuration file.")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"],
              case_sensitive=False), default="WARNING", help="Log verbosity (stderr).")
@click.option("--log-format", type=click.Choice(["console", "json"]), default="console",
              help="Log line format (stderr).")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    log_level: str,
    log_format: str,
) -> None:
    """
    Privacy Guard - PII Detection & Security Scanning

    Blocks commits that contain credentials or personal information.
    CRITICAL (API keys, passwords, JWT tokens, credit cards, SSNs) and PII
    (emails, phone numbers, names, addresses) findings block; connection
    strings and IP addresses are reported as warnings.

    Without a command, staged files are scanned.
    """
    configure_logging(log_level, json_output=log_format == "json")

    try:
        config = PrivacyGuardConfig.load(Path(config_path) if config_path else None)
    except ConfigError as exc:
        render_notice(str(exc), "error")
        sys.exit(1)

    ctx.obj = config

    if ctx.invoked_subcommand is None:
        ctx.invoke(staged)


def _skip_if_disabled(config: PrivacyGuardConfig) -> None:
    if not config.enabled:
        render_notice("Privacy scanning is disabled by configuration", "warning")
        sys.exit(0)


def _finish(
    config: PrivacyGuardConfig,
    mode: str,
    target: str,
    report: ScanReport,
    output_format: Optional[str],
    output_file: Optional[str],
    ci: bool,
    console_report: Callable[[ConsoleReporter, ScanReport, VerdictResult], None],
) -> None:
    """Render the report in the requested format and exit with the verdict."""
    verdict = evaluate(report)
    fmt = output_format or config.output.format
    out_file = output_file or config.output.file

    if fmt == "json":
        json_str = JSONReporter(mode=mode, target=target).report(report, verdict, output_file=out_file)
        if not out_file:
            click.echo(json_str)
    elif fmt == "sarif":
        sarif_str = SARIFReporter(config.ruleset()).report(report, output_file=out_file)
        if not out_file:
            click.echo(sarif_str)
    else:
        console_report(ConsoleReporter(enforce=config.block_on_detection), report, verdict)
        if out_file:
            JSONReporter(mode=mode, target=target).report(report, verdict, output_file=out_file)

    if ci or is_github_actions():
        emit_annotations(report)
        write_step_summary(report, verdict, mode)

    if verdict.blocked and config.block_on_detection:
        sys.exit(1)


# ═══════════════════════════════════════════════════════
#  privacy-guard staged
# ═══════════════════════════════════════════════════════
@cli.command()
@FORMAT_OPTION
@OUTPUT_OPTION
@CI_OPTION
@click.pass_obj
def staged(
    config: PrivacyGuardConfig,
    output_format: Optional[str],
    output_file: Optional[str],
    ci: bool,
) -> None:
    """Scan staged files (for commit hooks).

    Example:

        privacy-guard staged
    """
    _skip_if_disabled(config)

    scanner = ContentScanner(config.ruleset())
    try:
        report = scan_staged(scanner, workers=config.workers)
    except PrivacyGuardError as exc:
        render_notice(str(exc), "error")
        sys.exit(1)

    _finish(
        config, "staged", str(Path.cwd()), report, output_format, output_file, ci,
        lambda console, r, v: console.report_staged(r, v),
    )


# ═══════════════════════════════════════════════════════
#  privacy-guard full
# ═══════════════════════════════════════════════════════
@cli.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False), default=".")
@FORMAT_OPTION
@OUTPUT_OPTION
@WORKERS_OPTION
@CI_OPTION
@click.pass_obj
def full(
    config: PrivacyGuardConfig,
    root: str,
    output_format: Optional[str],
    output_file: Optional[str],
    workers: Optional[int],
    ci: bool,
) -> None:
    """Scan the entire codebase (src, tests, scripts, docs by default).

    Examples:

        privacy-guard full

        privacy-guard full ./repo --format sarif --output privacy.sarif --ci
    """
    _skip_if_disabled(config)

    target = Path(root).resolve()
    scanner = ContentScanner(config.ruleset())
    report = scan_codebase(target, config.scan_dirs, scanner, workers=workers or config.workers)

    _finish(
        config, "full", str(target), report, output_format, output_file, ci,
        lambda console, r, v: console.report_full(r, v, config.scan_dirs),
    )


# ═══════════════════════════════════════════════════════
#  privacy-guard check
# ═══════════════════════════════════════════════════════
@cli.command()
@click.argument("files", nargs=-1)
@FORMAT_OPTION
@OUTPUT_OPTION
@WORKERS_OPTION
@click.pass_obj
def check(
    config: PrivacyGuardConfig,
    files: tuple,
    output_format: Optional[str],
    output_file: Optional[str],
    workers: Optional[int],
) -> None:
    """Scan specific file(s).

    Example:

        privacy-guard check src/settings.py docs/setup.md
    """
    _skip_if_disabled(config)

    paths = list(dict.fromkeys(files))
    scanner = ContentScanner(config.ruleset())
    try:
        report = scan_files(paths, scanner, workers=workers or config.workers)
    except PrivacyGuardError as exc:
        render_notice(str(exc), "error")
        sys.exit(1)

    _finish(
        config, "check", ", ".join(paths), report, output_format, output_file, False,
        lambda console, r, v: console.report_check(paths, r, v),
    )


# ═══════════════════════════════════════════════════════
#  privacy-guard patterns
# ═══════════════════════════════════════════════════════
@cli.command()
@click.pass_obj
def patterns(config: PrivacyGuardConfig) -> None:
    """Show PII detection patterns and the whitelist."""
    ConsoleReporter().show_patterns(config.ruleset())


# ═══════════════════════════════════════════════════════
#  privacy-guard init
# ═══════════════════════════════════════════════════════
@cli.command()
@click.option("--path", "-p", "target_path", type=click.Path(), default=".",
              help="Directory to create the config file in.")
def init(target_path: str) -> None:
    """Create a default .privacyguard.yaml."""
    target = Path(target_path).resolve()
    target.mkdir(parents=True, exist_ok=True)

    config_file = target / CONFIG_FILENAME
    if config_file.exists():
        render_notice(f"{config_file} already exists, skipping.", "warning")
        return

    config_file.write_text(generate_default_config(), encoding="utf-8")
    render_notice(f"Created {config_file}", "success")


# ═══════════════════════════════════════════════════════
#  privacy-guard install-hook
# ═══════════════════════════════════════════════════════
@cli.command("install-hook")
@click.option("--force", is_flag=True, help="Overwrite an existing pre-commit hook.")
def install_hook(force: bool) -> None:
    """Install a git pre-commit hook that runs 'privacy-guard staged'."""
    try:
        hook = install_pre_commit_hook("privacy-guard staged", force=force)
    except FileExistsError as exc:
        render_notice(f"{exc} already exists, use --force to overwrite.", "warning")
        sys.exit(1)
    except PrivacyGuardError as exc:
        render_notice(str(exc), "error")
        sys.exit(1)

    render_notice(f"Installed {hook}", "success")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
