"""Click-based CLI interface for the debt analyzer."""

import json
import sys
from pathlib import Path
from typing import Any

import click

from . import __version__
from .analysis.structure import get_scanner
from .analyzer_logging import setup_logging
from .errors import AnalyzerError
from .models import AnalysisResult
from .rules.base import CATEGORY_ORDER, RuleContext
from .rules.config import AnalyzerConfig, AnalyzerConfigLoader
from .rules.engine import create_rule_engine
from .service import DebtAnalyzer

# Exit codes for the request command, by response status
REQUEST_EXIT_CODES = {200: 0, 400: 2, 500: 1}


def config_option(f: Any) -> Any:
    """Common --config option."""
    return click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Configuration file applied after the default config files",
    )(f)


def _load_config(config_path: Path | None) -> AnalyzerConfig:
    config = AnalyzerConfigLoader().load(config_file=config_path)
    config.validate()
    return config


def _fail(error: AnalyzerError) -> None:
    click.echo(error.format(use_color=sys.stderr.isatty()), err=True)
    sys.exit(1)


def format_report(result: AnalysisResult) -> str:
    """Render a result as a plain-text report."""
    payload = result.to_dict()
    lines = [
        f"Cyclomatic complexity: {payload['cyclomaticComplexity']}",
        f"Duplication ratio:     {payload['duplicationRatio']}",
        f"Lines of code:         {payload['linesOfCode']}",
        f"Code smells:           {payload['smellsCount']}",
        f"Technical debt ratio:  {payload['technicalDebtRatio']}",
        "",
        payload["assessment"],
    ]
    for category, smells in result.code_smells.items():
        lines.append("")
        lines.append(f"{category} ({len(smells)})")
        for smell in smells:
            lines.append(f"  - {smell.name}: {smell.description}")
    return "\n".join(lines)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Log output format",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write logs to this file (rotated)",
)
def cli(verbose: bool, quiet: bool, log_format: str, log_file: Path | None) -> None:
    """Debt Analyzer - heuristic technical-debt profiles for source text."""
    setup_logging(
        quiet=quiet,
        verbose=verbose,
        log_file=log_file,
        log_format=log_format,
    )


@cli.command()
@click.argument("source", type=click.File("r", errors="replace"), default="-")
@config_option
@click.option(
    "--parallel/--sequential",
    default=None,
    help="Run smell rules in a thread pool (default from config)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the JSON result")
def analyze(source: Any, config_path: Path | None, parallel: bool | None, as_json: bool) -> None:
    """Analyze SOURCE (a file, or - for stdin)."""
    try:
        analyzer = DebtAnalyzer(config=_load_config(config_path))
    except AnalyzerError as e:
        _fail(e)

    result = analyzer.analyze(source.read(), parallel=parallel)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        click.echo(format_report(result))


@cli.command()
@config_option
def request(config_path: Path | None) -> None:
    """Answer a JSON request body read from stdin.

    Exit code is 0 for a result, 2 for an invalid request and 1 for an
    internal failure.
    """
    try:
        analyzer = DebtAnalyzer(config=_load_config(config_path))
    except AnalyzerError as e:
        _fail(e)

    stdin = click.get_text_stream("stdin", errors="replace")
    status, payload = analyzer.handle_request(stdin.read())
    click.echo(json.dumps(payload))
    sys.exit(REQUEST_EXIT_CODES.get(status, 1))


@cli.command()
@config_option
@click.option(
    "--category",
    type=click.Choice(CATEGORY_ORDER),
    help="Only rules in this smell category",
)
@click.option(
    "--run",
    "source",
    type=click.File("r", errors="replace"),
    help="Run the rules over a file (- for stdin) and print the execution report",
)
def rules(config_path: Path | None, category: str | None, source: Any) -> None:
    """List enabled rules in execution order, or run them with --run."""
    try:
        config = _load_config(config_path)
        scanner = get_scanner(config.structure_scanner)
    except AnalyzerError as e:
        _fail(e)

    engine = create_rule_engine(config=config)

    if source is not None:
        context = RuleContext.from_source(source.read(), config=config, scanner=scanner)
        result = engine.run(context, categories=[category] if category else None)
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    selected = engine.get_rules_by_category(category) if category else engine.get_all_rules()
    for rule in selected:
        click.echo(f"{rule.rule_id:<42} {rule.category:<28} {rule.name}")


@cli.command("config")
@click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project directory (defaults to the current directory)",
)
@config_option
@click.option(
    "--save",
    is_flag=True,
    help="Write the effective configuration to the project config file",
)
@click.option(
    "--local",
    is_flag=True,
    help="With --save, write the local (git-ignored) config file instead",
)
def show_config(project: Path | None, config_path: Path | None, save: bool, local: bool) -> None:
    """Print the effective merged configuration."""
    loader = AnalyzerConfigLoader(project)
    try:
        config = loader.load(config_file=config_path)
        config.validate()
    except AnalyzerError as e:
        _fail(e)

    if save:
        saved_path = loader.save(config, local=local)
        click.echo(f"Saved configuration to {saved_path}", err=True)

    click.echo(json.dumps(config.to_dict(), indent=2))



def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
