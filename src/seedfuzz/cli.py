"""CLI entry point for SeedFuzz."""

from __future__ import annotations

import os
import random
from pathlib import Path

import click

from seedfuzz import __version__
from seedfuzz.core.campaign import Campaign
from seedfuzz.core.config import AppConfig, ConfigManager
from seedfuzz.core.engine import build_mutator_set
from seedfuzz.core.exceptions import SeedFuzzError
from seedfuzz.core.harness import ProcessHarness, resolve_command
from seedfuzz.core.plugin_loader import PluginLoader
from seedfuzz.core.registry import ComponentRegistry
from seedfuzz.core.run_log import run_log_context
from seedfuzz.core.schema import CampaignReport, CampaignState, CaseResult, RejectionPolicy, Verdict
from seedfuzz.mutators import register_builtin_mutators
from seedfuzz.protocols import NamedMutator
from seedfuzz.reporters import register_builtin_reporters

USAGE = 'Usage: seedfuzz run "<command_to_fuzz>"'


def _load_config_and_plugins(config_path: Path | None = None) -> tuple[ConfigManager, ComponentRegistry]:
    """Load config and discover/load plugins; return config manager and registry."""
    config = ConfigManager(config_path=config_path)
    config.load()
    registry = ComponentRegistry()
    register_builtin_mutators(registry)
    register_builtin_reporters(registry)
    if (plugins_path := config.project_root / "plugins").exists():
        loader = PluginLoader([plugins_path], registry)
        loader.load_all()
    return config, registry


def _build_mutator_sets(
    cfg: AppConfig,
    registry: ComponentRegistry,
    static: tuple[str, ...],
    dynamic: tuple[str, ...],
) -> list[tuple[str, list[NamedMutator]]]:
    """Resolve the static and dynamic sets: CLI names, then config, then registry defaults."""
    static_names = list(static) or cfg.mutators.static
    if static_names is None:
        static_names = registry.default_mutators("static")
    dynamic_names = list(dynamic) or cfg.mutators.dynamic
    if dynamic_names is None:
        dynamic_names = registry.default_mutators("dynamic")
    options = cfg.mutators.options
    return [
        ("static", build_mutator_set(registry, static_names, 1, options, kind="static")),
        ("dynamic", build_mutator_set(registry, dynamic_names, cfg.mutators.repeat_count, options, kind="dynamic")),
    ]


def _print_case(case: CaseResult) -> None:
    """Report one execution: exit status on stderr, input and output on stdout."""
    if case.verdict is Verdict.TIMEOUT:
        click.echo(f"Process timed out after {case.result.duration_seconds:.1f}s", err=True)
    else:
        click.echo(f"Process exited with code: {case.result.exit_code}", err=True)
    click.echo(f"Input: {case.input}")
    click.echo(f"Output: {case.result.output}")


def _print_summary(report: CampaignReport) -> None:
    n_findings = len(report.findings)
    if report.state is CampaignState.HALTED_ON_FAILURE:
        last = report.cases[-1]
        if last.verdict is Verdict.TIMEOUT:
            click.echo("Error: Command timed out", err=True)
        else:
            click.echo("Error: Command exited with non-zero exit code", err=True)
        return
    if n_findings:
        click.echo(f"{n_findings} of {len(report.cases)} input(s) rejected:", err=True)
        for f in report.findings:
            label = f.mutator or "seed"
            click.echo(f"  {f.mutator_set}[{f.position}] {label}: {f.verdict.value} (exit code {f.result.exit_code})", err=True)
        return
    click.echo(f"All {len(report.cases)} input(s) accepted.", err=True)


def _write_report(registry: ComponentRegistry, fmt: str, report: CampaignReport, output: Path) -> None:
    reporter = registry.get_reporter(fmt)
    reporter.report_campaign(report, output)
    click.echo(f"Report: {output}", err=True)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """SeedFuzz: mutation-based black-box fuzzing of a program's standard input."""
    pass


@main.group()
def mutators() -> None:
    """Inspect registered mutation strategies."""
    pass


@mutators.command("list")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="YAML config file (default: config/default.yaml under the project root).")
def mutators_list(config_path: Path | None) -> None:
    """List static and dynamic mutators; '*' marks those enabled by default."""
    _, registry = _load_config_and_plugins(config_path)
    for kind in ("static", "dynamic"):
        defaults = set(registry.default_mutators(kind))
        click.echo(f"{kind.title()} mutators:")
        names = registry.list_mutators(kind)
        if not names:
            click.echo("  (none)")
        for name in names:
            marker = "*" if name in defaults else " "
            click.echo(f"  {marker} {name}")
    click.echo(f"Reporters: {', '.join(registry.list_available()['reporters']) or '(none)'}")


@main.command()
@click.argument("command_args", nargs=-1, metavar="COMMAND")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="YAML config file (default: config/default.yaml under the project root).")
@click.option("--workdir", "working_directory", type=click.Path(path_type=Path, file_okay=False), help="Directory the command is resolved against and run in (default: ./).")
@click.option("--seed-input", help="Seed input string.")
@click.option("--seed-file", type=click.Path(path_type=Path, exists=True, dir_okay=False), help="Read the seed input from this file.")
@click.option("--repeat-count", type=click.IntRange(min=0), help="How many times each dynamic mutator kind is instantiated (0 disables the dynamic set).")
@click.option("--rng-seed", type=int, help="Seed for the random generator (reproducible mutations).")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), help="Per-execution deadline in seconds; the target is killed when it expires.")
@click.option("--on-rejection", type=click.Choice([p.value for p in RejectionPolicy]), help="abort: stop at the first rejected input; record: collect every rejection and continue.")
@click.option("--static", "static", multiple=True, help="Static mutator to run (repeatable; default: those enabled in config).")
@click.option("--dynamic", "dynamic", multiple=True, help="Dynamic mutator kind to run (repeatable; default: all).")
@click.option("--report", "report_path", type=click.Path(path_type=Path, dir_okay=False), help="Write the campaign report to this file.")
@click.option("--format", "report_format", help="Report format (default: first entry of 'reporters' in config).")
@click.option("--log-file", type=click.Path(path_type=Path, dir_okay=False), help="Also write DEBUG logs to this file.")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr.")
def run(
    command_args: tuple[str, ...],
    config_path: Path | None,
    working_directory: Path | None,
    seed_input: str | None,
    seed_file: Path | None,
    repeat_count: int | None,
    rng_seed: int | None,
    timeout: float | None,
    on_rejection: str | None,
    static: tuple[str, ...],
    dynamic: tuple[str, ...],
    report_path: Path | None,
    report_format: str | None,
    log_file: Path | None,
    verbose: bool,
) -> None:
    """Fuzz COMMAND: feed the seed and its mutations to it over stdin."""
    if len(command_args) != 1:
        click.echo(USAGE, err=True)
        raise SystemExit(1)
    command = command_args[0]

    with run_log_context(verbose=verbose, log_file=log_file):
        try:
            config_manager, registry = _load_config_and_plugins(config_path)
            cfg = config_manager.config
            if repeat_count is not None:
                cfg.mutators.repeat_count = repeat_count
            workdir = working_directory or Path(cfg.working_directory)
            resolve_command(command, workdir)
            mutator_sets = _build_mutator_sets(cfg, registry, static, dynamic)
            fmt = report_format or (cfg.reporters[0] if cfg.reporters else "json")
            if report_path is not None:
                registry.get_reporter(fmt)
        except SeedFuzzError as e:
            click.echo(str(e), err=True)
            raise SystemExit(1)

        if seed_file is not None:
            seed = seed_file.read_text(encoding="utf-8")
        else:
            seed = seed_input if seed_input is not None else cfg.seed

        if rng_seed is None:
            rng_seed = cfg.campaign.rng_seed
        if rng_seed is None:
            rng_seed = int.from_bytes(os.urandom(4), "big")
        policy = RejectionPolicy(on_rejection or cfg.campaign.on_rejection)

        harness = ProcessHarness(
            command,
            working_directory=workdir,
            timeout=timeout if timeout is not None else cfg.harness.timeout,
        )
        click.echo(f"Command: {command} (rng seed {rng_seed}, on rejection: {policy.value})", err=True)
        campaign = Campaign(
            harness,
            random.Random(rng_seed),
            policy=policy,
            on_case=_print_case,
            rng_seed=rng_seed,
        )
        try:
            report = campaign.run(seed, mutator_sets)
        except SeedFuzzError as e:
            click.echo(f"Error while executing command: {e}", err=True)
            raise SystemExit(1)

        _print_summary(report)
        if report_path is not None:
            _write_report(registry, fmt, report, report_path)
        if not report.success:
            raise SystemExit(1)


if __name__ == "__main__":
    main()
