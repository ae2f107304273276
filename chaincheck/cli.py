"""Main CLI application."""

import logging
from pathlib import Path
from typing import Optional

import msgspec
import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import CheckSettings, load_settings
from .exceptions import KnowledgeBaseError, SettingsError
from .knowledge import KnowledgeBase, load_knowledge_base
from .queries import CheckPathsQuery, LookupQuery
from .output import (
    print_json,
    print_diagnostics,
    print_summary,
    print_lookup,
    print_services,
    check_result_to_dict,
    lookup_to_dict,
)

app = typer.Typer(
    name="chaincheck",
    help="Check builder call chains for missing required arguments",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

EXIT_FINDINGS = 1
EXIT_USAGE = 2


def _configure_logging(verbose: bool):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


def _fail(message: str):
    err_console.print(f"[red]Error: {message}[/red]", soft_wrap=True)
    raise typer.Exit(EXIT_USAGE)


def get_knowledge_base(kb: Optional[str], use_cache: bool = True) -> KnowledgeBase:
    """Load the given table, or the bundled one."""
    if kb is not None and not Path(kb).exists():
        _fail(f"knowledge base not found: {kb}")
    try:
        return load_knowledge_base(kb, use_cache=use_cache)
    except (KnowledgeBaseError, OSError) as e:
        _fail(str(e))


def get_settings(
    config: Optional[Path],
    kb: Optional[Path],
    all_functions: bool,
    continue_on_ambiguity: bool,
    no_cache: bool,
) -> CheckSettings:
    """Settings from the config file, overridden by explicit CLI flags."""
    settings = CheckSettings()
    if config is not None:
        if not config.exists():
            _fail(f"config file not found: {config}")
        try:
            settings = load_settings(config)
        except SettingsError as e:
            _fail(str(e))

    overrides = {}
    if kb is not None:
        overrides["knowledge_base"] = str(kb)
    if all_functions:
        overrides["check_all_functions"] = True
    if continue_on_ambiguity:
        overrides["stop_on_ambiguity"] = False
    if no_cache:
        overrides["use_cache"] = False
    return msgspec.structs.replace(settings, **overrides)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def check(
    paths: list[Path] = typer.Argument(..., help="Python files or directories to check"),
    kb: Optional[Path] = typer.Option(None, "--kb", "-k", help="Path to knowledge base table (.csv or .json)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to JSON settings file"),
    all_functions: bool = typer.Option(False, "--all", "-a", help="Check every function, not only marked ones"),
    continue_on_ambiguity: bool = typer.Option(
        False, "--continue-on-ambiguity", help="Keep checking a function after an ambiguous call"
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Don't read or write the knowledge base cache"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log analysis details to stderr"),
):
    """Check marked functions for calls missing required arguments.

    Exits with 1 when any problem is found, 2 when the inputs are unusable.
    """
    _configure_logging(verbose)
    settings = get_settings(config, kb, all_functions, continue_on_ambiguity, no_cache)

    missing_paths = [str(p) for p in paths if not p.exists()]
    if missing_paths:
        _fail(f"path not found: {', '.join(missing_paths)}")

    knowledge_base = get_knowledge_base(settings.knowledge_base, use_cache=settings.use_cache)
    try:
        result = CheckPathsQuery(knowledge_base).execute(paths, settings=settings)
    except SyntaxError as e:
        _fail(f"cannot parse {e.filename}:{e.lineno}: {e.msg}")
    except (OSError, UnicodeDecodeError) as e:
        _fail(str(e))

    if json_output:
        print_json(check_result_to_dict(result, settings.decorator))
    else:
        count = print_diagnostics(result, console, settings.decorator)
        print_summary(result, count, console)

    if not result.ok:
        raise typer.Exit(EXIT_FINDINGS)


@app.command()
def lookup(
    method: str = typer.Argument(..., help="Method name to look up"),
    kb: Optional[Path] = typer.Option(None, "--kb", "-k", help="Path to knowledge base table (.csv or .json)"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Show the required arguments of a method per service."""
    knowledge_base = get_knowledge_base(str(kb) if kb else None)
    result = LookupQuery(knowledge_base).execute(method)

    if json_output:
        print_json(lookup_to_dict(result))
    else:
        print_lookup(result, console)

    if not result.found:
        raise typer.Exit(EXIT_FINDINGS)


@app.command()
def services(
    kb: Optional[Path] = typer.Option(None, "--kb", "-k", help="Path to knowledge base table (.csv or .json)"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """List every service in the knowledge base."""
    knowledge_base = get_knowledge_base(str(kb) if kb else None)
    names = knowledge_base.service_names()

    if json_output:
        print_json(list(names))
    else:
        print_services(names, console)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
