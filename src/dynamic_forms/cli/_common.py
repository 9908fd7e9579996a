"""Shared CLI utilities."""

import logging
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler

from dynamic_forms.config import Settings, build_registry, get_settings
from dynamic_forms.runtime import FormEngine, SchemaLoadError

logger = logging.getLogger(__name__)


def setup_logging(*, verbose: bool = False, quiet: bool = False, default_level: str = "INFO") -> None:
    """Configure logging with Rich handler on stderr."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.getLevelName(default_level)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def init_command(ctx: typer.Context) -> Settings:
    """Load settings and configure logging for a command invocation."""
    from dynamic_forms.cli._console import print_err

    try:
        settings = get_settings()
    except ValueError as e:
        print_err(str(e))
        raise SystemExit(1)

    if ctx.obj.get("schema_file"):
        settings = settings.model_copy(update={"schema_file": ctx.obj["schema_file"]})

    setup_logging(
        verbose=ctx.obj["verbose"],
        quiet=ctx.obj["quiet"],
        default_level=settings.log_level,
    )
    return settings


def build_engine(settings: Settings) -> FormEngine:
    """Create a fresh engine for this invocation.

    Raises:
        SystemExit: If the configured schema file can't be loaded.
    """
    from dynamic_forms.cli._console import print_err

    try:
        registry = build_registry(settings)
    except SchemaLoadError as e:
        print_err(str(e))
        raise SystemExit(1)
    return FormEngine(registry=registry)


def parse_assignments(assignments: Optional[List[str]]) -> List[Tuple[str, str]]:
    """Parse 'name=value' strings into (name, value) pairs.

    The value may itself contain '=' and may be empty.

    Raises:
        ValueError: If an item has no '=' or an empty name
    """
    pairs = []
    for item in assignments or []:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Invalid assignment '{item}'. Expected name=value")
        pairs.append((name, value))
    return pairs
