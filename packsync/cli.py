"""Command line entry point for packsync."""

import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import click

from .api import create_client
from .config import Settings, input_variable
from .events import load_release
from .exceptions import InvalidActionError, PackAPIError, UnsupportedActionError
from .output import OutputFormatter
from .sync import SyncEngine
from .utils import format_body

logger = logging.getLogger(__name__)

ActionHandler = Callable[[Settings, Path, OutputFormatter], Awaitable[None]]


async def run_web(settings: Settings, root: Path, out: OutputFormatter) -> None:
    """Create the release on release events, then push the web data."""
    settings.require_web()
    async with create_client(settings) as client:
        engine = SyncEngine(client, root=root, output=out)
        if settings.is_release_event:
            release = load_release(settings.event_path)
            await engine.create_release(release, settings.release_dir or None)
        await engine.update_web()


async def run_external(settings: Settings, root: Path, out: OutputFormatter) -> None:
    """Reject actions whose flow lives outside packsync."""
    raise UnsupportedActionError(settings.action)


ACTIONS: dict[str, ActionHandler] = {
    "web": run_web,
    "technic": run_external,
}


async def run(settings: Settings, root: Path, out: OutputFormatter) -> None:
    """Dispatch to the handler registered for ``settings.action``.

    Raises:
        InvalidActionError: If no handler exists for the action
    """
    handler = ACTIONS.get(settings.action)
    if handler is None:
        raise InvalidActionError(settings.action)
    logger.debug(f"Running action {settings.action!r} in {root}")
    await handler(settings, root, out)


def report_failure(error: Exception, out: OutputFormatter) -> None:
    """Turn an escaped error into pipeline-visible failure output."""
    if isinstance(error, PackAPIError):
        logger.error(f"API Request failed: {error.url}")
        logger.error(f"   {format_body(error.body)}")
    out.error(str(error))


@click.command()
@click.option(
    "--action",
    "-a",
    envvar=input_variable("action"),
    required=True,
    help="Action to run (e.g. 'web')",
)
@click.option("--api", envvar=input_variable("api"), help="Base URL of the pack API")
@click.option(
    "--web-token",
    envvar=input_variable("web_token"),
    help="Bearer token for the pack API",
)
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Project root holding the web directory",
)
@click.option(
    "--release-dir",
    envvar=input_variable("release_dir"),
    help="Sub-directory of the root holding the release build",
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(package_name="packsync")
@click.pass_context
def main(
    ctx: Any,
    action: str,
    api: Optional[str],
    web_token: Optional[str],
    root: Path,
    release_dir: Optional[str],
    quiet: bool,
    verbose: bool,
) -> None:
    """Packsync - push pack metadata, pages, assets and releases to the web."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("packsync").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    out = OutputFormatter(quiet=quiet)

    try:
        settings = Settings.from_inputs(
            action=action,
            api_url=api,
            web_token=web_token,
            release_dir=release_dir,
        )
        asyncio.run(run(settings, root, out))
    except Exception as e:
        report_failure(e, out)
        ctx.exit(1)
