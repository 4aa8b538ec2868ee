"""Command-line entry point for asciiwipe.

Loads the art file, takes over the terminal and runs the wipe until one pass
completes, the quit key is pressed or SIGINT arrives.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import IO, Any, Callable

import click
from rich.console import Console
from rich.markup import escape

from asciiwipe import __version__
from asciiwipe.cli.verbosity import VerbosityManager
from asciiwipe.config import init_config
from asciiwipe.models import AnimationConfig
from asciiwipe.terminal.session import TerminalSession
from asciiwipe.utils.exceptions import ArtLoadError, ConfigurationError, TerminalError
from asciiwipe.utils.logging_config import get_logger
from asciiwipe.utils.shutdown import clear_stop, install_interrupt_handler
from asciiwipe.wipe.animation import AnimationResult, WipeAnimation
from asciiwipe.wipe.art import ArtImage, load_art
from asciiwipe.wipe.color import RandomSource

logger = get_logger(__name__)


def print_error(message: str, console: Console | None = None) -> None:
    """Print an error message to stderr with Rich formatting."""
    if console is None:
        console = Console(stderr=True, highlight=False)
    console.print(f"[red]Error:[/red] {escape(message)}", markup=True, soft_wrap=True)


def build_overrides(
    forever: bool,
    art_path: Path | None,
    step: int | None,
    delay: float | None,
    verbosity: VerbosityManager,
    log_file: str | None,
) -> dict[str, Any]:
    """Translate CLI options into nested config overrides.

    Options left at their defaults are omitted so environment values apply.
    """
    animation: dict[str, Any] = {}
    if forever:
        animation["forever"] = True
    if art_path is not None:
        animation["art_path"] = art_path
    if step is not None:
        animation["step"] = step
    if delay is not None:
        animation["frame_delay"] = delay
        animation["forever_frame_delay"] = delay

    observability: dict[str, Any] = {}
    if verbosity.is_verbose():
        observability["log_level"] = verbosity.to_log_level()
    if log_file is not None:
        observability["log_file"] = log_file

    overrides: dict[str, Any] = {}
    if animation:
        overrides["animation"] = animation
    if observability:
        overrides["observability"] = observability
    return overrides


def run_wipe(
    image: ArtImage,
    config: AnimationConfig,
    console: Console | None = None,
    stdin: IO[str] | None = None,
    rng: RandomSource | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> AnimationResult:
    """Run the animation inside a terminal session with SIGINT routed to stop.

    Args:
        image: Loaded art
        config: Animation settings
        console: Output console (defaults to stdout)
        stdin: Keyboard input stream (defaults to sys.stdin)
        rng: Random source for jitter and rotation
        sleep: Frame delay function

    Returns:
        Summary of the run

    """
    clear_stop()
    restore_interrupt = install_interrupt_handler()
    try:
        with TerminalSession(console=console, stdin=stdin) as session:
            animation = WipeAnimation(
                image,
                session,
                config=config,
                rng=rng,
                sleep=sleep,
            )
            return animation.run()
    finally:
        restore_interrupt()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--forever", "-f", is_flag=True, help="Run the animation forever")
@click.option(
    "--art",
    "art_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="ASCII-art file to animate (default: ~/.config/asciiwipe/ascii)",
)
@click.option("--step", type=int, default=None, help="Sweep increment per frame")
@click.option("--delay", type=float, default=None, help="Seconds between frames")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v: info, -vv: debug)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write logs to this file",
)
@click.version_option(__version__, prog_name="asciiwipe")
def cli(
    forever: bool,
    art_path: Path | None,
    step: int | None,
    delay: float | None,
    verbose: int,
    log_file: str | None,
) -> None:
    """Animate a colour wipe across an ASCII-art image."""
    verbosity = VerbosityManager.from_count(verbose)
    overrides = build_overrides(forever, art_path, step, delay, verbosity, log_file)

    try:
        config = init_config(overrides).config
    except ConfigurationError as e:
        raise click.ClickException(e.message) from e

    try:
        image = load_art(config.animation.art_path)
    except ArtLoadError as e:
        logger.debug("Art load failed: %s", e.details)
        print_error(e.message)
        return

    try:
        result = run_wipe(image, config.animation)
    except TerminalError as e:
        logger.exception("Animation aborted")
        raise click.ClickException(str(e)) from e

    logger.info(
        "Wipe stopped (%s): %d frames, %d passes, %d rotations",
        result.reason.value,
        result.frames,
        result.passes,
        result.rotations,
    )


def main() -> None:
    """Console-script entry point."""
    cli()
