"""CLI interface for harmony-parser."""

from __future__ import annotations

import functools
import json
import logging
import sys

import click
from pydantic import ValidationError

from . import __version__
from .config import (
    CHUNK_SIZE_ENVVAR,
    DEFAULT_CHUNK_SIZE,
    END_MARKER,
    LOG_LEVEL,
    MESSAGE_MARKER,
    START_MARKER,
)
from .detect import is_harmony_format
from .errors import HarmonyError
from .extract import extract_commentary_content, extract_final_content, extract_reasoning_content
from .models import Conversation, Delimiters
from .parser import parse_conversation_from_string
from .render import render_conversation
from .stream import HarmonyStreamParser
from .tokenizer import tokenize_completion_string

logger = logging.getLogger(__name__)

EXTRACTORS = {
    "analysis": extract_reasoning_content,
    "final": extract_final_content,
    "commentary": extract_commentary_content,
}


def delimiter_options(f):
    """Add --start/--message/--end options, passed on as a single ``delimiters`` kwarg."""

    @click.option("--start", "start", default=START_MARKER, show_default=True, help="Start marker")
    @click.option(
        "--message", "message", default=MESSAGE_MARKER, show_default=True, help="Message marker"
    )
    @click.option("--end", "end", default=END_MARKER, show_default=True, help="End marker")
    @functools.wraps(f)
    def wrapper(*args, start: str, message: str, end: str, **kwargs):
        try:
            delimiters = Delimiters(start=start, message=message, end=end)
        except ValidationError as e:
            raise click.BadParameter(str(e), param_hint="--start/--message/--end")
        return f(*args, delimiters=delimiters, **kwargs)

    return wrapper


@click.group()
@click.version_option(version=__version__, prog_name="harmony")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr")
def cli(verbose: bool):
    """Parse, render and stream-extract Harmony formatted text.

    Every command reads from FILE, or from stdin when FILE is "-".
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command()
@click.argument("source", type=click.File("r"), default="-")
@delimiter_options
def tokenize(source, delimiters: Delimiters):
    """Split a completion string into tokens (printed as a JSON list)."""
    tokens = tokenize_completion_string(source.read(), delimiters)
    click.echo(json.dumps(tokens, indent=2, ensure_ascii=False))


@cli.command()
@click.argument("source", type=click.File("r"), default="-")
@delimiter_options
def parse(source, delimiters: Delimiters):
    """Strictly parse a completion string into a JSON conversation.

    Example:
        echo '<|start|>user<|message|>text:message:Hi<|end|>' | harmony parse -
    """
    try:
        conversation = parse_conversation_from_string(source.read(), delimiters)
    except HarmonyError as e:
        raise click.ClickException(f"[{e.code}] {e}")

    click.echo(json.dumps(conversation.model_dump(mode="json"), indent=2, ensure_ascii=False))


@cli.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--json", "as_json", is_flag=True, help="Print tokens as a JSON list")
@delimiter_options
def render(source, as_json: bool, delimiters: Delimiters):
    """Render a JSON conversation into Harmony tokens."""
    try:
        conversation = Conversation.model_validate_json(source.read())
    except ValidationError as e:
        raise click.ClickException(f"Not a valid conversation:\n{e}")

    tokens = render_conversation(conversation, delimiters)
    if as_json:
        click.echo(json.dumps(tokens, indent=2, ensure_ascii=False))
    else:
        click.echo("".join(tokens))


@cli.command()
@click.argument("source", type=click.File("r"), default="-")
@delimiter_options
@click.pass_context
def detect(ctx: click.Context, source, delimiters: Delimiters):
    """Check whether input looks Harmony formatted (exit status 1 if not)."""
    found = is_harmony_format(source.read(), delimiters)
    click.echo("true" if found else "false")
    ctx.exit(0 if found else 1)


@cli.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option(
    "--channel",
    type=click.Choice(sorted(EXTRACTORS)),
    default="final",
    show_default=True,
    help="Channel to extract",
)
def extract(source, channel: str):
    """Print the latest text of one channel."""
    # Plain text passes through verbatim; echo supplies the final newline
    click.echo(EXTRACTORS[channel](source.read()).removesuffix("\n"))


@cli.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=DEFAULT_CHUNK_SIZE,
    envvar=CHUNK_SIZE_ENVVAR,
    show_default=True,
    help="Characters fed to the stream parser per update",
)
@click.option("--last", is_flag=True, help="Only print the final snapshot")
def stream(source, chunk_size: int, last: bool):
    """Feed input to the stream parser in chunks, printing one JSON snapshot per line."""
    text = source.read()
    parser = HarmonyStreamParser()
    snapshot = parser.add_content("")

    for i in range(0, len(text), chunk_size):
        snapshot = parser.add_content(text[i : i + chunk_size])
        if not last:
            click.echo(snapshot.model_dump_json())

    if last or not text:
        click.echo(snapshot.model_dump_json())
    logger.debug("Streamed %d chars in chunks of %d", len(text), chunk_size)
