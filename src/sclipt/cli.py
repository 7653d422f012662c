"""
CLI for sclipt.

Arguments are parsed by hand into a Command value. One invocation runs
exactly one store operation and renders its result.

Usage:
    sclipt add                      # Add a snippet interactively
    sclipt list                     # List all snippets
    sclipt view <id>                # Show a snippet
    sclipt delete <id>              # Delete a snippet
    sclipt search <tag>             # Find snippets by tag
    sclipt --help                   # Show help

Exit status is 0 for successes and informational outcomes (not found, no
results, rejected input), 1 when storage or config cannot be read or
written, 130 when interrupted.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from typing import IO, Any, Callable

from sclipt import render
from sclipt.config import get_storage_path, load_config
from sclipt.prompt import parse_tags, prompt, read_until_sentinel
from sclipt.store import CorruptStorage, SnippetNotFound, SnippetStore, ValidationError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Command:
    """One parsed invocation."""

    name: str | None
    args: tuple[str, ...] = ()
    storage_path: str | None = None
    verbose: bool = False


@dataclass
class Context:
    """What a command handler needs to run."""

    store: SnippetStore
    config: dict[str, Any]
    stdin: IO[str]
    stdout: IO[str]
    stderr: IO[str] = field(default_factory=lambda: sys.stderr)

    def echo(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def warn(self, text: str) -> None:
        print(text, file=self.stderr)

    @property
    def sentinel(self) -> str:
        return self.config["input"]["sentinel"]


def parse_args(argv: list[str]) -> Command:
    """
    Turn raw arguments into a Command.

    Options may appear anywhere. The first remaining word is the command
    name and the rest are its positional arguments.
    """
    positional: list[str] = []
    storage_path = None
    verbose = False
    override = None

    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in ("--file", "-f") and i + 1 < len(argv):
            storage_path = argv[i + 1]
            i += 2
        elif arg.startswith("--file="):
            storage_path = arg.split("=", 1)[1]
            i += 1
        elif arg == "--verbose":
            verbose = True
            i += 1
        elif arg in ("--help", "-h"):
            override = override or "help"
            i += 1
        elif arg in ("--version", "-V"):
            override = override or "version"
            i += 1
        else:
            positional.append(arg)
            i += 1

    if override:
        return Command(override, (), storage_path, verbose)

    name = positional[0] if positional else None
    return Command(name, tuple(positional[1:]), storage_path, verbose)


def setup_logging(command: Command, config: dict[str, Any]) -> None:
    """Configure stderr logging from --verbose, SCLIPT_LOG_LEVEL or config."""
    if command.verbose:
        level_name = "DEBUG"
    else:
        level_name = os.environ.get("SCLIPT_LOG_LEVEL") or config.get("logging", {}).get("level", "WARNING")

    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(format=LOG_FORMAT, level=level, stream=sys.stderr)
    logging.getLogger("sclipt").setLevel(level)


def cmd_add(ctx: Context, command: Command) -> int:
    """Prompt for a snippet and store it."""
    ctx.echo(render.header("ADD SNIPPET"))
    title = prompt("Enter snippet title: ", ctx.stdin, ctx.stdout)
    ctx.echo(f"Enter snippet content (finish with a line containing only {ctx.sentinel}):")
    content = read_until_sentinel(ctx.stdin, ctx.sentinel)
    raw_tags = prompt("Enter tags (comma-separated, optional): ", ctx.stdin, ctx.stdout)

    try:
        snippet = ctx.store.create(title, content, parse_tags(raw_tags))
    except ValidationError as e:
        logger.info("Rejected snippet: %s", e)
        ctx.echo(render.render_rejected(str(e)))
        return EXIT_OK

    logger.debug("Created snippet %s", snippet.id)
    ctx.echo()
    ctx.echo(render.render_added(snippet))
    return EXIT_OK


def cmd_list(ctx: Context, command: Command) -> int:
    """List all snippets."""
    snippets = ctx.store.load()
    logger.debug("Loaded %d snippets", len(snippets))
    ctx.echo(render.render_list(snippets))
    return EXIT_OK


def cmd_view(ctx: Context, command: Command) -> int:
    """Show one snippet by ID."""
    if not command.args:
        ctx.echo("Please provide a snippet ID to view. Usage: sclipt view <id>")
        return EXIT_OK

    snippet_id = command.args[0]
    try:
        snippet = ctx.store.find_by_id(snippet_id)
    except SnippetNotFound:
        ctx.echo(render.render_not_found(snippet_id))
        return EXIT_OK

    ctx.echo(render.render_snippet(snippet))
    return EXIT_OK


def cmd_delete(ctx: Context, command: Command) -> int:
    """Delete a snippet by ID."""
    if not command.args:
        ctx.echo("Please provide a snippet ID to delete. Usage: sclipt delete <id>")
        return EXIT_OK

    snippet_id = command.args[0]
    removed = ctx.store.delete_by_id(snippet_id)
    logger.debug("Delete %s: removed=%s", snippet_id, removed)
    ctx.echo(render.render_deleted(snippet_id, removed))
    return EXIT_OK


def cmd_search(ctx: Context, command: Command) -> int:
    """Find snippets by exact tag."""
    if not command.args:
        ctx.echo("Please provide a tag to search for. Usage: sclipt search <tag>")
        return EXIT_OK

    # The tag is the last word: `sclipt search by tag python` looks up "python"
    tag = command.args[-1].strip().lower()
    results = ctx.store.search_by_tag(tag)
    logger.debug("Tag %r matched %d snippets", tag, len(results))
    ctx.echo(render.render_search(tag, results))
    return EXIT_OK


def cmd_help(ctx: Context, command: Command) -> int:
    ctx.echo(render.render_help(ctx.sentinel))
    return EXIT_OK


def cmd_version(ctx: Context, command: Command) -> int:
    ctx.echo(render.render_version())
    return EXIT_OK


COMMANDS: dict[str, Callable[[Context, Command], int]] = {
    "add": cmd_add,
    "list": cmd_list,
    "view": cmd_view,
    "delete": cmd_delete,
    "search": cmd_search,
    "help": cmd_help,
    "version": cmd_version,
}


def dispatch(ctx: Context, command: Command) -> int:
    """Run the handler for a parsed command."""
    if command.name is None:
        ctx.echo(render.render_welcome())
        return EXIT_OK

    handler = COMMANDS.get(command.name)
    if handler is None:
        ctx.echo(render.render_error(f"Unknown command: '{command.name}'."))
        ctx.echo("Try: sclipt help")
        return EXIT_OK

    logger.debug("Running %s with args %s", command.name, command.args)
    return handler(ctx, command)


def main(
    argv: list[str] | None = None,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
) -> int:
    """Main entry point."""
    command = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        config = load_config()
    except (ValueError, OSError) as e:
        print(render.render_error(f"Could not read config: {e}"), file=sys.stderr)
        return EXIT_FAILURE

    setup_logging(command, config)
    render.Colors.use_color = bool(config.get("display", {}).get("color", True))

    storage_path = get_storage_path(config, command.storage_path)
    logger.debug("Using snippet file %s", storage_path)

    ctx = Context(
        store=SnippetStore(storage_path),
        config=config,
        stdin=stdin or sys.stdin,
        stdout=stdout or sys.stdout,
    )

    try:
        return dispatch(ctx, command)
    except CorruptStorage as e:
        logger.debug("Corrupt storage", exc_info=True)
        ctx.warn(render.render_error(str(e)))
        ctx.warn("The file was left untouched. Fix or move it and try again.")
        return EXIT_FAILURE
    except OSError as e:
        logger.debug("Storage I/O failed", exc_info=True)
        ctx.warn(render.render_error(f"{storage_path}: {e}"))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        ctx.echo()
        ctx.warn("Interrupted. Nothing was saved.")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
