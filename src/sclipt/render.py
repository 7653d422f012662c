"""
Rendering for sclipt.

Pure functions from result values to display text. Nothing here touches
storage or prints.
"""

import os
from datetime import datetime
from typing import Sequence

from sclipt import __version__
from sclipt.models import Snippet


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"

    BRIGHT_CYAN = "\033[96m"
    BRIGHT_MAGENTA = "\033[95m"

    # Set from [display] color
    use_color = True

    @classmethod
    def enabled(cls) -> bool:
        """Check if colors should be enabled."""
        if os.environ.get("NO_COLOR"):
            return False
        return cls.use_color


def c(text: str, *codes: str) -> str:
    """Apply color codes to text if colors are enabled."""
    if not Colors.enabled():
        return text
    return "".join(codes) + text + Colors.RESET


RULE = "─" * 40


def header(text: str) -> str:
    return c(f"━━━ {text} ━━━", Colors.BOLD, Colors.BLUE)


def format_timestamp(value: datetime) -> str:
    """Local time, minute precision."""
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


def format_tags(tags: Sequence[str]) -> str:
    if not tags:
        return c("(none)", Colors.DIM)
    return " ".join(c(f"#{tag}", Colors.BRIGHT_MAGENTA) for tag in tags)


def render_welcome() -> str:
    return "\n".join([
        c("Welcome to sclipt! Your CLI Snippet Manager!", Colors.BOLD),
        "Usage: sclipt <command> [options]",
        "Try: sclipt help",
    ])


def render_help(sentinel: str) -> str:
    return f"""sclipt - personal snippet manager

Usage:
    sclipt <command> [arguments] [options]

Commands:
    sclipt add                    Add a snippet (prompts for title, content, tags)
    sclipt list                   List all snippets
    sclipt view <id>              Show one snippet
    sclipt delete <id>            Delete a snippet
    sclipt search <tag>           List snippets with an exact tag
    sclipt help                   Show this help
    sclipt version                Show version

Options:
    --file, -f PATH               Use PATH as the snippet file
    --verbose                     Log debug output to stderr
    --help, -h                    Show this help
    --version, -V                 Show version

Content entry:
    Type or paste as many lines as you like, then a line containing
    only {sentinel} to finish.

Examples:
    sclipt add
    sclipt view 1700000000000
    sclipt search python"""


def render_version() -> str:
    return f"sclipt {__version__}"


def _row(snippet: Snippet) -> str:
    id_str = c(f"{snippet.id:16}", Colors.DIM)
    created = c(format_timestamp(snippet.created_at), Colors.CYAN)
    return f"{id_str}  {created}  {snippet.title[:42]}"


def _table(title: str, snippets: Sequence[Snippet]) -> str:
    lines = [header(title), ""]
    lines.append(c(f"{'ID':16}  {'CREATED':16}  TITLE", Colors.DIM))
    lines.append(c("─" * 70, Colors.DIM))
    for snippet in snippets:
        lines.append(_row(snippet))
    lines.append("")
    noun = "snippet" if len(snippets) == 1 else "snippets"
    lines.append(c(f"{len(snippets)} {noun}", Colors.DIM))
    return "\n".join(lines)


def render_list(snippets: Sequence[Snippet]) -> str:
    """Render the whole collection."""
    if not snippets:
        return c("No snippets found. Add some with: sclipt add", Colors.DIM)
    return _table("YOUR SNIPPETS", snippets)


def render_search(tag: str, snippets: Sequence[Snippet]) -> str:
    """Render tag search results."""
    if not snippets:
        return c(f"No snippets tagged '{tag}'.", Colors.DIM)
    return _table(f"TAG: {tag}", snippets)


def render_snippet(snippet: Snippet) -> str:
    """Render one snippet in full."""
    lines = [
        header(f"SNIPPET {snippet.id}"),
        f"{c('Title:', Colors.BOLD)}   {snippet.title}",
        f"{c('Created:', Colors.BOLD)} {format_timestamp(snippet.created_at)}",
        f"{c('Tags:', Colors.BOLD)}    {format_tags(snippet.tags)}",
        c(RULE, Colors.DIM),
        snippet.content,
        c(RULE, Colors.DIM),
    ]
    return "\n".join(lines)


def render_added(snippet: Snippet) -> str:
    return c(f"Snippet '{snippet.title}' added successfully with ID: {snippet.id}", Colors.GREEN)


def render_deleted(snippet_id: str, removed: bool) -> str:
    if removed:
        return c(f"Snippet with ID: {snippet_id} deleted successfully.", Colors.GREEN)
    return c(f"No snippet found with ID: {snippet_id}", Colors.YELLOW)


def render_not_found(snippet_id: str) -> str:
    return c(f"Snippet not found: {snippet_id}", Colors.YELLOW)


def render_rejected(reason: str) -> str:
    return c(f"{reason} Snippet not added.", Colors.YELLOW)


def render_error(message: str) -> str:
    return c(f"Error: {message}", Colors.RED)
