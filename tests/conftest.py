from datetime import datetime, timezone
from itertools import count

import pytest

from sclipt import render
from sclipt.ids import IdGenerator
from sclipt.models import Snippet
from sclipt.store import SnippetStore


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep every test away from the real home directory and terminal colors."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("SCLIPT_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("SCLIPT_FILE", raising=False)
    monkeypatch.delenv("SCLIPT_LOG_LEVEL", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setattr(render.Colors, "use_color", True)


@pytest.fixture
def snippet_path(tmp_path):
    return tmp_path / "data" / "snippets.json"


@pytest.fixture
def store(snippet_path):
    ticks = count(1_700_000_000_000)
    return SnippetStore(snippet_path, id_generator=IdGenerator(clock=lambda: next(ticks)))


def make_snippet(snippet_id="1", title="Title", content="Body", tags=None, created_at=None):
    return Snippet(
        id=snippet_id,
        title=title,
        content=content,
        tags=tags or [],
        created_at=created_at or datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
    )
