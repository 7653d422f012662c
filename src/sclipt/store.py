"""
Snippet store for sclipt.

A JSON array on disk, rewritten wholesale on every mutation.

There is no locking: two processes mutating the same file at once will
lose one side's changes (last writer wins).
"""

import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable

from pydantic import ValidationError as PydanticValidationError

from sclipt.ids import IdGenerator
from sclipt.models import Snippet, normalize_tags


class StoreError(Exception):
    """Base class for snippet store errors."""


class ValidationError(StoreError, ValueError):
    """A snippet was rejected before being persisted."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"{field.capitalize()} cannot be empty.")


class SnippetNotFound(StoreError, LookupError):
    """No snippet has the requested id."""

    def __init__(self, snippet_id: str):
        self.snippet_id = snippet_id
        super().__init__(f"No snippet found with ID: {snippet_id}")


class CorruptStorage(StoreError):
    """Storage exists but does not hold a valid snippet collection."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read snippets from {path}: {reason}")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SnippetStore:
    """File-backed snippet collection."""

    def __init__(
        self,
        path: Path,
        id_generator: IdGenerator | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.path = Path(path)
        self.id_generator = id_generator or IdGenerator()
        self._clock = clock

    def load(self) -> list[Snippet]:
        """
        Read all snippets from storage.

        A missing file is an empty collection. Anything unparseable raises
        CorruptStorage; other read failures raise OSError.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = f.read()
        except FileNotFoundError:
            return []
        except UnicodeDecodeError as e:
            raise CorruptStorage(self.path, f"not valid UTF-8 ({e.reason})") from e

        try:
            records = json.loads(data)
        except json.JSONDecodeError as e:
            raise CorruptStorage(self.path, f"invalid JSON ({e})") from e
        except RecursionError as e:
            raise CorruptStorage(self.path, "JSON nested too deeply") from e

        if not isinstance(records, list):
            raise CorruptStorage(self.path, "expected a JSON array of snippets")

        snippets = []
        seen: set[str] = set()
        for index, record in enumerate(records):
            try:
                snippet = Snippet.model_validate(record)
            except PydanticValidationError as e:
                raise CorruptStorage(
                    self.path, f"invalid record at index {index} ({e.error_count()} errors)"
                ) from e
            if snippet.id in seen:
                raise CorruptStorage(self.path, f"duplicate ID {snippet.id} at index {index}")
            seen.add(snippet.id)
            snippets.append(snippet)
        return snippets

    def save(self, snippets: Iterable[Snippet]) -> None:
        """
        Write the full collection, replacing storage atomically.

        The data goes to a temp file in the same directory and is renamed
        over the target, so readers see either the old or the new file.
        """
        payload = json.dumps(
            [snippet.to_record() for snippet in snippets],
            indent=2,
            ensure_ascii=False,
        ) + "\n"

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def create(self, title: str, content: str, tags: Iterable[str] | None = None) -> Snippet:
        """
        Validate, append and persist a new snippet.

        Raises ValidationError if title or content is blank.
        """
        title = title.strip()
        content = content.strip()
        if not title:
            raise ValidationError("title")
        if not content:
            raise ValidationError("content")

        snippets = self.load()
        snippet = Snippet(
            id=self.id_generator.next_id(s.id for s in snippets),
            title=title,
            content=content,
            created_at=self._clock(),
            tags=normalize_tags(tags),
        )
        snippets.append(snippet)
        self.save(snippets)
        return snippet

    def find_by_id(self, snippet_id: str) -> Snippet:
        """Get a single snippet by exact ID. Raises SnippetNotFound."""
        for snippet in self.load():
            if snippet.id == snippet_id:
                return snippet
        raise SnippetNotFound(snippet_id)

    def delete_by_id(self, snippet_id: str) -> bool:
        """Remove a snippet. Returns True if one was removed."""
        snippets = self.load()
        remaining = [s for s in snippets if s.id != snippet_id]

        if len(remaining) == len(snippets):
            return False

        self.save(remaining)
        return True

    def search_by_tag(self, tag: str | None) -> list[Snippet]:
        """
        Return snippets carrying exactly `tag`, in stored order.

        Matching is case-sensitive. An empty query matches nothing.
        """
        if not tag:
            return []
        return [s for s in self.load() if tag in s.tags]
