"""Generic record store over one delimited text file.

The store knows nothing about the entity it holds: parsing, formatting and
identity extraction are injected. The first line of the file is a header; every
following non-blank line is one record.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from gymdesk.domain.errors import GymError, UnknownVariantError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

log = getLogger(__name__)

ENCODING = "utf-8"


@dataclass(frozen=True, slots=True)
class SkippedLine:
    line_number: int
    content: str
    reason: str


@dataclass
class LoadResult[T]:
    """Outcome of reading a whole file."""

    records: list[T] = field(default_factory=list)
    skipped: list[SkippedLine] = field(default_factory=list)
    error: OSError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FlatFileStore[T]:
    def __init__(
        self,
        path: Path | str,
        *,
        header: str,
        parse: Callable[[str], T],
        format: Callable[[T], str],  # noqa: A002
        identity_of: Callable[[T], str],
    ) -> None:
        self.path = Path(path)
        self.header = header
        self._parse = parse
        self._format = format
        self._identity_of = identity_of
        self._bootstrap()

    def _bootstrap(self) -> None:
        """Create the parent directory and a header-only file; existing files are left alone."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("x", encoding=ENCODING) as handle:
                handle.write(self.header + "\n")
            log.info("Created data file %s", self.path)
        except FileExistsError:
            pass
        except OSError:
            log.exception("Could not create data file %s", self.path)

    def exists(self) -> bool:
        return self.path.exists()

    # reading --------------------------------------------------------------

    def load(self) -> LoadResult[T]:
        result: LoadResult[T] = LoadResult()
        try:
            with self.path.open("rb") as handle:
                next(handle, None)  # header
                for line_number, raw in enumerate(handle, start=2):
                    try:
                        line = raw.decode(ENCODING).strip()
                    except UnicodeDecodeError as exc:
                        log.warning("%s:%d: undecodable record: %s", self.path.name, line_number, exc)
                        text = raw.decode(ENCODING, errors="replace").strip()
                        result.skipped.append(SkippedLine(line_number, text, str(exc)))
                        continue
                    if not line:
                        continue
                    try:
                        result.records.append(self._parse(line))
                    except UnknownVariantError as exc:
                        log.error("%s:%d: %s", self.path.name, line_number, exc)  # noqa: TRY400
                        result.skipped.append(SkippedLine(line_number, line, str(exc)))
                    except (GymError, ValueError) as exc:
                        log.warning("%s:%d: skipping record: %s", self.path.name, line_number, exc)
                        result.skipped.append(SkippedLine(line_number, line, str(exc)))
        except OSError as exc:
            log.exception("Could not read data file %s", self.path)
            result.error = exc
        return result

    def list_all(self) -> list[T]:
        return self.load().records

    def find_by_id(self, key: str) -> T | None:
        return next((e for e in self.list_all() if self._identity_of(e) == key), None)

    def count(self) -> int:
        return len(self.list_all())

    # writing --------------------------------------------------------------

    def render(self, entity: T) -> str:
        """Return the line ``entity`` would be stored as; raises if it cannot be written."""
        return self._format(entity)

    def add(self, entity: T) -> bool:
        """Append one record; duplicates are not checked here."""
        line = self.render(entity)
        try:
            with self.path.open("a", encoding=ENCODING) as handle:
                handle.write(line + "\n")
        except OSError:
            log.exception("Could not append to data file %s", self.path)
            return False
        return True

    def update(self, entity: T) -> bool:
        key = self._identity_of(entity)
        records = self.list_all()
        for index, current in enumerate(records):
            if self._identity_of(current) == key:
                records[index] = entity
                return self.replace_all(records)
        return False

    def remove(self, key: str) -> bool:
        records = self.list_all()
        kept = [e for e in records if self._identity_of(e) != key]
        if len(kept) == len(records):
            return False
        return self.replace_all(kept)

    def replace_all(self, entities: Iterable[T]) -> bool:
        return self._rewrite([self._format(e) for e in entities])

    def clear(self) -> bool:
        return self._rewrite([])

    def _rewrite(self, lines: list[str]) -> bool:
        """Write header plus lines to a sibling temp file, then swap it in.

        Either the old or the new content survives an interruption.
        """

        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding=ENCODING,
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(self.header + "\n")
                for line in lines:
                    handle.write(line + "\n")
            os.replace(tmp_name, self.path)
        except OSError:
            log.exception("Could not rewrite data file %s", self.path)
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            return False
        log.debug("Rewrote %s with %d record(s)", self.path, len(lines))
        return True
