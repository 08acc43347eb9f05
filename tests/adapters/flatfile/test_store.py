from __future__ import annotations

import logging
import os
from pathlib import Path  # noqa: TC003

import pytest

from gymdesk.adapters.flatfile import FlatFileStore
from gymdesk.domain.errors import RecordFormatError, UnknownVariantError

HEADER = "key,value"


def _parse(line: str) -> tuple[str, str]:
    key, sep, value = line.partition(",")
    if not sep:
        raise RecordFormatError(f"missing value: {line!r}")
    if value == "???":
        raise UnknownVariantError("thing", value)
    return key, value


def _format(entity: tuple[str, str]) -> str:
    return ",".join(entity)


def _store(path: Path) -> FlatFileStore[tuple[str, str]]:
    return FlatFileStore(
        path, header=HEADER, parse=_parse, format=_format, identity_of=lambda e: e[0]
    )


def test_bootstrap_creates_header_only_file(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "things.csv"

    store = _store(path)

    assert store.exists()
    assert path.read_text(encoding="utf-8") == "key,value\n"
    assert store.list_all() == []


def test_bootstrap_never_overwrites(tmp_path: Path) -> None:
    path = tmp_path / "things.csv"
    path.write_text("key,value\na,1\n", encoding="utf-8")

    store = _store(path)

    assert store.list_all() == [("a", "1")]


def test_add_appends_without_duplicate_check(tmp_path: Path) -> None:
    store = _store(tmp_path / "things.csv")

    assert store.add(("a", "1"))
    assert store.add(("a", "1"))

    assert store.count() == 2


def test_load_skips_blank_and_bad_lines(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "things.csv"
    path.write_text("key,value\na,1\n\nbroken\nb,???\nc,3\n", encoding="utf-8")
    store = _store(path)

    with caplog.at_level(logging.WARNING):
        result = store.load()

    assert result.ok
    assert result.records == [("a", "1"), ("c", "3")]
    assert [(s.line_number, s.content) for s in result.skipped] == [(4, "broken"), (5, "b,???")]
    levels = {r.getMessage().split(":")[1]: r.levelno for r in caplog.records}
    assert levels["4"] == logging.WARNING
    assert levels["5"] == logging.ERROR


def test_load_skips_undecodable_lines(tmp_path: Path) -> None:
    path = tmp_path / "things.csv"
    path.write_bytes(b"key,value\na,1\nJo\xe3o,2\nc,3\n")

    result = _store(path).load()

    assert result.ok
    assert result.records == [("a", "1"), ("c", "3")]
    assert [s.line_number for s in result.skipped] == [3]
    assert _store(path).find_by_id("c") == ("c", "3")


def test_find_by_id(tmp_path: Path) -> None:
    store = _store(tmp_path / "things.csv")
    store.add(("a", "1"))

    assert store.find_by_id("a") == ("a", "1")
    assert store.find_by_id("zzz") is None


def test_update_replaces_first_match(tmp_path: Path) -> None:
    store = _store(tmp_path / "things.csv")
    store.add(("a", "1"))
    store.add(("b", "2"))

    assert store.update(("b", "20"))
    assert not store.update(("c", "3"))

    assert store.list_all() == [("a", "1"), ("b", "20")]


def test_remove(tmp_path: Path) -> None:
    store = _store(tmp_path / "things.csv")
    store.add(("a", "1"))
    store.add(("b", "2"))

    assert store.remove("a")
    assert not store.remove("a")

    assert store.list_all() == [("b", "2")]


def test_replace_all_and_clear(tmp_path: Path) -> None:
    path = tmp_path / "things.csv"
    store = _store(path)
    store.add(("a", "1"))

    assert store.replace_all([("x", "9"), ("y", "8")])
    assert path.read_text(encoding="utf-8") == "key,value\nx,9\ny,8\n"

    assert store.clear()
    assert path.read_text(encoding="utf-8") == "key,value\n"
    assert store.count() == 0


def test_rewrite_leaves_no_temp_files(tmp_path: Path) -> None:
    store = _store(tmp_path / "things.csv")
    store.add(("a", "1"))

    store.update(("a", "2"))

    assert sorted(p.name for p in tmp_path.iterdir()) == ["things.csv"]


def test_failed_rewrite_keeps_old_content(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "things.csv"
    store = _store(path)
    store.add(("a", "1"))

    def failing_replace(*_: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", failing_replace)

    assert not store.update(("a", "2"))
    assert path.read_text(encoding="utf-8") == "key,value\na,1\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["things.csv"]


def test_unreadable_file_yields_error(tmp_path: Path) -> None:
    path = tmp_path / "things.csv"
    store = _store(path)
    path.unlink()

    result = store.load()

    assert not result.ok
    assert result.records == []
    assert store.list_all() == []


def test_add_reports_io_failure(tmp_path: Path) -> None:
    path = tmp_path / "things.csv"
    store = _store(path)
    path.unlink()
    path.mkdir()

    assert not store.add(("a", "1"))
