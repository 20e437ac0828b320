# Copyright (C) 2025 the contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""Tests for the JSON-file draft store."""

from datetime import datetime, timezone

import pytest

from willwisher.drafts import DraftNotFoundError, DraftStore, default_store
from willwisher.models import DocumentKind, Draft


def _draft(draft_id: str, kind: DocumentKind = DocumentKind.WILL, **record) -> Draft:
    return Draft(draft_id=draft_id, kind=kind, record=record)


@pytest.fixture
def store(tmp_path) -> DraftStore:
    return DraftStore(tmp_path / "store")


class TestSaveAndGet:
    def test_round_trip(self, store) -> None:
        saved = store.save(_draft("jane-will", testator_name="Jane Doe"))
        assert saved.last_modified is not None
        loaded = store.get("jane-will")
        assert loaded.record == {"testator_name": "Jane Doe"}
        assert loaded.kind is DocumentKind.WILL
        assert loaded.last_modified == saved.last_modified

    def test_save_creates_root(self, store) -> None:
        assert not store.root.exists()
        store.save(_draft("a"))
        assert (store.root / "a.json").is_file()

    def test_save_supersedes(self, store) -> None:
        store.save(_draft("a", testator_name="First"))
        store.save(_draft("a", testator_name="Second"))
        assert store.get("a").record == {"testator_name": "Second"}
        assert [s.draft_id for s in store.list()] == ["a"]

    def test_no_temp_file_left(self, store) -> None:
        store.save(_draft("a"))
        assert [p.name for p in store.root.iterdir()] == ["a.json"]

    def test_get_missing(self, store) -> None:
        with pytest.raises(DraftNotFoundError) as excinfo:
            store.get("nope")
        assert str(excinfo.value) == "Draft not found: 'nope'"

    @pytest.mark.parametrize("draft_id", ["", "../escape", "a/b", "x" * 65, "a b"])
    def test_invalid_ids_rejected(self, store, draft_id: str) -> None:
        with pytest.raises(ValueError, match="Invalid draft_id"):
            store.get(draft_id)


class TestDelete:
    def test_delete(self, store) -> None:
        store.save(_draft("a"))
        store.delete("a")
        with pytest.raises(DraftNotFoundError):
            store.get("a")

    def test_delete_missing(self, store) -> None:
        with pytest.raises(DraftNotFoundError):
            store.delete("a")


class TestList:
    def _write(self, store, draft_id, kind, stamp) -> None:
        store.root.mkdir(parents=True, exist_ok=True)
        draft = Draft(
            draft_id=draft_id,
            kind=kind,
            record={},
            last_modified=datetime(2025, 1, stamp, tzinfo=timezone.utc),
        )
        (store.root / f"{draft_id}.json").write_text(draft.model_dump_json())

    def test_empty_when_root_missing(self, store) -> None:
        assert store.list() == []

    def test_newest_first(self, store) -> None:
        self._write(store, "old", DocumentKind.WILL, 1)
        self._write(store, "new", DocumentKind.TRUST, 3)
        self._write(store, "mid", DocumentKind.WILL, 2)
        assert [s.draft_id for s in store.list()] == ["new", "mid", "old"]

    def test_kind_filter(self, store) -> None:
        self._write(store, "w", DocumentKind.WILL, 1)
        self._write(store, "t", DocumentKind.TRUST, 2)
        assert [s.draft_id for s in store.list(DocumentKind.TRUST)] == ["t"]
        assert [s.draft_id for s in store.list(DocumentKind.WILL)] == ["w"]

    def test_unreadable_file_skipped(self, store, caplog) -> None:
        self._write(store, "good", DocumentKind.WILL, 1)
        (store.root / "bad.json").write_text("{not json")
        assert [s.draft_id for s in store.list()] == ["good"]
        assert "bad.json" in caplog.text

    def test_non_utf8_file_skipped(self, store, caplog) -> None:
        self._write(store, "good", DocumentKind.WILL, 1)
        (store.root / "binary.json").write_bytes(b"\xff\xfe\x00garbage")
        assert [s.draft_id for s in store.list()] == ["good"]
        assert "binary.json" in caplog.text

    def test_directory_named_like_draft_skipped(self, store) -> None:
        self._write(store, "good", DocumentKind.WILL, 1)
        (store.root / "folder.json").mkdir()
        assert [s.draft_id for s in store.list()] == ["good"]

    def test_summary_fields(self, store) -> None:
        store.save(
            Draft(
                draft_id="t1",
                kind=DocumentKind.TRUST,
                title="Family trust",
                record={},
                completion_percentage=40,
            )
        )
        (summary,) = store.list()
        assert summary.title == "Family trust"
        assert summary.completion_percentage == 40


class TestDefaultStore:
    def test_reads_environment(self, drafts_dir) -> None:
        assert default_store().root == drafts_dir

    def test_env_change_takes_effect(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("WILLWISHER_DRAFTS_DIR", str(tmp_path / "other"))
        assert default_store().root == tmp_path / "other"
