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

"""Key-value draft store: one JSON file per draft id.

A save replaces the previous content of the same id outright; there is no
version history. The root directory comes from WILLWISHER_DRAFTS_DIR.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from willwisher.models import DocumentKind, Draft, DraftSummary
from willwisher.validators import validate_draft_id

logger = logging.getLogger(__name__)

DRAFTS_DIR_ENV = "WILLWISHER_DRAFTS_DIR"
DEFAULT_DRAFTS_DIR = "~/.willwisher/drafts"


class DraftNotFoundError(KeyError):
    """No draft is stored under the requested id."""

    def __str__(self) -> str:
        return f"Draft not found: {self.args[0]!r}"


class DraftStore:
    def __init__(self, root: str | Path):
        self.root = Path(root).expanduser()

    def _path(self, draft_id: str) -> Path:
        return self.root / f"{validate_draft_id(draft_id)}.json"

    def save(self, draft: Draft) -> Draft:
        """Write *draft*, stamping last_modified. Returns the stored copy."""
        stored = draft.model_copy(
            update={"last_modified": datetime.now(timezone.utc)}
        )
        path = self._path(stored.draft_id)
        self.root.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(stored.model_dump_json(indent=2), encoding="utf-8")
        os.replace(tmp, path)
        logger.info("Saved %s draft %s", stored.kind.value, stored.draft_id)
        return stored

    def get(self, draft_id: str) -> Draft:
        path = self._path(draft_id)
        if not path.is_file():
            raise DraftNotFoundError(draft_id)
        return Draft.model_validate_json(path.read_bytes())

    def delete(self, draft_id: str) -> None:
        path = self._path(draft_id)
        if not path.is_file():
            raise DraftNotFoundError(draft_id)
        path.unlink()
        logger.info("Deleted draft %s", draft_id)

    def list(self, kind: DocumentKind | None = None) -> list[DraftSummary]:
        """Summaries of every stored draft, most recently modified first."""
        if not self.root.is_dir():
            return []
        summaries: list[DraftSummary] = []
        for path in sorted(self.root.glob("*.json")):
            try:
                draft = Draft.model_validate_json(path.read_bytes())
            except (ValidationError, UnicodeDecodeError, OSError) as exc:
                logger.warning("Skipping unreadable draft file %s: %s", path.name, exc)
                continue
            if kind is not None and draft.kind != kind:
                continue
            summaries.append(
                DraftSummary(
                    draft_id=draft.draft_id,
                    kind=draft.kind,
                    title=draft.title,
                    completion_percentage=draft.completion_percentage,
                    last_modified=draft.last_modified,
                )
            )
        epoch = datetime.min.replace(tzinfo=timezone.utc)
        summaries.sort(key=lambda s: s.last_modified or epoch, reverse=True)
        return summaries


def default_store() -> DraftStore:
    """Store rooted at $WILLWISHER_DRAFTS_DIR, read on every call."""
    return DraftStore(os.environ.get(DRAFTS_DIR_ENV, DEFAULT_DRAFTS_DIR))
