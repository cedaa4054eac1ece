from __future__ import annotations

"""Learner repository over a key-value store.

Four logical keys per learner hold the progress record, user settings, the
session history (most recent first, capped at 50) and the assessment history
(most recent first, capped at 20). Absent or malformed data loads as "no data"
(None or an empty list) and is never raised to the caller.
"""

import json
from datetime import datetime
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..app.explain import trace as xtrace
from ..results.schema import Assessment, ProgressRecord, Session, UserSettings
from .kv import KeyValueStore

SESSION_HISTORY_CAP = 50
ASSESSMENT_HISTORY_CAP = 20

PROGRESS = "progress"
SETTINGS = "settings"
SESSIONS = "sessions"
ASSESSMENTS = "assessments"
ALL_KEYS = (PROGRESS, SETTINGS, SESSIONS, ASSESSMENTS)

M = TypeVar("M", bound=BaseModel)


class LearnerRepository:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    @staticmethod
    def key(learner_id: str, name: str) -> str:
        return f"{learner_id}:{name}"

    # --- raw access ---

    def _read_json(self, key: str) -> Any:
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            xtrace("store_read_failed", {"key": key, "reason": "malformed json"})
            return None

    def _read_model(self, key: str, model: Type[M]) -> Optional[M]:
        data = self._read_json(key)
        if data is None:
            return None
        try:
            return model.model_validate(data)
        except ValidationError as e:
            xtrace("store_read_failed", {"key": key, "reason": f"{e.error_count()} validation errors"})
            return None

    def _read_list(self, key: str, model: Type[M]) -> List[M]:
        data = self._read_json(key)
        if not isinstance(data, list):
            if data is not None:
                xtrace("store_read_failed", {"key": key, "reason": "expected a list"})
            return []
        items: List[M] = []
        for raw in data:
            try:
                items.append(model.model_validate(raw))
            except ValidationError:
                xtrace("store_entry_skipped", {"key": key})
        return items

    def _write_list(self, key: str, items: List[BaseModel]) -> None:
        self.store.set(key, json.dumps([i.model_dump(mode="json") for i in items]))

    # --- progress ---

    def load_progress(self, learner_id: str) -> Optional[ProgressRecord]:
        return self._read_model(self.key(learner_id, PROGRESS), ProgressRecord)

    def save_progress(self, learner_id: str, progress: ProgressRecord) -> None:
        self.store.set(self.key(learner_id, PROGRESS), progress.model_dump_json())

    # --- settings ---

    def load_settings(self, learner_id: str) -> Optional[UserSettings]:
        return self._read_model(self.key(learner_id, SETTINGS), UserSettings)

    def settings_or_default(self, learner_id: str) -> UserSettings:
        settings = self.load_settings(learner_id)
        if settings is None:
            settings = UserSettings()
            self.save_settings(learner_id, settings)
        return settings

    def save_settings(self, learner_id: str, settings: UserSettings) -> None:
        self.store.set(self.key(learner_id, SETTINGS), settings.model_dump_json())

    # --- session history ---

    def session_history(self, learner_id: str) -> List[Session]:
        return self._read_list(self.key(learner_id, SESSIONS), Session)

    def append_session(self, learner_id: str, session: Session) -> List[Session]:
        history = [session, *self.session_history(learner_id)][:SESSION_HISTORY_CAP]
        self._write_list(self.key(learner_id, SESSIONS), history)
        return history

    # --- assessments ---

    def assessments(self, learner_id: str) -> List[Assessment]:
        return self._read_list(self.key(learner_id, ASSESSMENTS), Assessment)

    def append_assessment(self, learner_id: str, assessment: Assessment) -> List[Assessment]:
        history = [assessment, *self.assessments(learner_id)][:ASSESSMENT_HISTORY_CAP]
        self._write_list(self.key(learner_id, ASSESSMENTS), history)
        return history

    # --- whole-learner operations ---

    def clear_all(self, learner_id: str) -> None:
        for name in ALL_KEYS:
            self.store.delete(self.key(learner_id, name))

    def export_data(self, learner_id: str, now: Optional[datetime] = None) -> str:
        progress = self.load_progress(learner_id)
        settings = self.load_settings(learner_id)
        doc = {
            "progress": progress.model_dump(mode="json") if progress else None,
            "settings": settings.model_dump(mode="json") if settings else None,
            "sessions": [s.model_dump(mode="json") for s in self.session_history(learner_id)],
            "assessments": [a.model_dump(mode="json") for a in self.assessments(learner_id)],
            "export_date": (now or datetime.now()).isoformat(),
        }
        return json.dumps(doc, indent=2)

    def import_data(self, learner_id: str, text: str) -> bool:
        """Load an export document. Returns False and writes nothing if it does not validate."""
        try:
            doc = json.loads(text)
            if not isinstance(doc, dict):
                return False
            progress = ProgressRecord.model_validate(doc["progress"]) if doc.get("progress") else None
            settings = UserSettings.model_validate(doc["settings"]) if doc.get("settings") else None
            sessions = [Session.model_validate(s) for s in doc.get("sessions") or []]
            assessments = [Assessment.model_validate(a) for a in doc.get("assessments") or []]
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            xtrace("import_failed", {"reason": type(e).__name__})
            return False

        if progress is not None:
            self.save_progress(learner_id, progress)
        if settings is not None:
            self.save_settings(learner_id, settings)
        if "sessions" in doc:
            self._write_list(self.key(learner_id, SESSIONS), sessions[:SESSION_HISTORY_CAP])
        if "assessments" in doc:
            self._write_list(self.key(learner_id, ASSESSMENTS), assessments[:ASSESSMENT_HISTORY_CAP])
        return True
