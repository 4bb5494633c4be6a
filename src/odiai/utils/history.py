"""
Bounded translation history, newest first.

- At most MAX_HISTORY records; the oldest are evicted on insert
- A record is skipped when its source text equals the newest record's
  (the debounce loop re-translates the same text, don't spam the log)
- Persisted as one JSON array under a single storage key, rewritten in
  full on every accepted append and removed on clear
"""

import itertools
import json
import threading
import time
from dataclasses import dataclass
from datetime import datetime

from odiai.languages import Language, TARGET_LANGUAGE
from odiai.utils.storage import JsonFileStorage, StorageError

HISTORY_KEY = "odia_translator_history"
MAX_HISTORY = 50
DISPLAY_LIMIT = 6

_id_counter = itertools.count()


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class TranslationRecord:
    id: str
    source_text: str
    translated_text: str
    source_language: Language
    target_language: Language
    created_at: int  # epoch ms

    @classmethod
    def create(cls, source_text: str, translated_text: str, source_language: Language) -> "TranslationRecord":
        source_text = source_text.strip()
        if not source_text:
            raise ValueError("source_text must not be empty")
        created_at = _now_ms()
        return cls(
            id=f"{created_at}-{next(_id_counter)}",
            source_text=source_text,
            translated_text=translated_text,
            source_language=source_language,
            target_language=TARGET_LANGUAGE,
            created_at=created_at,
        )

    @property
    def label(self) -> str:
        return f"{self.source_language.value} → {self.target_language.value}"

    @property
    def time_label(self) -> str:
        return datetime.fromtimestamp(self.created_at / 1000).strftime("%H:%M")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sourceText": self.source_text,
            "translatedText": self.translated_text,
            "sourceLanguage": self.source_language.value,
            "targetLanguage": self.target_language.value,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TranslationRecord":
        target_language = Language(data["targetLanguage"])
        if target_language != TARGET_LANGUAGE:
            raise ValueError(f"Unexpected target language: {target_language.value}")
        return cls(
            id=str(data["id"]),
            source_text=data["sourceText"],
            translated_text=data["translatedText"],
            source_language=Language(data["sourceLanguage"]),
            target_language=target_language,
            created_at=int(data["createdAt"]),
        )


class HistoryStore:
    """
    Owns the history log and its persisted copy.

    One instance per application, injected into whatever needs it.
    """

    def __init__(self, storage: JsonFileStorage, max_entries: int = MAX_HISTORY):
        self.storage = storage
        self.max_entries = max_entries
        self.revision = 0  # bumped on every accepted change
        self._lock = threading.Lock()
        self._records: list[TranslationRecord] = self._load()

    def _load(self) -> list[TranslationRecord]:
        """Read the persisted log once. Any failure means an empty log."""
        try:
            raw = self.storage.get(HISTORY_KEY)
            if raw is None:
                return []
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("history blob is not a list")
            records = [TranslationRecord.from_dict(item) for item in data]
        except (StorageError, ValueError, KeyError, TypeError) as e:
            print(f"⚠️ Failed to load history, starting empty: {e}")
            return []

        print(f"📚 Loaded {len(records)} history entries")
        return records[: self.max_entries]

    def _persist(self):
        blob = json.dumps([r.to_dict() for r in self._records], ensure_ascii=False)
        try:
            self.storage.set(HISTORY_KEY, blob)
        except OSError as e:
            print(f"⚠️ Failed to persist history: {e}")

    def append(self, record: TranslationRecord) -> bool:
        """
        Insert a record at the front.

        Returns:
            False if skipped as a repeat of the newest entry, True otherwise
        """
        with self._lock:
            if self._records and self._records[0].source_text == record.source_text:
                return False

            self._records = [record, *self._records][: self.max_entries]
            self.revision += 1
            self._persist()
            return True

    def clear(self):
        with self._lock:
            self._records = []
            self.revision += 1
            try:
                self.storage.remove(HISTORY_KEY)
            except OSError as e:
                print(f"⚠️ Failed to remove persisted history: {e}")
        print("🗑️  History cleared")

    def current(self) -> tuple[TranslationRecord, ...]:
        return tuple(self._records)

    def recent(self, limit: int = DISPLAY_LIMIT) -> tuple[TranslationRecord, ...]:
        return tuple(self._records[:limit])

    def __len__(self) -> int:
        return len(self._records)
