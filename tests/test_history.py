import json

import pytest

from odiai.languages import Language
from odiai.utils.history import (
    DISPLAY_LIMIT,
    HISTORY_KEY,
    MAX_HISTORY,
    HistoryStore,
    TranslationRecord,
)
from odiai.utils.storage import JsonFileStorage

from conftest import make_record


class TestTranslationRecord:

    def test_create_trims_and_pins_target(self):
        record = TranslationRecord.create("  hello  ", "ହେଲୋ", Language.ENGLISH)

        assert record.source_text == "hello"
        assert record.target_language == Language.ODIA
        assert record.created_at > 0
        assert record.label == "English → Odia"

    def test_create_rejects_empty_text(self):
        with pytest.raises(ValueError):
            TranslationRecord.create("   ", "x", Language.AUTO)

    def test_ids_unique_within_session(self):
        ids = {make_record(f"text {i}").id for i in range(200)}
        assert len(ids) == 200

    def test_dict_uses_camel_case_keys(self):
        record = make_record("hello", "ହେଲୋ")
        data = record.to_dict()

        assert set(data) == {"id", "sourceText", "translatedText", "sourceLanguage", "targetLanguage", "createdAt"}
        assert data["targetLanguage"] == "Odia"
        assert TranslationRecord.from_dict(data) == record

    def test_non_odia_target_is_rejected(self, history_path):
        data = make_record("hello").to_dict()
        data["targetLanguage"] = "Hindi"

        with pytest.raises(ValueError):
            TranslationRecord.from_dict(data)

        JsonFileStorage(history_path).set(HISTORY_KEY, json.dumps([data]))
        assert HistoryStore(JsonFileStorage(history_path)).current() == ()


class TestAppend:

    def test_duplicate_of_latest_is_skipped(self, history):
        assert history.append(make_record("hello"))
        assert history.append(make_record("world"))
        assert not history.append(make_record("world"))

        assert [r.source_text for r in history.current()] == ["world", "hello"]

    def test_duplicate_of_older_entry_is_kept(self, history):
        for text in ("hello", "world", "hello"):
            history.append(make_record(text))

        assert [r.source_text for r in history.current()] == ["hello", "world", "hello"]

    def test_capped_at_fifty_newest_first(self, history):
        records = [make_record(f"R{i}") for i in range(1, 52)]
        for record in records:
            history.append(record)

        current = history.current()
        assert len(current) == MAX_HISTORY == 50
        assert current[0].source_text == "R51"
        assert current[-1].source_text == "R2"
        assert "R1" not in {r.source_text for r in current}

    def test_many_appends_never_exceed_cap(self, history):
        for i in range(175):
            history.append(make_record(f"text {i}"))
            assert len(history.current()) <= MAX_HISTORY
        assert len(history.current()) == MAX_HISTORY

    def test_recent_is_compact_slice(self, history):
        for i in range(10):
            history.append(make_record(f"text {i}"))

        recent = history.recent()
        assert len(recent) == DISPLAY_LIMIT
        assert recent[0].source_text == "text 9"

    def test_revision_moves_only_on_accepted_change(self, history):
        history.append(make_record("hello"))
        revision = history.revision
        history.append(make_record("hello"))
        assert history.revision == revision
        history.clear()
        assert history.revision == revision + 1


class TestPersistence:

    def test_append_persists_full_log(self, history, history_path):
        history.append(make_record("hello"))
        history.append(make_record("world"))

        with open(history_path, encoding="utf-8") as f:
            blob = json.load(f)[HISTORY_KEY]
        assert [item["sourceText"] for item in json.loads(blob)] == ["world", "hello"]

    def test_reload_restores_log(self, history, history_path):
        history.append(make_record("नमस्ते", "ନମସ୍କାର", Language.HINDI))

        reloaded = HistoryStore(JsonFileStorage(history_path))
        assert reloaded.current() == history.current()

    def test_clear_empties_memory_and_storage(self, history, history_path):
        history.append(make_record("hello"))
        history.clear()

        assert history.current() == ()
        assert JsonFileStorage(history_path).get(HISTORY_KEY) is None
        assert HistoryStore(JsonFileStorage(history_path)).current() == ()

    def test_corrupt_file_starts_empty(self, history_path):
        with open(history_path, "w", encoding="utf-8") as f:
            f.write("{not json")

        store = HistoryStore(JsonFileStorage(history_path))
        assert store.current() == ()

        # Still usable afterwards
        assert store.append(make_record("hello"))
        assert len(HistoryStore(JsonFileStorage(history_path)).current()) == 1

    @pytest.mark.parametrize("blob", ["{not json", '{"a": 1}', '[{"id": "1"}]', '["x"]'])
    def test_corrupt_blob_starts_empty(self, history_path, blob):
        JsonFileStorage(history_path).set(HISTORY_KEY, blob)
        assert HistoryStore(JsonFileStorage(history_path)).current() == ()

    def test_write_failure_is_not_fatal(self):
        class BrokenStorage:
            def get(self, key):
                return None

            def set(self, key, value):
                raise OSError("disk full")

            def remove(self, key):
                raise OSError("disk full")

        store = HistoryStore(BrokenStorage())
        assert store.append(make_record("hello"))
        assert len(store.current()) == 1
        store.clear()
        assert store.current() == ()


class TestJsonFileStorage:

    def test_missing_file_reads_empty(self, history_path):
        assert JsonFileStorage(history_path).get("anything") is None

    def test_set_get_remove(self, history_path):
        storage = JsonFileStorage(history_path)
        storage.set("a", "1")
        storage.set("b", "ଓଡ଼ିଆ")

        assert storage.get("a") == "1"
        assert JsonFileStorage(history_path).get("b") == "ଓଡ଼ିଆ"

        storage.remove("a")
        assert storage.get("a") is None
        assert storage.get("b") == "ଓଡ଼ିଆ"
