"""Tests for high-score persistence."""

import json
from pathlib import Path

from buzz_app.core.services.high_score_store import HighScoreStore


class TestHighScoreStore:
    def test_missing_file_reads_zero(self, tmp_path):
        assert HighScoreStore(tmp_path / "none.json").value == 0

    def test_record_persists_only_improvements(self, tmp_path):
        path = tmp_path / "scores" / "high_score.json"
        store = HighScoreStore(path)
        assert store.record(250)
        assert not store.record(250)
        assert not store.record(100)
        assert json.loads(path.read_text(encoding="utf-8")) == {"buzz_quiz_high_score": 250}
        assert HighScoreStore(path).value == 250

    def test_running_maximum(self, tmp_path):
        store = HighScoreStore(tmp_path / "high_score.json")
        for score in (120, 80, 300, 299, 0):
            store.record(score)
        assert store.value == 300

    def test_corrupt_file_reads_zero(self, tmp_path, caplog):
        path = tmp_path / "high_score.json"
        path.write_text("not json at all", encoding="utf-8")
        assert HighScoreStore(path).value == 0
        assert "malformed" in caplog.text

    def test_custom_key(self, tmp_path):
        path = tmp_path / "high_score.json"
        path.write_text(json.dumps({"other": 40, "party": 75}), encoding="utf-8")
        assert HighScoreStore(path, key="party").value == 75

    def test_write_failure_keeps_memory_value(self, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        # Parent path is a regular file, so the write cannot succeed.
        store = HighScoreStore(blocker / "high_score.json")
        assert store.record(500)
        assert store.value == 500
        assert "Could not persist" in caplog.text

    def test_failed_replace_keeps_previous_record_on_disk(self, tmp_path, monkeypatch, caplog):
        path = tmp_path / "high_score.json"
        assert HighScoreStore(path).record(900)

        def refuse_replace(self, target):
            raise OSError("disk full")

        monkeypatch.setattr(Path, "replace", refuse_replace)
        store = HighScoreStore(path)
        assert store.record(1000)
        assert store.value == 1000
        assert "Could not persist" in caplog.text
        monkeypatch.undo()

        assert HighScoreStore(path).value == 900
        assert not (tmp_path / "high_score.json.tmp").exists()

    def test_out_of_range_number_reads_zero(self, tmp_path, caplog):
        path = tmp_path / "high_score.json"
        path.write_text('{"buzz_quiz_high_score": 1e400}', encoding="utf-8")
        assert HighScoreStore(path).value == 0
        assert "malformed" in caplog.text
