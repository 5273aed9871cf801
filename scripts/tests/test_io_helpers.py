"""Category G: I/O Tests

Log reading (local + S3), roster CSV loading, JSON writing and the
recently-used log history. Everything runs against tmp_path.
"""

import io
import json

import pytest
from helpers import make_log, make_row

import rivalry.io_helpers as io_helpers
from rivalry.io_helpers import (
    delete_recent_log, fetch_s3_log, forget_recent_logs, load_recent_logs,
    load_roster_csv, log_name, read_log, remember_log, split_s3_uri, write_json,
)


@pytest.fixture
def history(tmp_path):
    return tmp_path / "recent_logs.json"


class FakeS3:
    """Stands in for a boto3 S3 client."""

    def __init__(self, objects):
        self.objects = objects
        self.calls = []

    def get_object(self, Bucket, Key):
        self.calls.append((Bucket, Key))
        return {"Body": io.BytesIO(self.objects[(Bucket, Key)])}


# ─── G1: Reading logs ────────────────────────────────────────────

class TestG1_ReadLog:

    def test_local_file(self, tmp_path):
        path = tmp_path / "kill_log.csv"
        path.write_text(make_log(make_row()), encoding="utf-8")
        assert read_log(path) == make_log(make_row())

    def test_bom_stripped(self, tmp_path):
        path = tmp_path / "kill_log.csv"
        path.write_bytes("\ufeffheader\n".encode("utf-8"))
        assert read_log(path) == "header\n"

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_log(tmp_path / "nope.csv")

    def test_s3_uri(self):
        client = FakeS3({("logs", "scum/kill_log.csv"): "h\nrow\n".encode("utf-8")})
        assert read_log("s3://logs/scum/kill_log.csv", s3_client=client) == "h\nrow\n"
        assert client.calls == [("logs", "scum/kill_log.csv")]

    def test_fetch_s3_decodes_utf8(self):
        client = FakeS3({("b", "k.csv"): "BRUTÃO".encode("utf-8")})
        assert fetch_s3_log("s3://b/k.csv", client=client) == "BRUTÃO"

    def test_split_s3_uri(self):
        assert split_s3_uri("s3://bucket/a/b.csv") == ("bucket", "a/b.csv")

    @pytest.mark.parametrize("uri", ["s3://bucket", "s3:///key.csv", "/tmp/x.csv"])
    def test_bad_s3_uri(self, uri):
        with pytest.raises(ValueError):
            split_s3_uri(uri)

    def test_log_name(self):
        assert log_name("/data/kill_log.csv") == "kill_log.csv"
        assert log_name("s3://bucket/scum/kill_log_0102.csv") == "kill_log_0102.csv"


# ─── G2: Roster CSV ──────────────────────────────────────────────

class TestG2_RosterCsv:

    def test_load(self, tmp_path):
        path = tmp_path / "roster.csv"
        path.write_text("Name,Faction\nAlice,Red\nBob,Blue\n😎Anna ,Red\n", encoding="utf-8")
        roster = load_roster_csv(path)
        assert roster.factions == ("Red", "Blue")
        assert roster.faction_of("Anna") == "Red"
        assert len(roster) == 3

    def test_blank_rows_skipped(self, tmp_path):
        path = tmp_path / "roster.csv"
        path.write_text("Name,Faction\nAlice,Red\n,Blue\nBob,\nBella,Blue\n", encoding="utf-8")
        roster = load_roster_csv(path)
        assert len(roster) == 2

    def test_three_factions_rejected(self, tmp_path):
        path = tmp_path / "roster.csv"
        path.write_text("Name,Faction\nA,X\nB,Y\nC,Z\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_roster_csv(path)

    def test_missing_falls_back(self, tmp_path):
        roster = load_roster_csv(tmp_path / "none.csv")
        assert roster.factions == ("TDB", "Clan do Carrale")


# ─── G3: JSON writer ─────────────────────────────────────────────

class TestG3_WriteJson:

    def test_writes_into_data_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr(io_helpers, "DATA_DIR", tmp_path / "data")
        path = write_json("report.json", {"name": "BRUTÃO", "n": 1})
        assert path == tmp_path / "data" / "report.json"
        assert json.loads(path.read_text(encoding="utf-8")) == {"name": "BRUTÃO", "n": 1}

    def test_compact(self, tmp_path, monkeypatch):
        monkeypatch.setattr(io_helpers, "DATA_DIR", tmp_path)
        path = write_json("c.json", {"a": [1, 2]}, compact=True)
        assert path.read_text(encoding="utf-8") == '{"a":[1,2]}'


# ─── G4: Recently-used log history ───────────────────────────────

class TestG4_RecentLogs:
    """Newest first, at most 5, one entry per file name."""

    def test_missing_is_empty(self, history):
        assert load_recent_logs(history) == []

    def test_remember_prepends(self, history):
        remember_log("a.csv", "A", history)
        entries = remember_log("b.csv", "B", history)
        assert [e["name"] for e in entries] == ["b.csv", "a.csv"]
        assert load_recent_logs(history) == entries

    def test_capped_at_five(self, history):
        for i in range(7):
            remember_log(f"log{i}.csv", str(i), history)
        entries = load_recent_logs(history)
        assert len(entries) == 5
        assert entries[0]["name"] == "log6.csv"
        assert entries[-1]["name"] == "log2.csv"

    def test_same_name_replaced(self, history):
        remember_log("a.csv", "old", history)
        remember_log("b.csv", "B", history)
        entries = remember_log("a.csv", "new", history)
        assert [e["name"] for e in entries] == ["a.csv", "b.csv"]
        assert entries[0]["content"] == "new"

    def test_entry_fields(self, history):
        entry = remember_log("a.csv", "A", history)[0]
        assert set(entry) == {"name", "content", "uploaded_at"}

    def test_corrupt_file_reset(self, history):
        history.write_text("{not json", encoding="utf-8")
        assert load_recent_logs(history) == []
        assert not history.exists()

    def test_wrong_shape_reset(self, history):
        history.write_text(json.dumps([{"name": "x"}]), encoding="utf-8")
        assert load_recent_logs(history) == []

    def test_delete(self, history):
        for name in ("a.csv", "b.csv", "c.csv"):
            remember_log(name, name, history)
        removed = delete_recent_log(1, history)
        assert removed["name"] == "b.csv"
        assert [e["name"] for e in load_recent_logs(history)] == ["c.csv", "a.csv"]

    def test_delete_out_of_range(self, history):
        remember_log("a.csv", "A", history)
        with pytest.raises(IndexError):
            delete_recent_log(3, history)

    def test_forget(self, history):
        remember_log("a.csv", "A", history)
        forget_recent_logs(history)
        assert not history.exists()
        forget_recent_logs(history)
