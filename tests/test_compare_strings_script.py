import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "compare_strings.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("compare_strings", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_rank_candidates_orders_by_visual_distance(script, comparer):
    rows = script.rank_candidates(comparer, "test", ["", "text", "test"])
    assert [row["candidate"] for row in rows] == ["test", "text", ""]
    assert rows[0]["visual_distance"] == 0.0
    assert rows[0]["edit_distance"] == 0
    assert rows[1]["edit_distance"] == 1
    assert rows[2]["edit_distance"] == 4
    assert all(row["debug_image"] is None for row in rows)
    assert "steps" not in rows[0]


def test_main_writes_json_report(script, tmp_path, capsys):
    output = tmp_path / "report.json"
    exit_code = script.main(["example", "exarnple", "sample", "--output_json", str(output)])

    assert exit_code == 0
    report = json.loads(output.read_text(encoding="utf-8"))
    assert report["metadata"]["reference"] == "example"
    assert report["metadata"]["threshold"] == 0.085
    distances = [row["visual_distance"] for row in report["results"]]
    assert distances == sorted(distances)
    assert {row["candidate"] for row in report["results"]} == {"exarnple", "sample"}
    assert "Reference: 'example'" in capsys.readouterr().out


def test_main_reads_candidates_file_and_writes_debug_images(script, tmp_path):
    candidates = tmp_path / "candidates.txt"
    candidates.write_text("rn\n\nm\n", encoding="utf-8")
    output = tmp_path / "report.json"
    debug_dir = tmp_path / "debug"

    exit_code = script.main(
        [
            "m",
            "--candidates_file",
            str(candidates),
            "--debug",
            "--debug_dir",
            str(debug_dir),
            "--output_json",
            str(output),
        ]
    )

    assert exit_code == 0
    results = json.loads(output.read_text(encoding="utf-8"))["results"]
    assert [row["candidate"] for row in results] == ["m", "rn"]
    assert results[0]["steps"] == {"MATCH": results[0]["steps"]["MATCH"]}
    assert results[0]["path"][0]["type"] == "MATCH"
    assert (debug_dir / "m.png").exists()
    assert (debug_dir / "rn.png").exists()


def test_main_without_candidates_fails(script, tmp_path):
    assert script.main(["example"]) == 1
    assert script.main(["example", "--candidates_file", str(tmp_path / "missing.txt")]) == 1


def test_load_candidates_skips_blank_lines(script, tmp_path):
    path = tmp_path / "c.txt"
    path.write_text("a b\n\n  \nc\r\n", encoding="utf-8")
    assert script.load_candidates(path) == ["a b", "c"]


def test_main_without_argv_reads_command_line(script, monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["compare_strings.py", "test", "text"])
    assert script.main() == 0
    assert "Reference: 'test'" in capsys.readouterr().out
