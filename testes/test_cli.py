import json
import os
import shlex
import sys
import zipfile

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
pytest.importorskip("bs4")

from main import main


@pytest.fixture
def config_file(tmp_path):
    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "About Us.md").write_text(
        "---\ntitle: About us\npath: /about\n---\n# About\n\nWe are **nice**.\n", encoding="utf-8"
    )
    (tmp_path / "static").mkdir()
    cfg = {
        "bundle": {
            "static_dir": str(tmp_path / "static"),
            "output_dir": str(tmp_path),
            "reports_dir": str(tmp_path / "reports"),
        },
        "rich_text": {"converter": "subprocess", "command": "definitely-not-a-real-converter-binary"},
        "content_types": {"page": {"source_glob": str(pages / "*.md")}},
    }
    path = tmp_path / "bundle_config.json"
    path.write_text(json.dumps(cfg), encoding="utf-8")
    return path


def test_list_content_types(config_file, capsys):
    assert main(["--config", str(config_file), "list"]) == 0
    out = capsys.readouterr().out
    for name in ("event", "newsitem", "page"):
        assert name in out


def test_bundle_with_local_converter(config_file, tmp_path):
    assert main(["--config", str(config_file), "page", "--converter", "local"]) == 0
    with zipfile.ZipFile(tmp_path / "page_upload.zip") as zf:
        doc = json.loads(zf.read("new_about-us.json"))
    assert doc["uid"] == "about"
    assert doc["body"][0] == {"type": "heading1", "text": "About", "spans": []}
    assert doc["body"][1]["spans"] == [{"start": 7, "end": 11, "type": "strong"}]


def test_pre_flight_failure_exits_non_zero(config_file, capsys):
    assert main(["--config", str(config_file), "page"]) == 1
    assert "[ERROR]" in capsys.readouterr().out


def test_converter_failure_exits_non_zero(config_file, tmp_path):
    assert main(["--config", str(config_file), "page", "--skip-checks"]) == 1
    with open(tmp_path / "reports" / "errors.jsonl", encoding="utf-8") as f:
        assert json.loads(f.readline())["code"] == "RICH_TEXT"


def test_converter_command_defaults_to_environment(config_file, tmp_path, monkeypatch):
    cfg = json.loads(config_file.read_text(encoding="utf-8"))
    del cfg["rich_text"]["command"]
    config_file.write_text(json.dumps(cfg), encoding="utf-8")
    script = 'import json, sys; print(json.dumps([{"type": "paragraph", "text": sys.argv[1], "spans": []}]))'
    monkeypatch.setenv("PRISMIC_BUNDLER_RICH_TEXT_CMD", f"{shlex.quote(sys.executable)} -c {shlex.quote(script)}")

    assert main(["--config", str(config_file), "page"]) == 0
    with zipfile.ZipFile(tmp_path / "page_upload.zip") as zf:
        doc = json.loads(zf.read("new_about-us.json"))
    assert doc["body"][0]["type"] == "paragraph"
    assert doc["body"][0]["text"].startswith("# About")
