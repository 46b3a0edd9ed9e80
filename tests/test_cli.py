import json

import pytest

from museumgen import cli


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda level=None: None)


def test_cli_prints_json_summary(capsys):
    assert cli.main(["--seed", "7", "--rooms", "6"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["seed"] == 7
    assert 1 <= summary["rooms_placed"] <= 6
    assert summary["records"][0]["kind"] == "module"


def test_cli_is_deterministic(capsys):
    cli.main(["--seed", "lobby", "--rooms", "8"])
    first = capsys.readouterr().out
    cli.main(["--seed", "lobby", "--rooms", "8"])
    assert capsys.readouterr().out == first


def test_cli_render_appends_map(capsys):
    assert cli.main(["--seed", "3", "--rooms", "5", "--render"]) == 0
    out = capsys.readouterr().out
    assert "@" in out.split("\n\n", 1)[1]


def test_cli_reports_bad_library(tmp_path, capsys):
    bad = tmp_path / "library.json"
    bad.write_text('{"templates": [{"id": 3}]}', encoding="utf-8")
    assert cli.main(["--library", str(bad)]) == 1
    assert "at " in capsys.readouterr().err


def test_cli_rejects_invalid_room_count(capsys):
    assert cli.main(["--rooms", "0"]) == 1
    assert "room_count" in capsys.readouterr().err


@pytest.mark.parametrize("text", ["room_count: [1,\n", "- 1\n- 2\n"])
def test_cli_reports_unusable_params_file(tmp_path, capsys, text):
    p = tmp_path / "params.yaml"
    p.write_text(text, encoding="utf-8")
    assert cli.main(["--params", str(p)]) == 1
    err = capsys.readouterr().err
    assert str(p) in err


def test_cli_cap_all_disables_room_budget(capsys):
    assert cli.main(["--seed", "9", "--rooms", "6", "--cap-all"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["capping"]["skipped_over_budget"] == 0
