"""
CLI Tests
---------
Sub-commands that run without touching the network.
"""

from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

import main as cli


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("HOTELLOOK_MARKER", "HOTELLOOK_TOKEN",
                 "HOTELLOOK_CREDENTIALS_MARKER", "HOTELLOOK_CREDENTIALS_TOKEN"):
        monkeypatch.delenv(name, raising=False)


def test_missing_marker_fails(capsys):
    assert cli.main(["photo-link", "1", "2"]) == 1


def test_demo_results(capsys):
    assert cli.main(["--marker", "1234", "results", "-1", "--sort-by", "price"]) == 0

    out = capsys.readouterr().out
    assert "Corinthia" in out


def test_closed_method_without_token(capsys):
    assert cli.main(["--marker", "1234", "countries"]) == 1

    out = capsys.readouterr().out
    assert "token and marker" in out


def test_empty_search_id(capsys):
    assert cli.main(["--marker", "1234", "results", "0"]) == 1

    assert "Empty search ID" in capsys.readouterr().out


def test_sign(capsys):
    code = cli.main(["--marker", "35290", "--token", "bqadagadoqadjmcocciox1grdvp3ag", "sign"])

    assert code == 0
    assert "marker=35290&signature=abdab6a981233bdaf156a5abc17cb382" in capsys.readouterr().out


def test_marker_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("HOTELLOOK_MARKER", "77777")

    assert cli.main(["photo-link", "277083", "3"]) == 0
    assert "h277083_3/800x520.jpg" in capsys.readouterr().out


def test_log_file_option(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: calls.append(kwargs))
    log_dir = str(tmp_path / "logs")

    assert cli.main(["--log-file", log_dir, "--marker", "1234", "photo-link", "1", "2"]) == 0
    assert calls[0]["file"] is True
    assert calls[0]["log_dir"] == log_dir


def test_console_only_by_default(monkeypatch):
    calls = []
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: calls.append(kwargs))

    assert cli.main(["--marker", "1234", "photo-link", "1", "2"]) == 0
    assert calls[0]["file"] is False
