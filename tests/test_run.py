"""Tests for the command-line entry point."""

import json
from pathlib import Path

import pytest

import run


@pytest.fixture
def book_dir(tmp_path: Path) -> Path:
    for i, text in enumerate(["aaaa", "bbbb", "cccc"]):
        (tmp_path / f"{i:02d}.html").write_text(f"<p>{text}</p>", encoding="utf-8")
    return tmp_path


class TestMain:
    def test_prints_progress(
        self,
        book_dir: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(
            "sys.argv",
            ["run.py", str(book_dir), "1:0", "--config", str(tmp_path / "none.yaml")],
        )
        assert run.main() == 0

        output = json.loads(capsys.readouterr().out)
        assert output["fraction"] == pytest.approx(4 / 12)
        assert output["section"] == {"current": 1, "total": 3}
        assert output["location"]["total"] == 1

    def test_unresolvable_location(
        self,
        book_dir: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(
            "sys.argv",
            ["run.py", str(book_dir), "bogus", "--config", str(tmp_path / "none.yaml")],
        )
        assert run.main() == 1
        assert capsys.readouterr().out.strip() == "null"
