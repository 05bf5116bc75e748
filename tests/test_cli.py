from __future__ import annotations

from pathlib import Path

import pytest

from linemarks.adapters.textual.app import main


def test_add_then_list(
    tmp_path: Path, source_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    marks = tmp_path / "marks"

    assert main(["--bookmark-file", str(marks), "--add", f"{source_file}:3"]) == 0
    assert main(["--bookmark-file", str(marks), "--list"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("Bookmarked ")
    assert out[1].strip().startswith("1 def main(argv):")
    assert out[1].endswith("cli.py:3")


def test_add_missing_file_fails(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(
        ["--bookmark-file", str(tmp_path / "marks"), "--add", f"{tmp_path}/no.py:1"]
    )

    assert code == 1
    assert "has no line 1" in capsys.readouterr().err


def test_add_rejects_bad_location(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(["--bookmark-file", str(tmp_path / "m"), "--add", "nowhere"])


@pytest.mark.parametrize("line", [0, 8, 999])
def test_add_rejects_line_outside_file(
    tmp_path: Path, source_file: Path, line: int, capsys: pytest.CaptureFixture[str]
) -> None:
    marks = tmp_path / "marks"

    code = main(["--bookmark-file", str(marks), "--add", f"{source_file}:{line}"])

    assert code == 1
    assert f"has no line {line} (7 lines)" in capsys.readouterr().err
    assert not marks.exists()


def test_add_accepts_last_line(tmp_path: Path, source_file: Path) -> None:
    marks = tmp_path / "marks"

    assert main(["--bookmark-file", str(marks), "--add", f"{source_file}:7"]) == 0
    assert marks.read_text(encoding="utf-8").count("\n") == 1
