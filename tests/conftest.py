from __future__ import annotations

import os
from pathlib import Path

# Keep telelog quiet before linemarks.runtime.telemetry configures itself.
os.environ.setdefault("LINEMARKS_DISABLE_CONSOLE", "1")

import pytest

from linemarks.config import LinemarksConfig


@pytest.fixture()
def config(tmp_path: Path) -> LinemarksConfig:
    return LinemarksConfig(bookmark_file=tmp_path / "bookmarks.txt", preview_width=24)


@pytest.fixture()
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "project" / "cli.py"
    path.parent.mkdir()
    path.write_text(
        "import sys\n"
        "\n"
        "def main(argv):\n"
        "    return   run(argv)   # entry\n"
        "\n"
        "if __name__ == '__main__':\n"
        "    sys.exit(main(sys.argv))\n",
        encoding="utf-8",
    )
    return path
