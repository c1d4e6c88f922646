from __future__ import annotations

import json
from pathlib import Path

import dynamodb_helper


def test_version_matches_version_json() -> None:
    version_file = Path(__file__).resolve().parents[2] / "src" / "dynamodb_helper" / "version.json"
    data = json.loads(version_file.read_text(encoding="utf-8"))
    assert dynamodb_helper.__repo_version__ == data["version"]
    if "-rc." in data["version"]:
        assert "-rc." not in dynamodb_helper.__version__
        assert "rc" in dynamodb_helper.__version__
    else:
        assert dynamodb_helper.__version__ == data["version"]


def test_normalize_repo_version_handles_release_candidates() -> None:
    assert dynamodb_helper._normalize_repo_version("1.2.3") == "1.2.3"
    assert dynamodb_helper._normalize_repo_version("1.2.3-rc.4") == "1.2.3rc4"
    assert dynamodb_helper._normalize_repo_version("1.2.3-rc4") == "1.2.3rc4"
