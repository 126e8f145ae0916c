from collections.abc import Callable
from pathlib import Path

import orjson
import pytest


class TestContextCommand:
    def test_mock_context(
        self,
        omprender_cli: Callable[..., int],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        exit_code = omprender_cli("context")

        assert exit_code == 0
        data = orjson.loads(capsys.readouterr().out)
        assert data["Git"]["Branch"] == "main"
        assert data["Shell"]["Name"] == "bash"
        assert data["Segments"] == {}

    def test_snapshot(
        self,
        omprender_cli: Callable[..., int],
        isolated_env: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        snapshot = isolated_env / "ctx.toml"
        snapshot.write_text('[Git]\nBranch = "dev"\n')

        exit_code = omprender_cli("context", "--context", str(snapshot))

        assert exit_code == 0
        data = orjson.loads(capsys.readouterr().out)
        assert data["Git"]["Branch"] == "dev"
        assert data["Path"]["HomeDir"] == "/home/user"

    def test_invalid_snapshot(
        self,
        omprender_cli: Callable[..., int],
        isolated_env: Path,
    ) -> None:
        snapshot = isolated_env / "ctx.json"
        snapshot.write_text("{")

        assert omprender_cli("context", "-c", str(snapshot)) == 1
