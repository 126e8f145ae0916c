from datetime import timedelta
from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from omprender.context import context_from_mapping, default_context, load_context
from omprender.exceptions import ContextLoadError


class TestContextFromMapping:
    def test_empty_mapping_gives_defaults(self) -> None:
        context = context_from_mapping({})

        assert context.git.branch == "main"
        assert context.shell.name == "bash"

    def test_partial_git_keeps_other_fields(self) -> None:
        context = context_from_mapping({"Git": {"Branch": "feature", "Ahead": 2}})

        assert context.git.branch == "feature"
        assert context.git.ahead == 2
        assert context.git.working.string == "1"

    def test_partial_changes(self) -> None:
        context = context_from_mapping({"Git": {"Working": {"String": "5"}}})

        assert context.git.working.changed is True
        assert context.git.working.string == "5"

    def test_env_is_merged(self) -> None:
        context = context_from_mapping({"Env": {"FOO": "bar"}})

        assert context.env["FOO"] == "bar"
        assert context.env["HOME"] == "/home/user"

    def test_snake_case_names_are_accepted(self) -> None:
        context = context_from_mapping({"git": {"is_repo": False}})

        assert context.git.is_repo is False

    def test_unknown_keys_are_ignored(self) -> None:
        context = context_from_mapping({"Battery": {"Percentage": 50}})

        assert context == default_context(now=context.time.now)

    def test_timestamps_are_parsed(self) -> None:
        context = context_from_mapping({"Time": {"Now": "2024-03-09T14:05:07+01:00"}})

        assert context.time.now.hour == 14
        assert context.time.now.utcoffset() == timedelta(hours=1)

    def test_custom_base(self) -> None:
        base = context_from_mapping({"Shell": {"Name": "zsh"}})

        context = context_from_mapping({"Os": {"Platform": "arch"}}, base=base)

        assert context.shell.name == "zsh"
        assert context.os.platform == "arch"

    @pytest.mark.parametrize(
        "data",
        [
            {"Git": {"Ahead": -1}},
            {"Git": "main"},
            {"System": {"PhysicalFreeMemory": 20_000_000_000}},
            {"Time": {"Now": "not a date"}},
        ],
    )
    def test_invalid_snapshots(self, data: dict[str, object]) -> None:
        with pytest.raises(ContextLoadError, match="Invalid context snapshot"):
            context_from_mapping(data)


class TestLoadContext:
    def test_json(self, fs: FakeFilesystem) -> None:
        path = Path("/snap/context.json")
        fs.create_file(path, contents='{"Git": {"Branch": "json"}}')

        assert load_context(path).git.branch == "json"

    def test_yaml(self, fs: FakeFilesystem) -> None:
        path = Path("/snap/context.yaml")
        fs.create_file(path, contents="Shell:\n  Name: fish\n")

        assert load_context(path).shell.name == "fish"

    def test_toml(self, fs: FakeFilesystem) -> None:
        path = Path("/snap/context.toml")
        fs.create_file(path, contents='[Os]\nPlatform = "darwin"\n')

        assert load_context(path).os.platform == "darwin"

    def test_empty_yaml_gives_defaults(self, fs: FakeFilesystem) -> None:
        path = Path("/snap/empty.yml")
        fs.create_file(path, contents="")

        assert load_context(path).git.branch == "main"

    def test_missing_file(self, fs: FakeFilesystem) -> None:
        path = Path("/snap/missing.json")

        with pytest.raises(ContextLoadError) as exc_info:
            load_context(path)

        assert exc_info.value.path == path

    def test_unsupported_suffix(self, fs: FakeFilesystem) -> None:
        path = Path("/snap/context.txt")
        fs.create_file(path, contents="Git: {}")

        with pytest.raises(ContextLoadError, match="Unsupported document type"):
            load_context(path)

    def test_invalid_json(self, fs: FakeFilesystem) -> None:
        path = Path("/snap/context.json")
        fs.create_file(path, contents="{not json")

        with pytest.raises(ContextLoadError, match="Failed to read"):
            load_context(path)

    def test_top_level_must_be_mapping(self, fs: FakeFilesystem) -> None:
        path = Path("/snap/context.json")
        fs.create_file(path, contents="[1, 2]")

        with pytest.raises(ContextLoadError, match="mapping"):
            load_context(path)

    def test_validation_error_carries_path(self, fs: FakeFilesystem) -> None:
        path = Path("/snap/context.json")
        fs.create_file(path, contents='{"Git": {"Ahead": -5}}')

        with pytest.raises(ContextLoadError) as exc_info:
            load_context(path)

        assert exc_info.value.path == path
