from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem
from pytest_mock import MockerFixture

from omprender.enums import Alignment, SegmentStyle
from omprender.exceptions import ThemeLoadError, ThemeValidationError
from omprender.theme import Segment, load_theme, theme_from_mapping

THEME_JSON = """
{
  "$schema": "https://example.invalid/schema.json",
  "version": 2,
  "final_space": true,
  "blocks": [
    {
      "type": "prompt",
      "alignment": "left",
      "segments": [
        {
          "type": "path",
          "style": "powerline",
          "foreground": "#ffffff",
          "background": "#61AFEF",
          "template": " {{ .Path }} ",
          "properties": {"style": "folder"}
        },
        {"type": "git", "alias": "Repo", "template": "{{ .HEAD }}"}
      ]
    },
    {"alignment": "right", "newline": true, "segments": []}
  ]
}
"""

THEME_YAML = """
blocks:
  - segments:
      - type: shell
        style: diamond
        leading_diamond: "<"
        trailing_diamond: ">"
"""


class TestSegment:
    @pytest.mark.parametrize(
        ("segment_type", "key"),
        [
            ("sysinfo", "Sysinfo"),
            ("git", "Git"),
            ("battery_x", "BatteryX"),
            ("node_js_version", "NodeJsVersion"),
        ],
    )
    def test_key_defaults_to_camel_cased_type(
        self, segment_type: str, key: str
    ) -> None:
        assert Segment(type=segment_type).key == key

    def test_alias_wins(self) -> None:
        assert Segment(type="git", alias="Repo").key == "Repo"

    def test_type_is_required(self) -> None:
        with pytest.raises(ValueError, match="type"):
            Segment(type="")


class TestThemeFromMapping:
    def test_defaults(self) -> None:
        theme = theme_from_mapping({"blocks": [{"segments": [{"type": "text"}]}]})

        (block,) = theme.blocks
        assert block.type == "prompt"
        assert block.alignment is Alignment.LEFT
        assert block.newline is False
        assert block.segments[0].style is SegmentStyle.PLAIN
        assert block.segments[0].template is None

    def test_validation_issues_name_the_field(self) -> None:
        with pytest.raises(ThemeValidationError) as exc_info:
            theme_from_mapping(
                {"blocks": [{"alignment": "center", "segments": [{"style": "plain"}]}]}
            )

        issues = exc_info.value.issues
        assert any(issue.startswith("blocks.0.alignment") for issue in issues)
        assert any(issue.startswith("blocks.0.segments.0.type") for issue in issues)


class TestLoadTheme:
    def test_json(self, fs: FakeFilesystem) -> None:
        path = Path("/themes/theme.omp.json")
        fs.create_file(path, contents=THEME_JSON)

        theme = load_theme(path)

        assert theme.final_space is True
        assert len(theme.blocks) == 2
        path_segment, git_segment = theme.blocks[0].segments
        assert path_segment.style is SegmentStyle.POWERLINE
        assert path_segment.properties == {"style": "folder"}
        assert git_segment.key == "Repo"
        assert theme.blocks[1].alignment is Alignment.RIGHT
        assert theme.blocks[1].newline is True

    def test_yaml(self, fs: FakeFilesystem) -> None:
        path = Path("/themes/theme.omp.yaml")
        fs.create_file(path, contents=THEME_YAML)

        segment = load_theme(path).blocks[0].segments[0]

        assert segment.style is SegmentStyle.DIAMOND
        assert (segment.leading_diamond, segment.trailing_diamond) == ("<", ">")

    def test_toml(self, fs: FakeFilesystem) -> None:
        path = Path("/themes/theme.omp.toml")
        fs.create_file(
            path,
            contents='[[blocks]]\n[[blocks.segments]]\ntype = "os"\n',
        )

        assert load_theme(path).blocks[0].segments[0].type == "os"

    def test_missing_file(self, fs: FakeFilesystem) -> None:
        with pytest.raises(ThemeLoadError, match="Theme file not found"):
            load_theme(Path("/themes/missing.json"))

    def test_undecodable_file(self, fs: FakeFilesystem) -> None:
        path = Path("/themes/broken.json")
        fs.create_file(path, contents="{")

        with pytest.raises(ThemeLoadError) as exc_info:
            load_theme(path)

        assert exc_info.value.path == path

    def test_top_level_must_be_mapping(self, fs: FakeFilesystem) -> None:
        path = Path("/themes/list.yaml")
        fs.create_file(path, contents="- a\n- b\n")

        with pytest.raises(ThemeValidationError, match="mapping"):
            load_theme(path)

    def test_invalid_document_carries_path(self, fs: FakeFilesystem) -> None:
        path = Path("/themes/bad.json")
        fs.create_file(path, contents='{"blocks": [{"segments": [{}]}]}')

        with pytest.raises(ThemeValidationError) as exc_info:
            load_theme(path)

        assert exc_info.value.path == path

    def test_logs_load(self, fs: FakeFilesystem, mocker: MockerFixture) -> None:
        path = Path("/themes/theme.omp.json")
        fs.create_file(path, contents=THEME_JSON)
        logger = mocker.MagicMock()

        load_theme(path, logger=logger)

        logger.debug.assert_called_once_with(
            "theme_loaded", path=str(path), blocks=2, segments=2
        )
