import pytest

import omprender.config
from omprender.config import raise_if_validation_errors, validate_config
from omprender.exceptions import ConfigValidationError


class TestValidateConfig:
    def test_valid(self) -> None:
        assert validate_config({"render": {"on_error": "empty"}}) == []

    def test_invalid_value(self) -> None:
        (issue,) = validate_config({"logging": {"level": "loud"}})

        assert issue.key == "logging.level"
        assert issue.actual == "loud"
        assert issue.severity == "error"

    def test_unknown_keys_are_ignored(self) -> None:
        assert validate_config({"render": {"colour": True}, "theme": "x"}) == []

    def test_has_no_strict_mode(self) -> None:
        with pytest.raises(TypeError):
            validate_config({}, strict=True)  # type: ignore[call-arg]  # pyright: ignore[reportCallIssue]

    def test_package_exports_only_merged_validation(self) -> None:
        exported = set(omprender.config.__all__)

        assert {"validate_config", "raise_if_validation_errors"} <= exported
        assert not exported & {"get_config_schema", "validate_source"}


class TestRaiseIfValidationErrors:
    def test_no_issues(self) -> None:
        raise_if_validation_errors([])

    def test_raises_for_first_error(self) -> None:
        issues = validate_config({"render": {"on_error": "boom", "strict": "x"}})

        with pytest.raises(ConfigValidationError, match="render.on_error") as exc_info:
            raise_if_validation_errors(issues, source="cli")

        assert exc_info.value.source == "cli"
        assert exc_info.value.key == "render.on_error"
