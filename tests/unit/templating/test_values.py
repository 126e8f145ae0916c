import math
from datetime import datetime

import pytest

from omprender.context import PATH_MISS, GitChanges
from omprender.templating import format_number, is_truthy, stringify


class TestIsTruthy:
    @pytest.mark.parametrize(
        "value", [None, PATH_MISS, False, 0, 0.0, "", [], {}, ()]
    )
    def test_falsy(self, value: object) -> None:
        assert is_truthy(value) is False

    @pytest.mark.parametrize(
        "value", [True, 1, -0.5, "x", [0], {"a": 1}, GitChanges()]
    )
    def test_truthy(self, value: object) -> None:
        assert is_truthy(value) is True


class TestFormatNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (8.0, "8"),
            (-2.0, "-2"),
            (0.1, "0.1"),
            (2.68, "2.68"),
            (1e21, "1e+21"),
            (math.inf, ""),
            (-math.inf, ""),
            (math.nan, ""),
        ],
    )
    def test_formats(self, value: float, expected: str) -> None:
        assert format_number(value) == expected


class TestStringify:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            (PATH_MISS, ""),
            ("text", "text"),
            (True, "true"),
            (False, "false"),
            (42, "42"),
            (16.0, "16"),
            (GitChanges(changed=True, string="3"), "3"),
            (datetime(2024, 1, 2, 3, 4, 5), "2024-01-02 03:04:05"),
            ([1, 2], ""),
        ],
    )
    def test_stringify(self, value: object, expected: str) -> None:
        assert stringify(value) == expected
