# pyright: reportAny=false
"""Building contexts from loosely typed snapshot data.

Snapshots use the same PascalCase names that templates use, e.g.::

    {"Git": {"Branch": "feature", "Ahead": 2}, "Env": {"USER": "dev"}}

Every field is optional. Missing fields keep the value of the base context,
which defaults to the mock context from `default_context()`.
"""

from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import ClassVar

import pendulum
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_pascal

from omprender.exceptions import ContextLoadError
from omprender.utils import read_document

from ._defaults import default_context
from ._models import (
    Context,
    EnvironmentVariables,
    GitChanges,
    GitContext,
    OsContext,
    PathContext,
    ShellContext,
    SystemContext,
    TimeContext,
)


class _Snapshot(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_pascal,
        populate_by_name=True,
    )


class GitChangesSnapshot(_Snapshot):
    changed: bool | None = None
    string: str | None = None


class GitSnapshot(_Snapshot):
    branch: str | None = None
    is_repo: bool | None = None
    ahead: int | None = Field(default=None, ge=0)
    behind: int | None = Field(default=None, ge=0)
    working: GitChangesSnapshot | None = None
    staging: GitChangesSnapshot | None = None
    stash_count: int | None = Field(default=None, ge=0)


class SystemSnapshot(_Snapshot):
    physical_percent_used: float | None = None
    precision: int | None = Field(default=None, ge=0)
    physical_total_memory: int | None = Field(default=None, ge=0)
    physical_free_memory: int | None = Field(default=None, ge=0)


class ShellSnapshot(_Snapshot):
    name: str | None = None


class PathSnapshot(_Snapshot):
    current_dir: str | None = None
    home_dir: str | None = None


class TimeSnapshot(_Snapshot):
    now: datetime | None = None

    @field_validator("now", mode="before")
    @classmethod
    def _parse_now(cls, value: object) -> object:
        if isinstance(value, str):
            return pendulum.parse(value)
        return value


class OsSnapshot(_Snapshot):
    platform: str | None = None


class ContextSnapshot(_Snapshot):
    """Partial context as found in snapshot files."""

    env: dict[str, str] | None = None
    git: GitSnapshot | None = None
    system: SystemSnapshot | None = None
    shell: ShellSnapshot | None = None
    path: PathSnapshot | None = None
    time: TimeSnapshot | None = None
    os: OsSnapshot | None = None


def _overrides(
    snapshot: _Snapshot, *, skip: frozenset[str] = frozenset()
) -> dict[str, object]:
    return {
        name: value
        for name in type(snapshot).model_fields
        if name not in skip and (value := getattr(snapshot, name)) is not None
    }


def _apply_changes(
    base: GitChanges, snapshot: GitChangesSnapshot | None
) -> GitChanges:
    if snapshot is None:
        return base
    return replace(base, **_overrides(snapshot))


def _apply_git(base: GitContext, snapshot: GitSnapshot) -> GitContext:
    values = _overrides(snapshot, skip=frozenset({"working", "staging"}))
    return replace(
        base,
        working=_apply_changes(base.working, snapshot.working),
        staging=_apply_changes(base.staging, snapshot.staging),
        **values,
    )


def context_from_mapping(
    data: Mapping[str, object],
    *,
    base: Context | None = None,
) -> Context:
    """Build a Context by merging snapshot data over a base context.

    Args:
        data: Snapshot mapping using template field names.
        base: Context supplying values for fields absent from `data`.
            Defaults to `default_context()`.

    Returns:
        The merged Context.

    Raises:
        ContextLoadError: If the data does not describe a valid context.
    """
    if base is None:
        base = default_context()

    try:
        snapshot = ContextSnapshot.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid context snapshot: {e}"
        raise ContextLoadError(msg) from e

    try:
        return Context(
            env=(
                EnvironmentVariables({**base.env, **snapshot.env})
                if snapshot.env is not None
                else base.env
            ),
            git=(
                _apply_git(base.git, snapshot.git)
                if snapshot.git is not None
                else base.git
            ),
            system=(
                replace(base.system, **_overrides(snapshot.system))
                if snapshot.system is not None
                else base.system
            ),
            shell=(
                replace(base.shell, **_overrides(snapshot.shell))
                if snapshot.shell is not None
                else base.shell
            ),
            path=(
                replace(base.path, **_overrides(snapshot.path))
                if snapshot.path is not None
                else base.path
            ),
            time=(
                replace(base.time, **_overrides(snapshot.time))
                if snapshot.time is not None
                else base.time
            ),
            os=(
                replace(base.os, **_overrides(snapshot.os))
                if snapshot.os is not None
                else base.os
            ),
            segments=base.segments,
        )
    except ValueError as e:
        msg = f"Invalid context snapshot: {e}"
        raise ContextLoadError(msg) from e


def load_context(path: Path, *, base: Context | None = None) -> Context:
    """Load a context snapshot file and merge it over `base`.

    Args:
        path: Path to a JSON, YAML or TOML snapshot.
        base: Context supplying values for absent fields.

    Returns:
        The merged Context.

    Raises:
        ContextLoadError: If the file cannot be read, decoded or validated.
    """
    try:
        data = read_document(path)
    except (OSError, ValueError) as e:
        msg = f"Failed to read context snapshot: {e}"
        raise ContextLoadError(msg, path=path) from e

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        msg = "Context snapshot must be a mapping at the top level"
        raise ContextLoadError(msg, path=path)

    try:
        return context_from_mapping(data, base=base)  # pyright: ignore[reportUnknownArgumentType]
    except ContextLoadError as e:
        raise ContextLoadError(str(e), path=path) from e
