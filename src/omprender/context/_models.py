"""Typed context records exposed to templates.

Every section of the context is a frozen dataclass. Templates address fields
by their PascalCase names; each record type carries an explicit table that
maps those names to accessors, so path resolution never reflects over
arbitrary attributes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from operator import attrgetter
from types import MappingProxyType
from typing import Any, ClassVar, final


@final
class _PathMiss:
    """Sentinel returned by lookups for names that do not exist."""

    def __repr__(self) -> str:
        return "PATH_MISS"

    def __bool__(self) -> bool:
        return False


PATH_MISS = _PathMiss()

Accessor = Callable[[Any], object]  # pyright: ignore[reportExplicitAny]


class Record:
    """Base class for context sections addressable from templates."""

    __slots__ = ()

    FIELDS: ClassVar[Mapping[str, Accessor]] = {}
    ALIASES: ClassVar[frozenset[str]] = frozenset()

    def lookup(self, name: str) -> object:
        """Return the value of the template field `name`, or PATH_MISS."""
        accessor = self.FIELDS.get(name)
        if accessor is None:
            return PATH_MISS
        return accessor(self)

    def template_text(self) -> str:
        """Text rendered when the whole record is printed by a placeholder."""
        return ""

    def to_dict(self) -> dict[str, object]:
        """Convert to a plain dictionary keyed by template field names."""
        return {
            name: to_plain(self.lookup(name))
            for name in self.FIELDS
            if name not in self.ALIASES
        }


def to_plain(value: object) -> object:
    """Convert records, mappings and datetimes to JSON-ready values."""
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {str(k): to_plain(v) for k, v in value.items()}  # pyright: ignore[reportUnknownVariableType,reportUnknownArgumentType]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class EnvironmentVariables(Mapping[str, str]):
    """Read-only view over pre-collected environment variables.

    Template lookups of unknown names resolve to an empty string.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data: Mapping[str, str] = MappingProxyType(dict(data or {}))

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"EnvironmentVariables({dict(self._data)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self._data) == dict(other)  # pyright: ignore[reportUnknownArgumentType]
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def lookup(self, name: str) -> str:
        return self._data.get(name, "")


@dataclass(frozen=True, slots=True)
class GitChanges(Record):
    """Working tree or staging area summary."""

    changed: bool = False
    string: str = ""

    FIELDS: ClassVar[Mapping[str, Accessor]] = MappingProxyType(
        {
            "Changed": attrgetter("changed"),
            "String": attrgetter("string"),
        }
    )

    def template_text(self) -> str:
        return self.string


@dataclass(frozen=True, slots=True)
class GitContext(Record):
    """Repository state.

    When `is_repo` is False every other field reads as its zero value through
    template lookups, whatever the instance holds.
    """

    branch: str = ""
    is_repo: bool = True
    ahead: int = 0
    behind: int = 0
    working: GitChanges = field(default_factory=GitChanges)
    staging: GitChanges = field(default_factory=GitChanges)
    stash_count: int = 0

    FIELDS: ClassVar[Mapping[str, Accessor]] = MappingProxyType(
        {
            "Branch": attrgetter("branch"),
            "HEAD": attrgetter("branch"),
            "IsRepo": attrgetter("is_repo"),
            "Ahead": attrgetter("ahead"),
            "Behind": attrgetter("behind"),
            "Working": attrgetter("working"),
            "Staging": attrgetter("staging"),
            "StashCount": attrgetter("stash_count"),
        }
    )
    ALIASES: ClassVar[frozenset[str]] = frozenset({"HEAD"})

    @classmethod
    def not_a_repo(cls) -> GitContext:
        """Return the zero-valued state of a directory outside any repository."""
        return cls(is_repo=False)

    def lookup(self, name: str) -> object:
        accessor = self.FIELDS.get(name)
        if accessor is None:
            return PATH_MISS
        if not self.is_repo:
            return accessor(_NO_REPO)
        return accessor(self)


_NO_REPO = GitContext.not_a_repo()


@dataclass(frozen=True, slots=True)
class SystemContext(Record):
    """CPU and memory figures.

    Raises:
        ValueError: If free memory is negative or exceeds total memory.
    """

    physical_percent_used: float = 0.0
    precision: int = 0
    physical_total_memory: int = 0
    physical_free_memory: int = 0

    FIELDS: ClassVar[Mapping[str, Accessor]] = MappingProxyType(
        {
            "PhysicalPercentUsed": attrgetter("physical_percent_used"),
            "Precision": attrgetter("precision"),
            "PhysicalTotalMemory": attrgetter("physical_total_memory"),
            "PhysicalFreeMemory": attrgetter("physical_free_memory"),
        }
    )

    def __post_init__(self) -> None:
        if not 0 <= self.physical_free_memory <= self.physical_total_memory:
            msg = (
                "PhysicalFreeMemory must be between 0 and PhysicalTotalMemory, "
                f"got {self.physical_free_memory} of {self.physical_total_memory}"
            )
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ShellContext(Record):
    name: str = ""

    FIELDS: ClassVar[Mapping[str, Accessor]] = MappingProxyType(
        {"Name": attrgetter("name")}
    )


@dataclass(frozen=True, slots=True)
class PathContext(Record):
    current_dir: str = ""
    home_dir: str = ""

    FIELDS: ClassVar[Mapping[str, Accessor]] = MappingProxyType(
        {
            "CurrentDir": attrgetter("current_dir"),
            "HomeDir": attrgetter("home_dir"),
        }
    )


@dataclass(frozen=True, slots=True)
class TimeContext(Record):
    now: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    FIELDS: ClassVar[Mapping[str, Accessor]] = MappingProxyType(
        {"Now": attrgetter("now")}
    )


@dataclass(frozen=True, slots=True)
class OsContext(Record):
    platform: str = ""

    FIELDS: ClassVar[Mapping[str, Accessor]] = MappingProxyType(
        {"Platform": attrgetter("platform")}
    )


SegmentFields = Mapping[str, object]

# Sections whose fields are also reachable directly from the root scope,
# searched in this order.
_PROMOTED: tuple[str, ...] = ("system", "git", "shell", "path")


def _empty_segments() -> Mapping[str, SegmentFields]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Context(Record):
    """Immutable snapshot of everything a template may reference.

    Attributes:
        env: Pre-collected environment variables.
        git: Repository state.
        system: CPU and memory figures.
        shell: Shell information.
        path: Current and home directories.
        time: Clock reading for the render pass.
        os: Platform information.
        segments: Derived fields of already processed segments, keyed by
            segment name (e.g. "Git").
    """

    env: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    git: GitContext = field(default_factory=GitContext.not_a_repo)
    system: SystemContext = field(default_factory=SystemContext)
    shell: ShellContext = field(default_factory=ShellContext)
    path: PathContext = field(default_factory=PathContext)
    time: TimeContext = field(default_factory=TimeContext)
    os: OsContext = field(default_factory=OsContext)
    segments: Mapping[str, SegmentFields] = field(default_factory=_empty_segments)

    FIELDS: ClassVar[Mapping[str, Accessor]] = MappingProxyType(
        {
            "Env": attrgetter("env"),
            "Git": attrgetter("git"),
            "System": attrgetter("system"),
            "Shell": attrgetter("shell"),
            "Path": attrgetter("path"),
            "Time": attrgetter("time"),
            "Os": attrgetter("os"),
            "Segments": attrgetter("segments"),
        }
    )

    def lookup(self, name: str) -> object:
        accessor = self.FIELDS.get(name)
        if accessor is not None:
            return accessor(self)
        for section_name in _PROMOTED:
            section: Record = getattr(self, section_name)
            value = section.lookup(name)
            if value is not PATH_MISS:
                return value
        return PATH_MISS

    def with_segment(self, name: str, fields: SegmentFields) -> Context:
        """Return a copy with `fields` registered under `Segments.<name>`.

        Args:
            name: Segment key, e.g. "Git".
            fields: Derived fields of the processed segment.

        Returns:
            A new Context; this instance is left untouched.
        """
        segments = {**self.segments, name: MappingProxyType(dict(fields))}
        return replace(self, segments=MappingProxyType(segments))
