"""Segment-type-specific derived fields.

Each deriver maps a context and validated properties to the fields a
segment publishes under `.Segments.<Key>` and exposes to its own template.
"""

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import cast

from omprender.context import Context, GitChanges, GitContext

from ._properties import (
    GitProperties,
    PathProperties,
    PathStyle,
    SegmentProperties,
    SysinfoProperties,
    TimeProperties,
)
from ._timefmt import format_go_time

Deriver = Callable[[Context, SegmentProperties], dict[str, object]]


def _changes_status(icon: str, changes: GitChanges) -> str:
    if not changes.changed:
        return ""
    return f"{icon}{changes.string}"


def derive_git(context: Context, properties: SegmentProperties) -> dict[str, object]:
    """Fields of a `git` segment. All zero outside a repository."""
    props = cast("GitProperties", properties)
    git = context.git if context.git.is_repo else GitContext.not_a_repo()

    branch_status: list[str] = []
    status: list[str] = []
    if git.is_repo:
        if git.ahead > 0:
            branch_status.append(f"{props.branch_ahead_icon}{git.ahead}")
        if git.behind > 0:
            branch_status.append(f"{props.branch_behind_icon}{git.behind}")
        status = [
            part
            for part in (
                _changes_status(props.working_icon, git.working),
                _changes_status(props.staging_icon, git.staging),
                f"{props.stash_icon}{git.stash_count}" if git.stash_count > 0 else "",
            )
            if part
        ]

    return {
        "HEAD": f"{props.branch_icon}{git.branch}" if git.is_repo else "",
        "BranchStatus": " ".join(branch_status),
        "Status": " ".join(status),
        "UpstreamIcon": "",
        "Branch": git.branch,
        "IsRepo": git.is_repo,
        "Ahead": git.ahead,
        "Behind": git.behind,
        "Working": git.working,
        "Staging": git.staging,
        "StashCount": git.stash_count,
    }


def derive_sysinfo(
    context: Context, properties: SegmentProperties
) -> dict[str, object]:
    props = cast("SysinfoProperties", properties)
    system = context.system
    return {
        "PhysicalPercentUsed": system.physical_percent_used,
        "Precision": props.precision if props.precision is not None else system.precision,
        "PhysicalTotalMemory": system.physical_total_memory,
        "PhysicalFreeMemory": system.physical_free_memory,
        "PhysicalUsedMemory": system.physical_total_memory - system.physical_free_memory,
    }


def derive_shell(context: Context, _properties: SegmentProperties) -> dict[str, object]:
    return {"Name": context.shell.name}


def derive_os(context: Context, properties: SegmentProperties) -> dict[str, object]:
    platform = context.os.platform
    icon = properties.extra(platform) if platform else None
    return {"OS": platform, "Icon": icon if isinstance(icon, str) else ""}


def _split_location(location: str, home: str, home_icon: str) -> tuple[str, list[str]]:
    home = home.rstrip("/")
    if home and (location == home or location.startswith(f"{home}/")):
        rest = location[len(home) :]
        return home_icon, [part for part in rest.split("/") if part]
    root = "/" if location.startswith("/") else ""
    return root, [part for part in location.split("/") if part]


def _join_location(head: str, parts: list[str], separator: str) -> str:
    if head == "/":
        return "/" + separator.join(parts)
    return separator.join([head, *parts] if head else parts)


def _abbreviate(folder: str) -> str:
    return folder[:2] if folder.startswith(".") else folder[:1]


def derive_path(context: Context, properties: SegmentProperties) -> dict[str, object]:
    """Fields of a `path` segment.

    `Path` is the current directory with the home directory replaced by
    `home_icon`, shown according to `style`:

    - full: every folder, joined with `folder_separator_icon`
    - folder: the last folder only
    - letter: parent folders shortened to their first letter
    """
    props = cast("PathProperties", properties)
    location = context.path.current_dir
    head, parts = _split_location(location, context.path.home_dir, props.home_icon)
    folder = parts[-1] if parts else head

    if props.style is PathStyle.FOLDER:
        display = folder
    elif props.style is PathStyle.LETTER:
        shortened = [_abbreviate(part) for part in parts[:-1]] + parts[-1:]
        display = _join_location(head, shortened, props.folder_separator_icon)
    else:
        display = _join_location(head, parts, props.folder_separator_icon)

    return {
        "Path": display,
        "Folder": folder,
        "Location": location,
        "HomeDir": context.path.home_dir,
    }


def derive_time(context: Context, properties: SegmentProperties) -> dict[str, object]:
    props = cast("TimeProperties", properties)
    now = context.time.now
    return {"CurrentDate": now, "Format": format_go_time(now, props.time_format)}


DERIVERS: Mapping[str, Deriver] = MappingProxyType(
    {
        "git": derive_git,
        "sysinfo": derive_sysinfo,
        "shell": derive_shell,
        "os": derive_os,
        "path": derive_path,
        "time": derive_time,
    }
)


def derive_fields(
    segment_type: str, context: Context, properties: SegmentProperties
) -> dict[str, object]:
    """Compute the derived fields of a segment. Unknown types derive nothing."""
    deriver = DERIVERS.get(segment_type)
    if deriver is None:
        return {}
    return deriver(context, properties)
