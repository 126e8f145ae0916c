"""Deterministic mock context values.

These values stand in for live data collection when previewing a theme. The
clock is the only field that changes between calls unless `now` is given.
"""

from datetime import UTC, datetime

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

DEFAULT_ENV: dict[str, str] = {
    "HOME": "/home/user",
    "USER": "user",
    "PATH": "/usr/local/bin:/usr/bin:/bin",
    "TERM": "xterm-256color",
    "SHELL": "/bin/bash",
    "PWD": "/home/user/projects",
    "WAKAPI_API_KEY": "mock-api-key",
}


def default_context(now: datetime | None = None) -> Context:
    """Build the mock context used when no snapshot is supplied.

    Args:
        now: Clock reading to expose as `.Time.Now`. Defaults to the current
            UTC time.

    Returns:
        A fully populated Context.
    """
    return Context(
        env=EnvironmentVariables(DEFAULT_ENV),
        git=GitContext(
            branch="main",
            is_repo=True,
            ahead=0,
            behind=0,
            working=GitChanges(changed=True, string="1"),
            staging=GitChanges(changed=False, string=""),
            stash_count=0,
        ),
        system=SystemContext(
            physical_percent_used=25.0,
            precision=0,
            physical_total_memory=16_000_000_000,
            physical_free_memory=8_000_000_000,
        ),
        shell=ShellContext(name="bash"),
        path=PathContext(
            current_dir="/home/user/projects/my-project",
            home_dir="/home/user",
        ),
        time=TimeContext(now=now if now is not None else datetime.now(tz=UTC)),
        os=OsContext(platform="ubuntu"),
    )
