"""Environment Context — home directory and account identity, read once at startup.

Invariants:
    - Immutable after construction; handlers never consult os.environ themselves
    - expand() only rewrites a leading "~"

Design Decisions:
    - Well-known macOS locations derived from home here, so tests can point them
      at a fake home by constructing a different context
"""

import getpass
import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class EnvironmentContext:
    home: Path
    user: str
    uid: int

    @classmethod
    def from_process(cls, home_override: str | None = None) -> "EnvironmentContext":
        home = Path(home_override).expanduser() if home_override else Path.home()
        return cls(home=home, user=getpass.getuser(), uid=os.getuid())

    def expand(self, path: str) -> str:
        if path == "~":
            return str(self.home)
        if path.startswith("~/"):
            return str(self.home / path[2:])
        return path

    @property
    def trash(self) -> str:
        return str(self.home / ".Trash")

    @property
    def library(self) -> str:
        return str(self.home / "Library")

    @property
    def caches(self) -> str:
        return str(self.home / "Library" / "Caches")

    @property
    def homebrew_cache(self) -> str:
        return str(self.home / "Library" / "Caches" / "Homebrew")

    @property
    def chrome_cache(self) -> str:
        return str(self.home / "Library" / "Caches" / "Google" / "Chrome")

    @property
    def spotify_cache(self) -> str:
        return str(self.home / "Library" / "Caches" / "com.spotify.client")

    @property
    def user_launch_agents(self) -> str:
        return str(self.home / "Library" / "LaunchAgents")

    @property
    def xcode_derived_data(self) -> str:
        return str(self.home / "Library" / "Developer" / "Xcode" / "DerivedData")

    @property
    def xcode_archives(self) -> str:
        return str(self.home / "Library" / "Developer" / "Xcode" / "Archives")

    @property
    def pyenv_versions(self) -> str:
        return str(self.home / ".pyenv" / "versions")
