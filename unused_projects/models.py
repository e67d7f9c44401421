"""Data model for extension records and project groups."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class ExtensionRecord(BaseModel):
    """One installed extension as reported by the inventory."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Machine name, unique across the inventory")
    subpath: str = Field("", description="Slash-separated path relative to the site root")
    declared_project: str | None = Field(None, description="Project declared in the extension metadata")
    display_name: str = Field("", description="Human-readable label")
    version: str | None = Field(None, description="Version string, if the extension declares one")
    enabled: bool = Field(False, description="Whether the extension is currently enabled")
    origin: str = Field("extension", description="'core' for core-provided extensions")
    kind: str = Field("module", description="Extension type (module, theme, profile, ...)")

    @property
    def label(self) -> str:
        """Display name, falling back to the machine name."""
        return self.display_name or self.name


@dataclass
class Solo:
    """A single extension acting as its own project."""

    record: ExtensionRecord

    def promote(self) -> Project:
        """Turn this solo module into a project holding it as its only member."""
        return Project(members={self.record.name: self.record})


@dataclass
class Project:
    """Extensions sharing a project, keyed by member name in insertion order."""

    members: dict[str, ExtensionRecord] = field(default_factory=dict)

    def add(self, record: ExtensionRecord) -> None:
        self.members[record.name] = record

    def main(self, key: str) -> ExtensionRecord:
        """Member named after the project, else the first member."""
        if key in self.members:
            return self.members[key]
        return next(iter(self.members.values()))

    def subs(self, key: str) -> list[ExtensionRecord]:
        """Members other than the one named after the project."""
        return [record for name, record in self.members.items() if name != key]


Group = Solo | Project


@dataclass
class Row:
    """One line of the report."""

    project: str = ""
    display_name: str = ""
    name: str = ""
    status: str = ""
    version: str = ""
    path: str = ""

    def as_dict(self) -> dict[str, str]:
        return {
            "project": self.project,
            "display_name": self.display_name,
            "name": self.name,
            "status": self.status,
            "version": self.version,
            "path": self.path,
        }
