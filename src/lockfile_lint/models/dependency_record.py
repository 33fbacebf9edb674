"""Dependency record model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DependencyRecord:
    """Represent one package resolution recorded in a lockfile."""

    name: str
    version: str | None = None
    resolved_url: str | None = None
    integrity: str | None = None
    alias_of: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Dependency name must be non-empty")

    @property
    def real_name(self) -> str:
        """Return the package identity the entry resolves to."""
        return self.alias_of or self.name

    @property
    def label(self) -> str:
        if self.version:
            return f"{self.name}@{self.version}"
        return self.name

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"name": self.name}
        if self.version is not None:
            data["version"] = self.version
        if self.resolved_url is not None:
            data["resolved"] = self.resolved_url
        if self.integrity is not None:
            data["integrity"] = self.integrity
        if self.alias_of is not None:
            data["aliasOf"] = self.alias_of
        return data
