"""Administrative navigation structure."""

from __future__ import annotations

from pydantic import BaseModel


class MenuEntry(BaseModel):
    """A single submenu entry under a parent navigation group."""

    label: str
    capability: str
    target: str


class AdminMenu:
    """Submenu entries grouped by parent slug, in insertion order."""

    def __init__(self) -> None:
        self._groups: dict[str, list[MenuEntry]] = {}

    def add_entry(self, parent: str, label: str, capability: str, target: str) -> MenuEntry:
        entry = MenuEntry(label=label, capability=capability, target=target)
        self._groups.setdefault(parent, []).append(entry)
        return entry

    def entries(self, parent: str) -> list[MenuEntry]:
        return list(self._groups.get(parent, []))

    @property
    def parents(self) -> list[str]:
        return list(self._groups.keys())

    def __len__(self) -> int:
        return sum(len(v) for v in self._groups.values())
