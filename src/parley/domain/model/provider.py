"""Messenger providers: the parties acting on threads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from parley.domain.model.entity import Entity

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class ProviderRef:
    """Provider identity without any loaded relations."""

    id: UUID
    alias: str
    name: str
    avatar: str | None = None


@dataclass(eq=False, kw_only=True)
class Provider(Entity):
    name: str
    alias: str = "user"
    avatar: str | None = None

    def ref(self) -> ProviderRef:
        return ProviderRef(id=self.id, alias=self.alias, name=self.name, avatar=self.avatar)
