from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Found:
    item: dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return True


@dataclass(frozen=True)
class NotFound:
    @property
    def found(self) -> bool:
        return False


type GetResult = Found | NotFound
