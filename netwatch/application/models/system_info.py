"""Build and deployment metadata handed to the /info use case."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class SystemInfo:
    title: str
    description: str
    version: str
    environment: Union[str, Enum]
    git_commit: str
    build_time: str
    zabbix_url: str

    def __post_init__(self) -> None:
        # Settings hand over EnumEnvironment members; /info reports plain strings.
        if isinstance(self.environment, Enum):
            object.__setattr__(self, "environment", self.environment.value)
