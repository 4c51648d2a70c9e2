"""
Settings model — loaded from agents.yml.

Every field has a default, so an absent file means "built-in
behaviour".
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from agent_discovery.core.models.agent import AgentKind
from agent_discovery.core.models.install import InstallOptions
from agent_discovery.core.models.status import DetectOptions


class DetectSettings(BaseModel):
    """Defaults for detection calls."""

    timeout: float = Field(default=5.0, gt=0)
    skip_version: bool = False

    def to_options(self) -> DetectOptions:
        return DetectOptions(timeout=self.timeout, skip_version=self.skip_version)


class InstallSettings(BaseModel):
    """Defaults for install calls."""

    timeout: float = Field(default=300.0, gt=0)
    settle_delay: float = Field(default=0.5, ge=0)   # wait before re-detecting
    network_markers: list[str] = Field(default_factory=list)   # added to the built-ins

    def to_options(self) -> InstallOptions:
        return InstallOptions(timeout=self.timeout)


class Settings(BaseModel):
    """Root of agents.yml."""

    detect: DetectSettings = Field(default_factory=DetectSettings)
    install: InstallSettings = Field(default_factory=InstallSettings)
    # Partial install recipes merged over the built-in catalog.
    agents: dict[AgentKind, dict[str, Any]] = Field(default_factory=dict)
