"""Infrastructure config: where settings live, logging, and navigation mode."""

from __future__ import annotations

import copy

from pydantic import BaseModel, Field

from search_templater.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

INFRA_CONFIG_DEFAULTS: dict = {
    'settings_path': None,
    'logging': {
        'directory': None,
        'level': 'DEBUG',
    },
    'navigation': {
        'dry_run': False,
    },
}


class LoggingConfig(BaseModel):
    directory: str | None = None  # None → no file logging
    level: str = 'DEBUG'


class NavigationConfig(BaseModel):
    dry_run: bool = False


class InfraConfig(BaseModel):
    """Groups all environment-specific settings outside the domain layer."""

    settings_path: str | None = None  # None → platform config dir
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    navigation: NavigationConfig = Field(default_factory=NavigationConfig)


def build_infra_config(raw: dict) -> InfraConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(INFRA_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return InfraConfig.model_validate(merged)
