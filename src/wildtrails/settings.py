# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Application settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wildtrails.config import GenerationConfig, OverpassConfig, ProximityConfig
from wildtrails.llm.config import LLMConfig
from wildtrails.paths import default_data_dir


class Settings(BaseSettings):
    data_dir: Path = Field(default_factory=default_data_dir)
    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"
    llm: LLMConfig = Field(default_factory=LLMConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    proximity: ProximityConfig = Field(default_factory=ProximityConfig)
    overpass: OverpassConfig = Field(default_factory=OverpassConfig)

    model_config = SettingsConfigDict(
        env_prefix="WILDTRAILS_",
        env_nested_delimiter="__",
        extra="ignore",
    )
