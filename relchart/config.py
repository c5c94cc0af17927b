# relchart/config.py
from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .layout import DEFAULT_HEIGHT, DEFAULT_WIDTH

DEFAULT_DATA_SOURCE = "timeline-data.yaml"
DEFAULT_FALLBACK_MESSAGE = "Failed to load timeline data, please try again later"


class _Section(BaseModel):
    # Keys are camelCase on disk; unknown keys are kept as-is.
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class LayoutSettings(_Section):
    show_toc_toggle: bool = Field(default=False, alias="showTocToggle")
    toc_visible: bool = Field(default=True, alias="tocVisible")
    left_margin: int = Field(default=0, ge=0, alias="leftMargin")
    enable_toc_auto_hide: bool = Field(default=True, alias="enableTocAutoHide")


class StyleSettings(_Section):
    custom_css: str = Field(default="", alias="customCSS")
    theme_class: str = Field(default="", alias="themeClass")


class FeatureSettings(_Section):
    enable_search: bool = Field(default=True, alias="enableSearch")
    enable_type_filter: bool = Field(default=True, alias="enableTypeFilter")
    enable_size_filter: bool = Field(default=True, alias="enableSizeFilter")
    enable_chart: bool = Field(default=True, alias="enableChart")
    enable_markdown: bool = Field(default=True, alias="enableMarkdown")


class ErrorHandlingSettings(_Section):
    show_fallback_data: bool = Field(default=True, alias="showFallbackData")
    fallback_message: str = Field(default=DEFAULT_FALLBACK_MESSAGE, alias="fallbackMessage")


class ChartSettings(_Section):
    width: int = Field(default=DEFAULT_WIDTH, ge=0)
    height: int = Field(default=DEFAULT_HEIGHT, ge=0)


class TimelineSettings(_Section):
    data_sources: List[str] = Field(default_factory=lambda: [DEFAULT_DATA_SOURCE], alias="dataSources")
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    styles: StyleSettings = Field(default_factory=StyleSettings)
    features: FeatureSettings = Field(default_factory=FeatureSettings)
    error_handling: ErrorHandlingSettings = Field(default_factory=ErrorHandlingSettings, alias="errorHandling")
    chart: ChartSettings = Field(default_factory=ChartSettings)

    @field_validator("data_sources", mode="before")
    @classmethod
    def _sources_as_list(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v


def validate_settings(config: Mapping[str, Any]) -> TimelineSettings:
    try:
        return TimelineSettings.model_validate(dict(config))
    except ValidationError as ex:
        raise ConfigError(str(ex)) from ex


DEFAULTS: Dict[str, Any] = TimelineSettings().model_dump(by_alias=True)

_STANDALONE_CSS = """
body { background-color: #edf3f8; margin: 0; padding: 0; }
.custom-toc { background: rgba(255, 255, 255, 0.95); }
.release-chart-wrapper, .timeline-container { margin-left: 290px; }
h1 { margin-left: 290px !important; }
body.toc-hidden .release-chart-wrapper, body.toc-hidden .timeline-container { margin-left: auto; }
body.toc-hidden h1 { margin-left: 0 !important; }
@media (max-width: 1200px) {
  .release-chart-wrapper, .timeline-container { margin-left: auto; }
  h1 { margin-left: 0 !important; }
}
"""

TIMELINE_CONFIGS: Dict[str, Dict[str, Any]] = {
    "standalone": {
        "dataSources": [DEFAULT_DATA_SOURCE],
        "layout": {
            "showTocToggle": True,
            "tocVisible": True,
            "leftMargin": 290,
            "enableTocAutoHide": True,
        },
        "styles": {"customCSS": _STANDALONE_CSS},
    },
    "simple": {
        "dataSources": [DEFAULT_DATA_SOURCE],
        "layout": {
            "showTocToggle": False,
            "tocVisible": True,
            "leftMargin": 0,
            "enableTocAutoHide": True,
        },
    },
}


def deep_merge(target: Mapping[str, Any], source: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge `source` into a copy of `target`; nested dicts merge, everything else replaces."""
    out: Dict[str, Any] = copy.deepcopy(dict(target))
    for k, v in source.items():
        if isinstance(v, Mapping):
            base = out.get(k)
            out[k] = deep_merge(base if isinstance(base, Mapping) else {}, v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as ex:
        raise ConfigError(f"Cannot read config {path}: {ex}") from ex
    try:
        if path.suffix.lower() == ".json":
            obj = json.loads(text)
        else:
            obj = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as ex:
        raise ConfigError(f"Cannot parse config {path}: {ex}") from ex
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ConfigError(f"Config {path} must be a mapping; got {type(obj).__name__}")
    return obj


class TimelineConfig:
    """Nested option dict over DEFAULTS, validated into TimelineSettings on every change."""

    def __init__(self, options: Optional[Mapping[str, Any]] = None) -> None:
        self.settings = TimelineSettings()
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULTS)
        if options:
            self.merge(options)

    @classmethod
    def from_preset(cls, name: str, options: Optional[Mapping[str, Any]] = None) -> "TimelineConfig":
        preset = TIMELINE_CONFIGS.get(name)
        if preset is None:
            raise ConfigError(f"Unknown preset {name!r} (known: {', '.join(sorted(TIMELINE_CONFIGS))})")
        cfg = cls(preset)
        if options:
            cfg.merge(options)
        return cfg

    @classmethod
    def from_file(cls, path: str | Path, *, preset: Optional[str] = None) -> "TimelineConfig":
        opts = _read_config_file(Path(path))
        if preset:
            return cls.from_preset(preset, opts)
        return cls(opts)

    def _apply(self, config: Dict[str, Any]) -> None:
        settings = validate_settings(config)
        self.settings = settings
        self.config = settings.model_dump(by_alias=True)

    def merge(self, options: Mapping[str, Any]) -> None:
        self._apply(deep_merge(self.config, options))

    def apply_env(self) -> None:
        """RELCHART_DATA (os.pathsep-separated) replaces dataSources when set."""
        raw = (os.getenv("RELCHART_DATA", "") or "").strip()
        if raw:
            self.set("dataSources", [p for p in raw.split(os.pathsep) if p.strip()])

    def get(self, path: str, default: Any = None) -> Any:
        cur: Any = self.config
        for key in path.split("."):
            if isinstance(cur, dict) and key in cur:
                cur = cur[key]
            else:
                return default
        return cur

    def set(self, path: str, value: Any) -> None:
        config = copy.deepcopy(self.config)
        keys = path.split(".")
        last = keys.pop()
        cur = config
        for key in keys:
            nxt = cur.get(key)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[key] = nxt
            cur = nxt
        cur[last] = value
        self._apply(config)

    def feature(self, name: str) -> bool:
        return self.get(f"features.{name}", False) is True

    @property
    def data_sources(self) -> list[str]:
        return [s for s in self.settings.data_sources if s.strip()]

    @property
    def chart_size(self) -> tuple[int, int]:
        return self.settings.chart.width, self.settings.chart.height

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self.config)
