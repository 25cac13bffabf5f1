"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from resume_ats.analysis.checks import Thresholds


@dataclass(frozen=True)
class AnalyzerConfig:
    min_content_length: int = 200
    keyword_limit: int = 6
    plan_display_limit: int = 5
    patterns_path: str | None = None
    graph_path: str | None = None

    def __post_init__(self) -> None:
        if self.min_content_length < 0:
            raise ValueError("min_content_length must be >= 0")
        if not 1 <= self.keyword_limit <= 8:
            raise ValueError("keyword_limit must be between 1 and 8")
        if self.plan_display_limit < 1:
            raise ValueError("plan_display_limit must be >= 1")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    max_retries: int = 3
    timeout: int = 60
    max_tokens: int = 2048

    def __post_init__(self) -> None:
        if self.timeout < 1:
            raise ValueError("timeout must be >= 1 second")
        if not 1 <= self.max_retries <= 10:
            raise ValueError("max_retries must be between 1 and 10")


@dataclass(frozen=True)
class AIConfig:
    enabled: bool = False
    timeout: float = 20.0

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("ai timeout must be > 0")


@dataclass(frozen=True)
class AppConfig:
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    thresholds: Thresholds = field(default_factory=Thresholds)
    llm: LLMConfig = field(default_factory=LLMConfig)
    ai: AIConfig = field(default_factory=AIConfig)


def _section(raw: dict, name: str, cls: type) -> dict:
    data = raw.get(name) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown keys in '{name}': {', '.join(unknown)}")
    return data


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    base = Path.cwd()
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}
            base = p.resolve().parent

    analyzer = _section(raw, "analyzer", AnalyzerConfig)
    # table overrides are resolved relative to the config file
    for key in ("patterns_path", "graph_path"):
        if analyzer.get(key):
            analyzer = {**analyzer, key: str((base / Path(analyzer[key]).expanduser()).resolve())}

    return AppConfig(
        analyzer=AnalyzerConfig(**analyzer),
        thresholds=Thresholds(**_section(raw, "thresholds", Thresholds)),
        llm=LLMConfig(**_section(raw, "llm", LLMConfig)),
        ai=AIConfig(**_section(raw, "ai", AIConfig)),
    )
