"""Strongly-typed configuration schemas for plysearch.

These dataclasses provide validation, IDE support, and serve as the
single source of truth for all configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

EXECUTORS = ("thread", "process")


@dataclass
class SearchConfig:
    """Configuration for the alpha-beta engine."""

    parallel: bool = False  # Fan root moves out to a worker pool
    max_workers: int | None = None  # Pool size; None lets concurrent.futures decide
    executor: str = "thread"  # "thread" | "process"
    share_bound: bool = True  # Cross-branch pruning for thread workers

    growth_factor: float = 2.0  # Expected cost ratio between consecutive depths
    max_depth: int | None = None  # Depth cap for partial search (None = unbounded)

    # Default limits used by select_move(); a node limit wins over a time limit
    default_time_limit: float | None = 1.0  # Seconds
    default_node_limit: int | None = None

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.executor not in EXECUTORS:
            msg = f"executor must be one of {EXECUTORS}, got {self.executor!r}"
            raise ValueError(msg)

        if self.max_workers is not None and self.max_workers < 1:
            msg = f"max_workers must be >= 1, got {self.max_workers}"
            raise ValueError(msg)

        if self.growth_factor < 0:
            msg = f"growth_factor must be >= 0, got {self.growth_factor}"
            raise ValueError(msg)

        if self.max_depth is not None and self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)

        if self.default_time_limit is not None and self.default_time_limit < 0:
            msg = f"default_time_limit must be >= 0, got {self.default_time_limit}"
            raise ValueError(msg)

        if self.default_node_limit is not None and self.default_node_limit < 0:
            msg = f"default_node_limit must be >= 0, got {self.default_node_limit}"
            raise ValueError(msg)


@dataclass
class LoggingConfig:
    """Configuration for loguru sinks."""

    level: str = "INFO"
    file: Path | None = None
    rotation: str = "10 MB"
    retention: str = "1 week"

    def __post_init__(self) -> None:
        """Convert string to Path if needed."""
        if isinstance(self.file, str):
            self.file = Path(self.file)


@dataclass
class EngineConfig:
    """Top-level configuration combining all sub-configs."""

    search: SearchConfig = field(default_factory=SearchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_from_dict(data: dict[str, Any]) -> EngineConfig:
    """Create EngineConfig from a dictionary (e.g., from OmegaConf).

    Args:
        data: Dictionary with configuration values.

    Returns:
        EngineConfig instance.
    """
    return EngineConfig(
        search=SearchConfig(**data.get("search", {})),
        logging=LoggingConfig(**data.get("logging", {})),
    )


def config_to_dict(config: EngineConfig) -> dict[str, Any]:
    """Convert EngineConfig to a dictionary for serialization.

    Args:
        config: EngineConfig instance.

    Returns:
        Dictionary representation.
    """
    from dataclasses import asdict

    result = asdict(config)
    # Convert Path objects to strings for YAML serialization
    if result["logging"]["file"] is not None:
        result["logging"]["file"] = str(result["logging"]["file"])
    return result
