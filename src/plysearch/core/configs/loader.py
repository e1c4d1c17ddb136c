"""Configuration loading utilities."""

from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf

from plysearch.core.configs.schema import EngineConfig, config_from_dict, config_to_dict


def load_config(config_path: str | Path, overrides: list[str] | None = None) -> DictConfig:
    """Load a configuration file with optional overrides.

    Args:
        config_path: Path to the YAML configuration file.
        overrides: Optional list of CLI-style overrides (e.g., ["search.parallel=true"]).

    Returns:
        Merged configuration as a DictConfig.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    config = OmegaConf.load(config_path)

    if overrides:
        override_conf = OmegaConf.from_dotlist(overrides)
        config = OmegaConf.merge(config, override_conf)

    return config


def load_engine_config(
    config_path: str | Path | None = None, overrides: list[str] | None = None
) -> EngineConfig:
    """Load a typed EngineConfig, starting from defaults when no file is given.

    Args:
        config_path: Optional path to a YAML configuration file.
        overrides: Optional list of CLI-style overrides.

    Returns:
        Validated EngineConfig.
    """
    if config_path is None:
        config = OmegaConf.create(config_to_dict(EngineConfig()))
        if overrides:
            config = OmegaConf.merge(config, OmegaConf.from_dotlist(overrides))
    else:
        config = load_config(config_path, overrides)

    data = OmegaConf.to_container(config, resolve=True)
    return config_from_dict(data)  # type: ignore[arg-type]


def save_config(config: DictConfig | EngineConfig | dict[str, Any], path: str | Path) -> None:
    """Save a configuration to a YAML file.

    Args:
        config: Configuration to save.
        path: Path to save the configuration to.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(config, EngineConfig):
        config = config_to_dict(config)
    if isinstance(config, dict):
        config = OmegaConf.create(config)

    OmegaConf.save(config, path)
