"""
Configuration loading for the AR drawing app.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ardraw.errors import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"
CONFIG_ENV_VAR = "ARDRAW_CONFIG"


@dataclass
class CameraConfig:
    """Camera capture settings."""
    index: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands settings."""
    max_num_hands: int = 2
    model_complexity: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class BrushDefaults:
    """Initial brush and the choices offered to the user."""
    color: str = "#00FFFF"
    width: float = 4.0
    palette: List[str] = field(default_factory=lambda: [
        "#00FFFF", "#FF00FF", "#00FF00", "#FFFF00",
        "#FF6600", "#FF0000", "#FFFFFF", "#8800FF",
    ])
    sizes: List[float] = field(default_factory=lambda: [2, 4, 8, 12, 16])


@dataclass
class DisplayConfig:
    """Window and rendering settings."""
    window_name: str = "AR Hand Drawing"
    mirror: bool = True
    show_landmarks: bool = True
    frame_interval_ms: int = 16


@dataclass
class CaptureConfig:
    """Where captured images are written."""
    directory: str = "captures"
    prefix: str = "ar-drawing"


@dataclass
class Cfg:
    """Main configuration object."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    brush: BrushDefaults = field(default_factory=BrushDefaults)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    capture: CaptureConfig = field(default_factory=CaptureConfig)


def load_config(path: Optional[Union[str, Path]] = None) -> Cfg:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to config file. If None, ARDRAW_CONFIG is used, then the
              packaged config.default.yaml

    Returns:
        Configuration object with all settings
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data or {})


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    try:
        section = data[name]
    except KeyError:
        raise ConfigError(f"Missing config section: {name}") from None
    if not isinstance(section, dict):
        raise ConfigError(f"Config section {name} must be a mapping")
    return section


def _build(cls, data: Dict[str, Any], name: str):
    try:
        return cls(**_section(data, name))
    except TypeError as e:
        raise ConfigError(f"Invalid keys in config section {name}: {e}") from e


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    cfg = Cfg(
        camera=_build(CameraConfig, data, "camera"),
        mediapipe=_build(MediaPipeConfig, data, "mediapipe"),
        brush=_build(BrushDefaults, data, "brush"),
        display=_build(DisplayConfig, data, "display"),
        capture=_build(CaptureConfig, data, "capture"),
    )

    if cfg.brush.width <= 0 or any(s <= 0 for s in cfg.brush.sizes):
        raise ConfigError("Brush widths must be positive")
    if not cfg.brush.palette:
        raise ConfigError("Brush palette must not be empty")
    if cfg.display.frame_interval_ms <= 0:
        raise ConfigError("display.frame_interval_ms must be positive")

    return cfg
