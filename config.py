# patchpanel Configuration
# Application settings and defaults. Widget state is never stored here.

from dataclasses import dataclass, field, is_dataclass

from logging_utils import log_event


CURRENT_CONFIG_VERSION = 1

DEFAULT_PATCH_PATH = "export/patch.export.json"


@dataclass
class PanelConfig:
    """Parameter panel layout and presentation"""
    # Parameter moved in front of the earliest member of the group (presentation only)
    reorder_target_name: str = "11: On/Off"
    reorder_group_names: list[str] = field(default_factory=lambda: [
        "11: Barwa",
        "11: Poziom szumu",
        "11: Filtr szumu",
    ])
    continuous_resolution: int = 1000   # Slider positions for parameters declared with steps == 1
    name_label_width: int = 160         # Fixed width of the parameter name column (px)
    slider_fill_color: str = "#00aaff"  # Filled part of a continuous slider groove
    active_color: str = "#00ff00"       # Border of an active toggle/step button


@dataclass
class WindowConfig:
    """Main window geometry and chrome"""
    width: int = 720
    height: int = 640
    title_fallback: str = "Unnamed Patcher"


@dataclass
class Config:
    """Master configuration"""
    version: int = 1                  # Schema version for persisted configs
    log_level: str = "INFO"           # Logging level (DEBUG/INFO/WARNING/ERROR)
    last_patch_path: str | None = None
    panel: PanelConfig = field(default_factory=PanelConfig)
    window: WindowConfig = field(default_factory=WindowConfig)


def apply_dict_to_dataclass(target, data) -> None:
    """Recursively apply values from a dict onto a dataclass instance.
    Unknown keys are ignored; list fields only accept lists."""
    if not isinstance(data, dict):
        return

    for key, value in data.items():
        if not hasattr(target, key):
            continue

        current = getattr(target, key)

        if is_dataclass(current) and isinstance(value, dict):
            apply_dict_to_dataclass(current, value)
            continue

        if isinstance(current, list) and not isinstance(value, (list, str)):
            log_event("WARNING", "Config", f"Expected a list for {key}, keeping default")
            continue

        setattr(target, key, value)


def migrate_config(config: Config, loaded_version) -> None:
    """Upgrade older config structures to the current schema.
    Adds defaults for newly introduced fields and bumps version."""
    try:
        version = int(loaded_version) if loaded_version is not None else 0
    except (TypeError, ValueError):
        version = 0

    if version < 1:
        if getattr(config, 'last_patch_path', None) == "":
            config.last_patch_path = None

    # Pre-1 configs stored the group as a single comma separated string
    group = getattr(config.panel, 'reorder_group_names', None)
    if isinstance(group, str):
        config.panel.reorder_group_names = [name.strip() for name in group.split(',') if name.strip()]
    if getattr(config.panel, 'reorder_group_names', None) is None:
        config.panel.reorder_group_names = []
    if getattr(config, 'log_level', None) is None:
        config.log_level = "INFO"

    try:
        resolution = int(getattr(config.panel, 'continuous_resolution', 1000))
    except (TypeError, ValueError):
        resolution = 1000
    config.panel.continuous_resolution = max(1, resolution)

    config.version = CURRENT_CONFIG_VERSION


# Default config instance
DEFAULT_CONFIG = Config()
