import json
import logging
import os
import pathlib
import sys

import swaywsr.types as types

_logger: logging.Logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "swaywsr.conf"


def get_possible_conf_dirs() -> list[pathlib.Path]:
    """Sway and i3 config dirs in lookup order, whether they exist or not."""

    home_folder = pathlib.Path.home()
    config_folder = pathlib.Path(
        os.environ.get("XDG_CONFIG_HOME", home_folder.joinpath(".config"))
    )
    return [
        home_folder.joinpath(".sway"),
        config_folder.joinpath("sway"),
        home_folder.joinpath(".i3"),
        config_folder.joinpath("i3"),
    ]


def find_config_file(config_file: pathlib.Path | None) -> pathlib.Path:
    """Return the given config file, the first existing swaywsr.conf, or where to create one."""

    if config_file is not None:
        return config_file

    config_dirs: list[pathlib.Path] = [
        dir for dir in get_possible_conf_dirs() if dir.is_dir()
    ]
    if len(config_dirs) == 0:
        _logger.critical(
            "Sway config not found! Make sure to use a default config path (man sway)"
        )
        sys.exit(1000)

    for dir in config_dirs:
        candidate = dir.joinpath(CONFIG_FILE_NAME)
        if candidate.exists():
            return candidate
    return config_dirs[0].joinpath(CONFIG_FILE_NAME)


def load_config(
    config_file: pathlib.Path,
    default_icon: str | None = None,
    remove_duplicates: bool | None = None,
    check_names_first: bool | None = None,
    save_current_config: bool = False,
) -> types.SwaywsrConfig:
    """Load the configuration file (or defaults) and apply the command line overrides."""

    if config_file.exists():
        _logger.info(f"loading config file: {config_file}")
        with config_file.open("r") as FILE:
            config_json: dict = json.load(FILE)
        config = types.SwaywsrConfig.model_validate(config_json)
    else:
        _logger.info("loading default values for configuration")
        config = types.SwaywsrConfig()

    if default_icon is not None:
        config.default_icon = default_icon

    if remove_duplicates is not None:
        config.remove_duplicates = remove_duplicates

    if check_names_first is not None:
        config.check_names_first = check_names_first

    config.icons = {key.lower(): icon for key, icon in config.icons.items()}
    config.title_icons = {
        key.lower(): icon for key, icon in config.title_icons.items()
    }

    if save_current_config:
        _logger.info(f"create config file: {config_file}")
        with config_file.open("w") as FILE:
            FILE.write(config.model_dump_json(indent=2))

    return config


def _icon_for_class(config: types.SwaywsrConfig, window: types.Node) -> str | None:
    identifiers: list[str | None] = [window.app_id]
    if window.window_properties is not None:
        identifiers.append(window.window_properties.class_)
        identifiers.append(window.window_properties.instance)

    for identifier in identifiers:
        if identifier is not None and identifier.lower() in config.icons:
            return config.icons[identifier.lower()]
    return None


def _icon_for_name(config: types.SwaywsrConfig, window: types.Node) -> str | None:
    if window.name is None:
        return None

    name = window.name.lower()
    for prefix, icon in config.title_icons.items():
        if name.startswith(prefix):
            return icon
    return None


def fetch_icon(config: types.SwaywsrConfig, window: types.Node) -> str:
    """Return the icon for a window, or the default icon if no rule matches."""

    lookups = [_icon_for_class, _icon_for_name]
    if config.check_names_first:
        lookups.reverse()

    for lookup in lookups:
        icon = lookup(config, window)
        if icon is not None:
            return icon

    _logger.debug(
        f"no icon available for window {window.name} (app_id: {window.app_id})"
    )
    return config.default_icon
