"""Configuration — YAML file merged over built-in defaults.

Every value from the file is checked against what the CLI can use. A bad
value is reported and the default is kept, so a typo in the config never
stops logs from being shown.
"""

import copy
import logging
import os

import yaml

from prettyjsonlog.formatter import COLORS, OUTPUT_FORMATS
from prettyjsonlog.json_parser import DEFAULT_MAX_DEPTH
from prettyjsonlog.levels import Level

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PRETTY_JSON_LOG_CONFIG"

LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _is_bool(value) -> bool:
    return isinstance(value, bool)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


# (section, key) -> (check, what a valid value looks like)
RULES = {
    ("parser", "max_depth"): (_is_positive_int, "a positive integer"),
    ("output", "format"): (lambda v: v in OUTPUT_FORMATS, "one of " + ", ".join(OUTPUT_FORMATS)),
    ("output", "color"): (_is_bool, "true or false"),
    ("output", "show_rest"): (_is_bool, "true or false"),
    ("logging", "level"): (
        lambda v: isinstance(v, str) and v.upper() in LOG_LEVEL_NAMES,
        "one of " + ", ".join(LOG_LEVEL_NAMES),
    ),
}


class Config:
    """Configuration manager that loads from YAML and merges with defaults."""

    DEFAULTS = {
        "parser": {
            "max_depth": DEFAULT_MAX_DEPTH,
        },
        "output": {
            "format": "text",
            "color": False,
            "show_rest": True,
        },
        "colors": dict(COLORS),
        "logging": {
            "level": "WARNING",
        },
    }

    def __init__(self, config_path=None):
        self._config = copy.deepcopy(self.DEFAULTS)

        if config_path is not None:
            try:
                with open(config_path, "r") as f:
                    user_config = yaml.safe_load(f)
            except FileNotFoundError:
                logger.warning("Config file %s not found, using defaults", config_path)
                return
            except yaml.YAMLError:
                logger.warning("Invalid YAML in %s, using defaults", config_path)
                return

            if user_config is None:
                return
            if not isinstance(user_config, dict):
                logger.warning("Config file %s is not a mapping, using defaults", config_path)
                return
            self._merge(user_config, config_path)

    @classmethod
    def from_env(cls) -> "Config":
        """Load from the path in $PRETTY_JSON_LOG_CONFIG, or defaults if unset."""
        return cls(os.environ.get(CONFIG_ENV_VAR) or None)

    def _merge(self, user_config: dict, source: str) -> None:
        for section, values in user_config.items():
            if section not in self.DEFAULTS:
                logger.warning("%s: unknown section %r ignored", source, section)
                continue
            if not isinstance(values, dict):
                logger.warning("%s: section %r must be a mapping, ignored", source, section)
                continue
            if section == "colors":
                self._merge_colors(values, source)
                continue
            for key, value in values.items():
                rule = RULES.get((section, key))
                if rule is None:
                    logger.warning("%s: unknown setting %s.%s ignored", source, section, key)
                    continue
                check, expected = rule
                if not check(value):
                    logger.warning(
                        "%s: %s.%s must be %s, got %r; keeping %r",
                        source, section, key, expected, value, self._config[section][key],
                    )
                    continue
                self._config[section][key] = value

    def _merge_colors(self, colors: dict, source: str) -> None:
        """Per-level ANSI sequences; keys are Level names in any case."""
        for name, code in colors.items():
            if not isinstance(name, str) or name.upper() not in Level.__members__:
                logger.warning("%s: colors.%s is not a level, ignored", source, name)
                continue
            if not isinstance(code, str):
                logger.warning("%s: colors.%s must be a string, ignored", source, name)
                continue
            self._config["colors"][name.upper()] = code

    def get(self, key, default=None):
        """Get a top-level config key."""
        return self._config.get(key, default)

    def __getitem__(self, key):
        return self._config[key]

    def __contains__(self, key):
        return key in self._config
