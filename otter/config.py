# Configuration settings should be set in app.config
# The Otter class attributes hold the defaults, these can be overridden with Otter.init_app(**kwargs)
# The get_config function looks up the app config first, then the defaults, then the environment
import os
import logging
from flask import current_app
import otter
from typing import Any, Optional


def get_config(option: str, default: Optional[Any] = None) -> Any:
    """Retrieve a configuration parameter from the app
    :param option: configuration parameter
    :param default: returned when the option isn't configured anywhere
    :return: configuration value
    """
    try:
        result = current_app.config[option]
    except (KeyError, RuntimeError):
        # KeyError: not in the app config, RuntimeError: no app context
        result = getattr(otter.Otter, option, None)
        if result is None:
            result = os.environ.get(option, None)
    if result is None:
        return default
    return result


def get_int_config(option: str, default: int = 0) -> int:
    """
    :param option: configuration parameter
    :param default: returned when the option isn't configured or isn't numeric
    :return: integer configuration value
    """
    value = get_config(option, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        otter.log.warning(f'Invalid integer value for config option "{option}": {value}')
        return default


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return otter.log.getEffectiveLevel() < logging.INFO
