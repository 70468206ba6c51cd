# Configuration settings should be set in app.config
# The defaults are kept as class variables of the JSONAPI extension class,
# environment variables are used as a last resort
import os
import logging
from flask import current_app
import jsonapi_flask
from typing import Any


def get_config(option: str) -> Any:
    """Retrieve a configuration parameter from the app
    :param option: configuration parameter
    :return: configuration value
    """
    try:
        return current_app.config[option]
    except (KeyError, RuntimeError):
        # KeyError: not configured, RuntimeError: working outside of application context
        pass
    return getattr(jsonapi_flask.JSONAPI, option, os.environ.get(option, None))


def get_bool_config(option: str) -> bool:
    """
    :param option: configuration parameter
    :return: configuration value as a boolean, "0", "false" and "no" strings (eg. from the environment) are False
    """
    value = get_config(option)
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no")
    return bool(value)


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return jsonapi_flask.log.getEffectiveLevel() < logging.INFO
