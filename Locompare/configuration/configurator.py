#!/usr/bin/env python3
# coding: utf-8

"""
This module defines the functionalities needed to verify the integrity and completeness
of Locompare configuration files. Missing values are replaced with default ones,
while existing values are checked for type and consistency.
"""

import os.path
import pprint
import marshmallow
from logging import Logger
import rapidjson as json
import toml
import yaml
from typing import Union
from ..exceptions import InvalidConfiguration
from ..utilities.log_utils import create_default_logger
from .configuration import LocompareConfiguration
try:
    from yaml import CSafeLoader as yLoader
except ImportError:
    from yaml import SafeLoader as yLoader


def load_and_validate_config(raw_configuration: Union[None, LocompareConfiguration, str, dict],
                             logger=None) -> LocompareConfiguration:
    """
    Function to load the configuration and check its consistency.

    :param raw_configuration: either the file name of the configuration or an initialised object to check.
    :type raw_configuration: (str | None | dict | LocompareConfiguration)

    :param logger: optional logger to be used.
    :type logger: Logger

    :rtype: LocompareConfiguration
    """

    if not isinstance(logger, Logger):
        logger = create_default_logger("load_configuration")

    if isinstance(raw_configuration, LocompareConfiguration):
        return raw_configuration
    elif raw_configuration is None or raw_configuration == '':
        return LocompareConfiguration()
    elif isinstance(raw_configuration, dict):
        config = raw_configuration
    elif isinstance(raw_configuration, str):
        if not os.path.exists(raw_configuration) or os.stat(raw_configuration).st_size == 0:
            raise InvalidConfiguration("Configuration file {} not found!".format(raw_configuration))
        with open(raw_configuration) as handle:
            if raw_configuration.endswith((".yaml", ".yml")):
                config = yaml.load(handle, Loader=yLoader)
            elif raw_configuration.endswith(".json"):
                config = json.loads(handle.read())
            else:
                config = toml.load(handle)
        if not isinstance(config, dict):
            raise InvalidConfiguration("The configuration file {} does not contain a mapping.".format(
                raw_configuration))
    else:
        raise InvalidConfiguration("Invalid configuration type: {}".format(type(raw_configuration)))

    try:
        return LocompareConfiguration.Schema().load(config)
    except marshmallow.exceptions.ValidationError as exc:
        logger.critical("The configuration is invalid. Validation errors:\n%s",
                        pprint.pformat(exc.messages))
        raise InvalidConfiguration(exc.messages)
