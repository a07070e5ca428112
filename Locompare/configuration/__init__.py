"""
This module defines the configuration of Locompare, together with the functions
needed to load, validate and print it.
"""

import dataclasses
import textwrap
import rapidjson as json
import toml
import yaml
from .configuration import LocompareConfiguration, CompareConfiguration, LabelConfiguration
from . import configurator


def print_config(config: LocompareConfiguration, out, output_format="yaml"):
    """
    Function to print out the configuration, adding the descriptions as comments preceded by #
    for the YAML and TOML formats.
    :param config: configuration
    :type config: LocompareConfiguration

    :param out: output handle
    :type out: [io.TextIOWrapper|io.TextIO]

    :param output_format: one of yaml, json or toml (case-insensitive)
    :type output_format: str
    """

    if not isinstance(output_format, str) or output_format.lower() not in ("yaml", "json", "toml"):
        raise ValueError("Unknown format: {}. I can only accept yaml, json or toml as options.".format(
            output_format))

    output_format = output_format.lower()
    config_dict = dataclasses.asdict(config)
    if output_format == "json":
        print(json.dumps(config_dict, indent=4, sort_keys=True), file=out)
        return

    if output_format == "toml":
        output = toml.dumps(config_dict)
    else:
        output = yaml.dump(config_dict, default_flow_style=False)

    lines = []
    level = config
    for line in output.split("\n"):
        stripped = line.strip()
        if not stripped:
            lines.append(line)
            continue
        if stripped.startswith("["):
            key = stripped.strip("[]").split(".")[-1]
            level = config
            description = _description(level, key)
        elif output_format == "yaml" and stripped.endswith(":") and not line.startswith(" "):
            key = stripped.rstrip(":")
            level = config
            description = _description(level, key)
        else:
            separator = "=" if output_format == "toml" else ":"
            key = stripped.split(separator)[0].strip()
            if output_format == "yaml" and not line.startswith(" "):
                level = config
            description = _description(level, key)
            if description:
                description = key + ": " + description
        spaces = len(line) - len(line.lstrip())
        if description:
            lines.extend([" " * spaces + "# " + _ for _ in textwrap.wrap(description)])
        lines.append(line.rstrip())
        if hasattr(getattr(level, key, None), "Schema"):
            level = getattr(level, key)

    print(*["# " + _ for _ in textwrap.wrap(config.__doc__.strip())], sep="\n", file=out)
    print("#", file=out)
    print(*lines, sep="\n", file=out)


def _description(level, key):
    declared = getattr(level, "Schema", None)
    if declared is None or key not in declared._declared_fields:
        return None
    return declared._declared_fields[key].metadata.get("description", None)


__all__ = ["LocompareConfiguration", "CompareConfiguration", "LabelConfiguration",
           "configurator", "print_config"]
