#!/usr/bin/env python3

"""Creation of the default configuration for Locompare."""

import argparse
import sys
from ..configuration import print_config
from ..configuration.configurator import load_and_validate_config
from ..parsers import get_procs, non_negative


def create_config(args):
    """
    Utility to create a default configuration file.
    :param args: the argparse Namespace
    """

    config = load_and_validate_config(None)
    if args.threads is not None:
        config.threads = args.threads
    if args.max_transcripts is not None:
        config.compare.max_transcripts = args.max_transcripts
    if args.max_comparisons is not None:
        config.compare.max_comparisons = args.max_comparisons
    print_config(config, args.out, output_format=args.output_format)
    if args.out is not sys.stdout:
        args.out.close()


def configure_parser():
    """
    Parser for the configuration utility.
    :return: the argument parser.
    """

    parser = argparse.ArgumentParser(description="Configuration utility for Locompare")
    parser.add_argument("-t", "--threads", type=get_procs, default=None)
    parser.add_argument("--max-transcripts", dest="max_transcripts", type=non_negative, default=None)
    parser.add_argument("--max-comparisons", dest="max_comparisons", type=non_negative, default=None)
    parser.add_argument("-of", "--output-format", dest="output_format", default="yaml",
                        choices=["yaml", "json", "toml"],
                        help="Output format for the configuration file. Default: %(default)s")
    parser.add_argument("out", nargs="?", type=argparse.FileType("w"), default=sys.stdout)
    parser.set_defaults(func=create_config)
    return parser
