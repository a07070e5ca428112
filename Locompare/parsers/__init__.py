#!/usr/bin/env python3
# coding: utf_8

"""
    This module defines the iterators that will parse the annotation files.
"""

import argparse
import io
import os
from multiprocessing import cpu_count
from marshmallow import ValidationError, validate
from ..exceptions import InvalidParsingFormat
from .parser import Parser
from . import GFF


def parser_factory(string, input_format=None):
    """
    Function to create the parser for an annotation file. Only GFF3 is supported.
    :param string: file name or open handle
    :type string: (str|bytes|io.TextIOBase)
    :param input_format: optional explicit format
    :rtype: GFF.GFF3
    """

    if isinstance(string, io.TextIOBase):
        return GFF.GFF3(string)
    elif isinstance(string, (bytes, str)):
        if isinstance(string, bytes):
            string = string.decode()
    else:
        raise ValueError("Invalid input type: {}".format(type(string)))

    if input_format not in (None, "gff3", "gff"):
        raise InvalidParsingFormat("Unsupported input format: {}".format(input_format))
    if not os.path.exists(string):
        raise FileNotFoundError("File not found: {0}".format(string))
    return GFF.GFF3(string)


def to_gff(string, input_format=None):
    """
    Function to recognize the input file type and create the parser.
    Used as argparse type.
    """

    return parser_factory(string, input_format=input_format)


def get_procs(arg):
    """Number of threads, bounded by the available CPUs. Used as argparse type."""
    try:
        return max(min(int(arg), cpu_count()), 1)
    except ValueError:
        raise argparse.ArgumentTypeError("Invalid number of threads: {0}".format(arg))


def non_negative(arg):
    """
    Non-negative integer, validated as in the configuration schema. Used as argparse type.
    """

    try:
        value = int(arg)
        validate.Range(min=0)(value)
    except (ValueError, ValidationError):
        raise argparse.ArgumentTypeError("Expected a non-negative integer, found {0}".format(arg))
    return value


__all__ = ["Parser", "GFF", "parser_factory", "to_gff", "get_procs", "non_negative"]
