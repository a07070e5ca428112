#!/usr/bin/env python3

"""
This subprogram clusters the genes of a single annotation into loci and prints them as GFF3.
"""

import argparse
import sys
from ..configuration.configurator import load_and_validate_config
from ..loading import load_gff3
from ..parsers import get_procs, to_gff
from ..scales.compare import cluster_annotations
from ..scales.report import print_loci
from ..transcripts.arena import FeatureArena
from ..utilities.log_utils import create_logger_from_conf


def loci(args):
    """
    Cluster the genes of the input file into loci.
    :param args: the argparse Namespace
    """

    configuration = load_and_validate_config(args.configuration)
    if args.threads is not None:
        configuration.threads = args.threads
    if args.log is not None:
        configuration.log_settings.log = args.log
    if args.verbose is True:
        configuration.log_settings.log_level = "DEBUG"
    logger = create_logger_from_conf(configuration, name="locompare_loci")

    try:
        index = load_gff3(args.gff, FeatureArena(), label=configuration.labels.reference, logger=logger)
        run = cluster_annotations(index, configuration=configuration, logger=logger)
        print_loci(run, args.out)
        for seqid, reason in run.failed_sequences.items():
            logger.error("Sequence %s could not be clustered: %s", seqid, reason)
    finally:
        args.gff.close()
        if args.out is not sys.stdout:
            args.out.close()


def loci_parser():
    """
    The parser for the clustering function
    :return: the argument parser
    """

    parser = argparse.ArgumentParser("Tool to cluster the genes of an annotation into loci.")
    parser.add_argument("-j", "--json-conf", "--configuration", dest="configuration", default=None,
                        help="Configuration file, in YAML, TOML or JSON format.")
    parser.add_argument("-l", "--log", default=None, type=str)
    parser.add_argument("-v", "--verbose", action="store_true", default=False)
    parser.add_argument("-x", "--threads", dest="threads", default=None, type=get_procs)
    parser.add_argument("gff", type=to_gff, help="Input annotation, in GFF3 format.")
    parser.add_argument("out", nargs="?", type=argparse.FileType("wt"), default=sys.stdout,
                        help="Output file. Default: standard output.")
    parser.set_defaults(func=loci)
    return parser
