#!/usr/bin/env python3

"""
This subprogram compares a prediction annotation against a reference annotation.
Genes are clustered into loci; at each locus, the transcript cliques of the two annotations
are compared and classified, and the best matches are reported together with a summary
of the whole run.
"""

import argparse
import os
from ..configuration.configurator import load_and_validate_config
from ..loading import load_gff3
from ..parsers import get_procs, non_negative, to_gff
from ..scales.compare import compare_annotations
from ..scales.report import LocusReportWriter, print_summary
from ..transcripts.arena import FeatureArena
from ..utilities.log_utils import create_logger_from_conf, create_queue_logger


def setup_configuration(args):
    """
    Load the configuration and update it with the command line options.
    :param args: the argparse Namespace
    :rtype: Locompare.configuration.configuration.LocompareConfiguration
    """

    configuration = load_and_validate_config(args.configuration)
    if args.max_transcripts is not None:
        configuration.compare.max_transcripts = args.max_transcripts
    if args.max_comparisons is not None:
        configuration.compare.max_comparisons = args.max_comparisons
    if args.threads is not None:
        configuration.threads = args.threads
    if args.vectors is True:
        configuration.compare.model_vectors = True
    if args.gff3 is True:
        configuration.compare.gff3 = True
    if args.refr_label is not None:
        configuration.labels.reference = args.refr_label
    if args.pred_label is not None:
        configuration.labels.prediction = args.pred_label
    if args.log is not None:
        configuration.log_settings.log = args.log
    if args.verbose is True:
        configuration.log_settings.log_level = "DEBUG"
    return configuration


def compare(args):
    """
    This function performs the comparison between the two files.

    :param args: the argparse Namespace
    """

    configuration = setup_configuration(args)
    logger = create_logger_from_conf(configuration, name="locompare_compare")
    queue_logger, listener = create_queue_logger(logger)
    queue_logger.info("Start")

    try:
        _out_folder = os.path.dirname(args.out)
        if _out_folder and not os.path.exists(_out_folder):
            os.makedirs(_out_folder)

        arena = FeatureArena()
        refr_index = load_gff3(args.reference, arena, label=configuration.labels.reference, logger=queue_logger)
        pred_index = load_gff3(args.prediction, arena, label=configuration.labels.prediction, logger=queue_logger)
        run = compare_annotations(refr_index, pred_index, configuration=configuration, logger=queue_logger)

        with open("{0}.report.txt".format(args.out), "wt") as report:
            LocusReportWriter(report, configuration).write(run)
        with open("{0}.summary.txt".format(args.out), "wt") as summary:
            print_summary(run, summary, configuration)
        queue_logger.info("Finished")
    except Exception as exc:
        queue_logger.exception(exc)
        raise
    finally:
        listener.stop()
        args.reference.close()
        args.prediction.close()


def compare_parser():
    """
    The parser for the comparison function

    :return: the argument parser
    """

    parser = argparse.ArgumentParser(
        "Tool to compare the gene models of a prediction against a reference.")
    input_files = parser.add_argument_group("Prediction and annotation files.")
    input_files.add_argument("-r", "--reference", type=to_gff, required=True,
                             help="Reference annotation file, in GFF3 format.")
    input_files.add_argument("-p", "--prediction", type=to_gff, required=True,
                             help="Prediction annotation file, in GFF3 format.")
    parser.add_argument("-j", "--json-conf", "--configuration", dest="configuration", default=None,
                        help="Configuration file, in YAML, TOML or JSON format.")
    parser.add_argument("-o", "--out", default="locompare", type=str,
                        help="Prefix for the output files. Default: %(default)s")
    parser.add_argument("-t", "--max-transcripts", dest="max_transcripts", type=non_negative, default=None,
                        help="""Maximum number of transcripts on either side of a locus. Loci with more
                        transcripts are reported but not compared. 0 disables the limit.""")
    parser.add_argument("-c", "--max-comparisons", dest="max_comparisons", type=non_negative, default=None,
                        help="""Maximum number of transcript clique pairs to compare at a locus.
                        0 disables the limit.""")
    parser.add_argument("--refr-label", dest="refr_label", default=None,
                        help="Label for the reference annotation in the reports.")
    parser.add_argument("--pred-label", dest="pred_label", default=None,
                        help="Label for the prediction annotation in the reports.")
    parser.add_argument("--vectors", action="store_true", default=False,
                        help="Flag. If set, the model vectors will be printed in the locus report.")
    parser.add_argument("--gff3", action="store_true", default=False,
                        help="Flag. If set, the GFF3 of the compared transcripts will be printed in the report.")
    parser.add_argument("-l", "--log", default=None, type=str)
    parser.add_argument("-v", "--verbose", action="store_true", default=False)
    parser.add_argument("-x", "--threads", "--processes", dest="threads", default=None, type=get_procs)
    parser.set_defaults(func=compare)

    return parser


if __name__ == '__main__':
    __args__ = compare_parser().parse_args()
    __args__.func(__args__)
