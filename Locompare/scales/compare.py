#!/usr/bin/env python3
# coding: utf-8

"""
This module drives the comparison of two annotations: each sequence is clustered into loci
and compared by one worker thread; the results are then merged into the run-wide data.
"""

import collections
import threading
from concurrent.futures import ThreadPoolExecutor
from ..configuration.configuration import LocompareConfiguration
from ..loci.clusterer import LocusClusterer, PairwiseLocusClusterer
from ..loci.feature_index import FeatureIndex
from ..utilities.log_utils import create_null_logger
from .accountant import Accountant
from .locus_comparison import compare_locus


class ComparisonRun:

    """
    The results of a run: the loci of each sequence, the accountant with the run-wide
    summary and the sequences whose processing failed.
    """

    def __init__(self, tolerance=1e-6, logger=None):
        self.loci = collections.OrderedDict()
        self.accountant = Accountant(tolerance=tolerance, logger=logger)
        self.failed_sequences = collections.OrderedDict()
        self.__lock = threading.Lock()

    def store(self, seqid, results, accountant=None):
        """Insert the results of one sequence into the run. Thread-safe."""
        with self.__lock:
            self.loci[seqid] = results
            if accountant is not None:
                self.accountant.merge(accountant)

    def fail(self, seqid, exc):
        """Record the failure of one sequence. Thread-safe."""
        with self.__lock:
            self.failed_sequences[seqid] = "{0}: {1}".format(exc.__class__.__name__, exc)

    def sorted_loci(self):
        """Iterate over all the loci (or locus results), by sequence and then by position."""
        for seqid in sorted(self.loci):
            yield from self.loci[seqid]

    @property
    def summary(self):
        return self.accountant.summary


def _compare_sequence(seqid, refr_index, pred_index, configuration, run, logger):

    try:
        accountant = Accountant(tolerance=configuration.compare.tolerance, logger=logger)
        clusterer = PairwiseLocusClusterer(refr_index, pred_index, logger=logger)
        results = []
        for locus in clusterer.cluster(seqid):
            result = compare_locus(locus, configuration=configuration.compare, logger=logger)
            accountant.record_locus(result)
            results.append(result)
    except Exception as exc:
        logger.error("Comparison of sequence %s failed", seqid)
        logger.exception(exc)
        run.fail(seqid, exc)
        return
    run.store(seqid, results, accountant)
    logger.debug("Finished with %s: %d loci", seqid, len(results))


def compare_annotations(refr_index: FeatureIndex, pred_index: FeatureIndex, configuration=None,
                        logger=None) -> ComparisonRun:
    """
    Compare a reference and a prediction annotation, one sequence per task.
    Each task works on private copies of the indices restricted to its sequence.

    :param refr_index: the index of the reference genes.
    :param pred_index: the index of the prediction genes. It must share the arena of the reference.
    :param configuration: the configuration of the run.
    :type configuration: (None|LocompareConfiguration)
    :param logger: optional logger.

    :rtype: ComparisonRun
    """

    if configuration is None:
        configuration = LocompareConfiguration()
    if logger is None:
        logger = create_null_logger()

    seqids = sorted(set(refr_index.sequence_ids()) | set(pred_index.sequence_ids()))
    logger.info("Comparing %d sequences with %d threads", len(seqids), configuration.threads)
    run = ComparisonRun(tolerance=configuration.compare.tolerance, logger=logger)

    with ThreadPoolExecutor(max_workers=configuration.threads) as executor:
        futures = [executor.submit(_compare_sequence, seqid, refr_index.restrict(seqid),
                                   pred_index.restrict(seqid), configuration, run, logger)
                   for seqid in seqids]
        for future in futures:
            future.result()

    if run.failed_sequences:
        logger.warning("%d sequences could not be compared: %s", len(run.failed_sequences),
                       ", ".join(run.failed_sequences))
    logger.info("Finished the comparison: %d loci", run.accountant.counts.num_loci)
    return run


def _cluster_sequence(seqid, index, run, logger):

    try:
        loci = LocusClusterer(index, logger=logger).cluster(seqid)
    except Exception as exc:
        logger.error("Clustering of sequence %s failed", seqid)
        logger.exception(exc)
        run.fail(seqid, exc)
        return
    run.store(seqid, loci)


def cluster_annotations(index: FeatureIndex, configuration=None, logger=None) -> ComparisonRun:
    """
    Cluster the genes of a single annotation into loci, one sequence per task.
    The "loci" of the returned run contain Locus objects rather than comparison results.

    :rtype: ComparisonRun
    """

    if configuration is None:
        configuration = LocompareConfiguration()
    if logger is None:
        logger = create_null_logger()

    run = ComparisonRun(logger=logger)
    with ThreadPoolExecutor(max_workers=configuration.threads) as executor:
        futures = [executor.submit(_cluster_sequence, seqid, index.restrict(seqid), run, logger)
                   for seqid in index.sequence_ids()]
        for future in futures:
            future.result()
    logger.info("Found %d loci on %d sequences", sum(len(_) for _ in run.loci.values()), len(run.loci))
    return run
