# coding: utf-8

"""
This module contains the Accountant, which folds the results of each locus into the
run-wide counts and statistics used for the final summary.
"""

import collections
import threading
from .class_codes import ClassCode
from .comparison import ComparisonStats, ratio
from ..utilities.log_utils import create_null_logger


class ClassDescription:

    """Descriptive statistics of the pairs assigned to one classification code."""

    __slots__ = ["comparisons", "total_length", "refr_transcripts", "pred_transcripts",
                 "refr_exons", "pred_exons", "refr_cds_length", "pred_cds_length"]

    def __init__(self):
        for attribute in self.__slots__:
            setattr(self, attribute, 0)

    def record(self, pair):
        """
        Add a compared pair to the description.
        :type pair: Locompare.scales.clique_pair.CliquePair
        """
        self.comparisons += 1
        self.total_length += pair.length
        self.refr_transcripts += len(pair.refr_clique)
        self.pred_transcripts += len(pair.pred_clique)
        self.refr_exons += pair.refr_clique.exon_count
        self.pred_exons += pair.pred_clique.exon_count
        self.refr_cds_length += pair.refr_clique.cds_length
        self.pred_cds_length += pair.pred_clique.cds_length

    def __iadd__(self, other):
        for attribute in self.__slots__:
            setattr(self, attribute, getattr(self, attribute) + getattr(other, attribute))
        return self

    @property
    def average_length(self):
        return ratio(self.total_length, self.comparisons)

    @property
    def average_refr_exons(self):
        return ratio(self.refr_exons, self.refr_transcripts)

    @property
    def average_pred_exons(self):
        return ratio(self.pred_exons, self.pred_transcripts)

    @property
    def average_refr_cds_length(self):
        """Average reference CDS length, in amino acids."""
        return ratio(self.refr_cds_length / 3, self.refr_transcripts)

    @property
    def average_pred_cds_length(self):
        """Average prediction CDS length, in amino acids."""
        return ratio(self.pred_cds_length / 3, self.pred_transcripts)


class AggregateCounts:

    """Run-wide counts of loci, genes, transcripts and comparisons."""

    __slots__ = ["num_loci", "shared", "unique_refr", "unique_pred",
                 "refr_genes", "pred_genes", "refr_transcripts", "pred_transcripts",
                 "num_comparisons", "classes", "unique_refr_cliques", "novel_pred_cliques",
                 "skipped_loci", "exceeding_loci", "degraded_loci"]

    def __init__(self):
        for attribute in self.__slots__:
            setattr(self, attribute, 0)
        self.classes = collections.Counter(dict((code, 0) for code in ClassCode))

    def __iadd__(self, other):
        for attribute in self.__slots__:
            if attribute == "classes":
                self.classes.update(other.classes)
            else:
                setattr(self, attribute, getattr(self, attribute) + getattr(other, attribute))
        return self

    @property
    def reported_pairs(self):
        return sum(self.classes.values())


class SummaryData:

    """
    Container for all the data of a run: counts, per-class descriptions and summed statistics.
    """

    def __init__(self, tolerance=1e-6):
        self.counts = AggregateCounts()
        self.descriptions = dict((code, ClassDescription()) for code in ClassCode)
        self.stats = ComparisonStats(tolerance=tolerance)

    def __iadd__(self, other):
        self.counts += other.counts
        for code in ClassCode:
            self.descriptions[code] += other.descriptions[code]
        self.stats += other.stats
        return self


class Accountant:

    """
    This class accumulates the results of the comparison of each locus. Each worker should
    own a private accountant; accountants are then merged into the run-wide one.
    Run-wide ratios are always derived from the summed counts.
    """

    def __init__(self, tolerance=1e-6, logger=None):
        self.summary = SummaryData(tolerance=tolerance)
        self.logger = logger if logger is not None else create_null_logger()
        self.__lock = threading.Lock()

    def record_locus(self, result):
        """
        Fold the result of a locus into the counts.
        :type result: Locompare.scales.locus_comparison.LocusResult
        """

        counts = self.summary.counts
        counts.num_loci += 1
        category = result.category
        if category == "shared":
            counts.shared += 1
        elif category == "unique_refr":
            counts.unique_refr += 1
        else:
            counts.unique_pred += 1

        locus = result.locus
        counts.refr_genes += len(locus.reference)
        counts.pred_genes += len(locus.prediction)
        counts.refr_transcripts += len(locus.reference_transcripts)
        counts.pred_transcripts += len(locus.prediction_transcripts)
        counts.num_comparisons += result.comparisons
        counts.unique_refr_cliques += len(result.unique_refr)
        counts.novel_pred_cliques += len(result.novel_pred)
        if result.skipped:
            counts.skipped_loci += 1
        if result.exceeds_comparison_limit:
            counts.exceeding_loci += 1
        if result.degraded:
            counts.degraded_loci += 1

        for pair in result.pairs:
            counts.classes[pair.classification] += 1
            self.summary.descriptions[pair.classification].record(pair)
            self.summary.stats += pair.stats
        self.logger.debug("Recorded locus %s (%s, %d pairs)", locus.id, category, len(result.pairs))

    def merge(self, other):
        """
        Merge the data of another accountant into this one.
        :type other: Accountant
        """
        with self.__lock:
            self.summary += other.summary

    @property
    def counts(self):
        return self.summary.counts

    @property
    def stats(self):
        return self.summary.stats
