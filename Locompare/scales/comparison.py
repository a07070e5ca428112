"""
This module contains the statistics records produced by the comparison of two transcript cliques.
All the records keep only raw, non-negative integer counts; every ratio is derived from the
counts on request. When the denominator of a ratio is zero the ratio is UNDEFINED, which is
distinct from 0 and cannot be used as a number.
"""

import math
from ..exceptions import DegenerateRatio


class _Undefined:

    """Sentinel for ratios whose denominator is zero."""

    __instance = None

    def __new__(cls):
        if cls.__instance is None:
            cls.__instance = super().__new__(cls)
        return cls.__instance

    def __float__(self):
        raise DegenerateRatio("The ratio is undefined, as its denominator is zero")

    def __bool__(self):
        return False

    def __str__(self):
        return "--"

    def __repr__(self):
        return "UNDEFINED"

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


def ratio(numerator, denominator):
    """Divide numerator by denominator, returning UNDEFINED for a zero denominator."""
    if denominator == 0:
        return UNDEFINED
    return numerator / denominator


def edit_distance(f1):
    """Annotation edit distance, 1 - F1, clamped to [0, 1]."""
    if f1 is UNDEFINED:
        return UNDEFINED
    return min(1.0, max(0.0, 1 - f1))


def format_ratio(value, precision=3):
    """Format a ratio for the reports, "--" when undefined."""
    if value is UNDEFINED:
        return "--"
    return "{0:.{1}f}".format(value, precision)


class StructureStats:

    """
    Structural comparison of one kind of unit (CDS segments, exons or UTR segments).

    - correct: reference units with an identical prediction unit
    - missing: reference units without an identical prediction unit
    - wrong: prediction units without an identical reference unit
    """

    __slots__ = ["correct", "missing", "wrong"]

    def __init__(self, correct=0, missing=0, wrong=0):
        for value in (correct, missing, wrong):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError("Invalid count: {0!r}".format(value))
        self.correct, self.missing, self.wrong = correct, missing, wrong

    @classmethod
    def compare(cls, reference_units, prediction_units):
        """
        Compare two collections of units by coordinate identity.
        :rtype: StructureStats
        """
        reference_units, prediction_units = set(reference_units), set(prediction_units)
        correct = len(reference_units & prediction_units)
        return cls(correct, len(reference_units) - correct, len(prediction_units) - correct)

    @property
    def reference_units(self):
        return self.correct + self.missing

    @property
    def prediction_units(self):
        return self.correct + self.wrong

    @property
    def sensitivity(self):
        return ratio(self.correct, self.correct + self.missing)

    @property
    def specificity(self):
        return ratio(self.correct, self.correct + self.wrong)

    @property
    def f1(self):
        # Equal to the harmonic mean of sensitivity and specificity when both are defined
        return ratio(2 * self.correct, 2 * self.correct + self.missing + self.wrong)

    @property
    def edit_distance(self):
        return edit_distance(self.f1)

    @property
    def is_perfect(self):
        return self.missing == 0 and self.wrong == 0

    @property
    def is_empty(self):
        return self.correct + self.missing + self.wrong == 0

    def __iadd__(self, other):
        self.correct += other.correct
        self.missing += other.missing
        self.wrong += other.wrong
        return self

    def __add__(self, other):
        new = self.__class__(self.correct, self.missing, self.wrong)
        new += other
        return new

    def __eq__(self, other):
        if not isinstance(other, StructureStats):
            return NotImplemented
        return (self.correct, self.missing, self.wrong) == (other.correct, other.missing, other.wrong)

    def __repr__(self):
        return "StructureStats(correct={0}, missing={1}, wrong={2})".format(
            self.correct, self.missing, self.wrong)


class NucleotideStats:

    """
    Nucleotide-level comparison of one kind of structure (CDS or UTR), as counts of
    true positive, false positive, false negative and true negative positions.
    """

    __slots__ = ["tp", "fp", "fn", "tn"]

    def __init__(self, tp=0, fp=0, fn=0, tn=0):
        for value in (tp, fp, fn, tn):
            if value < 0:
                raise ValueError("Invalid count: {0!r}".format(value))
        self.tp, self.fp, self.fn, self.tn = int(tp), int(fp), int(fn), int(tn)

    @classmethod
    def compare(cls, reference_mask, prediction_mask):
        """
        Compare two boolean numpy arrays of the same length.
        :rtype: NucleotideStats
        """
        if len(reference_mask) != len(prediction_mask):
            raise ValueError("Masks of different length: {0} vs {1}".format(
                len(reference_mask), len(prediction_mask)))
        tp = int((reference_mask & prediction_mask).sum())
        fp = int((~reference_mask & prediction_mask).sum())
        fn = int((reference_mask & ~prediction_mask).sum())
        tn = len(reference_mask) - tp - fp - fn
        return cls(tp, fp, fn, tn)

    @property
    def length(self):
        return self.tp + self.fp + self.fn + self.tn

    @property
    def matching_coefficient(self):
        return ratio(self.tp + self.tn, self.length)

    @property
    def correlation_coefficient(self):
        denominator = math.sqrt((self.tp + self.fp) * (self.tp + self.fn) *
                                (self.tn + self.fp) * (self.tn + self.fn))
        return ratio(self.tp * self.tn - self.fp * self.fn, denominator)

    @property
    def sensitivity(self):
        return ratio(self.tp, self.tp + self.fn)

    @property
    def specificity(self):
        return ratio(self.tp, self.tp + self.fp)

    @property
    def f1(self):
        return ratio(2 * self.tp, 2 * self.tp + self.fp + self.fn)

    @property
    def edit_distance(self):
        return edit_distance(self.f1)

    def __iadd__(self, other):
        self.tp += other.tp
        self.fp += other.fp
        self.fn += other.fn
        self.tn += other.tn
        return self

    def __add__(self, other):
        new = self.__class__(self.tp, self.fp, self.fn, self.tn)
        new += other
        return new

    def __eq__(self, other):
        if not isinstance(other, NucleotideStats):
            return NotImplemented
        return (self.tp, self.fp, self.fn, self.tn) == (other.tp, other.fp, other.fn, other.tn)

    def __repr__(self):
        return "NucleotideStats(tp={0}, fp={1}, fn={2}, tn={3})".format(self.tp, self.fp, self.fn, self.tn)


class ComparisonStats:

    """
    Full statistics of the comparison of two cliques, or the sum of many of them.

    :param tolerance: tolerance used to decide whether the overall identity is perfect.
    """

    def __init__(self, tolerance=1e-6):
        self.cds_struc = StructureStats()
        self.exon_struc = StructureStats()
        self.utr_struc = StructureStats()
        self.cds_nuc = NucleotideStats()
        self.utr_nuc = NucleotideStats()
        self.overall_matches = 0
        self.overall_length = 0
        self.tolerance = tolerance

    @property
    def overall_identity(self):
        return ratio(self.overall_matches, self.overall_length)

    @property
    def is_identical(self):
        """True if the overall identity is within tolerance of 1."""
        identity = self.overall_identity
        if identity is UNDEFINED:
            return False
        return identity >= 1 - self.tolerance

    @property
    def structures(self):
        return (("CDS", self.cds_struc), ("Exon", self.exon_struc), ("UTR", self.utr_struc))

    def __iadd__(self, other):
        self.cds_struc += other.cds_struc
        self.exon_struc += other.exon_struc
        self.utr_struc += other.utr_struc
        self.cds_nuc += other.cds_nuc
        self.utr_nuc += other.utr_nuc
        self.overall_matches += other.overall_matches
        self.overall_length += other.overall_length
        return self

    def __repr__(self):
        return "ComparisonStats(cds={0}, exon={1}, utr={2}, identity={3!r})".format(
            self.cds_struc, self.exon_struc, self.utr_struc, self.overall_identity)
