"""
This module defines the CliquePair, the comparison of a reference clique against a prediction
clique over the range of their locus, together with the total order used to rank the pairs.
"""

from .class_codes import ClassCode
from .clique import TranscriptClique
from .comparison import ComparisonStats, NucleotideStats, StructureStats
from .model_vector import CDS, FIVE_UTR, THREE_UTR


class CliquePair:

    """
    A reference clique and a prediction clique at a locus. Either clique can be empty,
    but not both; only pairs with two non-empty cliques are classified.

    :param refr_clique: the reference clique.
    :type refr_clique: TranscriptClique
    :param pred_clique: the prediction clique.
    :type pred_clique: TranscriptClique
    :param start: start of the locus.
    :param end: end of the locus.
    :param tolerance: tolerance for the perfect identity.
    """

    def __init__(self, refr_clique: TranscriptClique, pred_clique: TranscriptClique, start, end,
                 tolerance=1e-6):
        self.refr_clique = refr_clique if refr_clique is not None else TranscriptClique.empty()
        self.pred_clique = pred_clique if pred_clique is not None else TranscriptClique.empty()
        self.start, self.end = start, end
        self.tolerance = tolerance
        self.stats = None
        self.classification = None
        self.refr_vector, self.pred_vector = None, None
        self.__utr_unlabelled = None

    @property
    def needs_comparison(self):
        return not self.refr_clique.is_empty and not self.pred_clique.is_empty

    @property
    def is_simple(self):
        return len(self.refr_clique) == 1 and len(self.pred_clique) == 1

    @property
    def has_utrs(self):
        return self.refr_clique.has_utrs or self.pred_clique.has_utrs

    @property
    def total_transcripts(self):
        return len(self.refr_clique) + len(self.pred_clique)

    @property
    def length(self):
        return self.end - self.start + 1

    def comparative_analysis(self) -> ComparisonStats:
        """
        Build the model vectors of the two cliques, compare them and, if both cliques
        are non-empty, classify the pair.

        :raises ValueError: if both cliques are empty.
        :raises ModelVectorOverflow: if a clique is too complex for its model vector.
        :rtype: ComparisonStats
        """

        if self.refr_clique.is_empty and self.pred_clique.is_empty:
            raise ValueError("Cannot compare two empty cliques ({0}-{1})".format(self.start, self.end))

        self.refr_vector = self.refr_clique.model_vector(self.start, self.end)
        self.pred_vector = self.pred_clique.model_vector(self.start, self.end)

        stats = ComparisonStats(tolerance=self.tolerance)
        stats.cds_struc = StructureStats.compare(self.refr_clique.cds, self.pred_clique.cds)
        stats.exon_struc = StructureStats.compare(self.refr_clique.exons, self.pred_clique.exons)
        stats.utr_struc = StructureStats.compare(self.refr_clique.utrs, self.pred_clique.utrs)
        self.__utr_unlabelled = StructureStats.compare(
            [utr[:2] for utr in self.refr_clique.utrs], [utr[:2] for utr in self.pred_clique.utrs])

        stats.cds_nuc = NucleotideStats.compare(self.refr_vector.mask(CDS), self.pred_vector.mask(CDS))
        stats.utr_nuc = NucleotideStats.compare(self.refr_vector.mask(FIVE_UTR, THREE_UTR),
                                                self.pred_vector.mask(FIVE_UTR, THREE_UTR))
        stats.overall_matches = self.refr_vector.matches(self.pred_vector)
        stats.overall_length = len(self.refr_vector)
        self.stats = stats

        if self.needs_comparison:
            self.classification = self.classify()
        return stats

    def release_vectors(self):
        """Drop the model vectors once the statistics have been computed."""
        self.refr_vector, self.pred_vector = None, None

    def classify(self) -> ClassCode:
        """
        Classify the pair. The rules are evaluated in order and the first one which applies wins.
        :rtype: ClassCode
        """

        if self.stats is None:
            raise ValueError("The pair has not been compared yet")
        if not self.needs_comparison:
            raise ValueError("Pairs with an empty clique cannot be classified")

        cds_perfect = self.stats.cds_struc.is_perfect
        exon_perfect = self.stats.exon_struc.is_perfect
        utr_perfect = self.stats.utr_struc.is_perfect

        if cds_perfect and exon_perfect and utr_perfect and self.stats.is_identical:
            return ClassCode.PERFECT_MATCH
        elif cds_perfect and exon_perfect and not utr_perfect and self.__utr_unlabelled.is_perfect:
            return ClassCode.MISLABELED
        elif cds_perfect:
            return ClassCode.CDS_MATCH
        elif exon_perfect:
            return ClassCode.EXON_MATCH
        elif utr_perfect:
            return ClassCode.UTR_MATCH
        return ClassCode.NON_MATCH

    def sort_key(self):
        """Key of the pair in the ranking; higher is better."""
        if self.stats is None:
            raise ValueError("The pair has not been compared yet")
        return (self.stats.overall_identity,
                self.stats.cds_struc.correct,
                self.stats.exon_struc.correct,
                self.stats.utr_struc.correct,
                -self.total_transcripts)

    def __repr__(self):
        return "CliquePair({0} vs {1}, {2})".format(self.refr_clique.id, self.pred_clique.id,
                                                    self.classification)


def compare_pairs(pair, other) -> int:
    """
    Compare two clique pairs: by overall identity, then by the number of correct CDS segments,
    exons and UTR segments, finally preferring the pair with fewer transcripts.
    :returns: 1 if the first pair is better, -1 if the second one is, 0 if they are equivalent.
    """

    key, other_key = pair.sort_key(), other.sort_key()
    if key > other_key:
        return 1
    elif key < other_key:
        return -1
    return 0


def compare_pairs_reverse(pair, other) -> int:
    """Inverse of compare_pairs; sorting with it puts the best pairs first."""
    return compare_pairs(other, pair)
