"""
Comparison of the reference and prediction transcripts of one locus.
"""

from ..configuration.configuration import CompareConfiguration
from ..exceptions import CombinatorialLimitExceeded, ModelVectorOverflow
from ..loci.locus import Locus
from ..utilities.log_utils import create_null_logger
from .clique import TranscriptClique, build_cliques
from .clique_pair import CliquePair
from .selector import select_pairs


class LocusResult:

    """
    Result of the comparison at a locus, as handed to the reports and to the accountant.

    :param locus: the locus.
    :type locus: Locus
    """

    def __init__(self, locus: Locus):
        self.locus = locus
        self.refr_cliques, self.pred_cliques = [], []
        self.pairs = []
        self.unique_refr, self.novel_pred = [], []
        self.comparisons = 0
        self.pair_count = 0
        self.exceeds_comparison_limit = False
        self.skip_reason = None

    @property
    def category(self):
        """One of "shared", "unique_refr" and "unique_pred"."""
        if self.locus.reference and self.locus.prediction:
            return "shared"
        elif self.locus.reference:
            return "unique_refr"
        return "unique_pred"

    @property
    def skipped(self):
        return self.skip_reason is not None

    @property
    def degraded(self):
        return self.locus.degraded

    @property
    def notes(self):
        return self.locus.notes

    def __repr__(self):
        return "LocusResult({0}, {1} pairs)".format(self.locus.id, len(self.pairs))


def compare_locus(locus: Locus, configuration=None, logger=None) -> LocusResult:
    """
    Compare the transcripts of a locus: build the cliques of each side, compare every
    reference clique against every prediction clique and select the pairs to report.
    Loci exceeding the transcript or the comparison limits are returned without pairs
    and with the reason for the skip.

    :param locus: the locus to compare.
    :type locus: Locus
    :param configuration: the comparison settings.
    :type configuration: (None|CompareConfiguration)
    :param logger: optional logger.

    :rtype: LocusResult
    """

    if configuration is None:
        configuration = CompareConfiguration()
    if logger is None:
        logger = create_null_logger()

    result = LocusResult(locus)
    refr_transcripts, pred_transcripts = locus.reference_transcripts, locus.prediction_transcripts
    max_transcripts = configuration.max_transcripts
    if max_transcripts and max(len(refr_transcripts), len(pred_transcripts)) > max_transcripts:
        result.skip_reason = "The number of transcripts ({0} reference, {1} prediction) exceeds the limit of {2}".format(
            len(refr_transcripts), len(pred_transcripts), max_transcripts)
        logger.warning("%s: %s", locus.id, result.skip_reason)
        return result

    if len(refr_transcripts) == 1 and len(pred_transcripts) == 1:
        result.refr_cliques = [TranscriptClique(refr_transcripts)]
        result.pred_cliques = [TranscriptClique(pred_transcripts)]
    else:
        result.refr_cliques = build_cliques(refr_transcripts, logger=logger)
        result.pred_cliques = build_cliques(pred_transcripts, logger=logger)

    candidates = []
    if result.refr_cliques and result.pred_cliques:
        result.pair_count = len(result.refr_cliques) * len(result.pred_cliques)
        max_comparisons = configuration.max_comparisons
        if max_comparisons and result.pair_count > max_comparisons:
            exc = CombinatorialLimitExceeded(result.pair_count, max_comparisons)
            logger.warning("%s: %s", locus.id, exc)
            result.exceeds_comparison_limit = True
            result.skip_reason = str(exc)
            return result

        for refr_clique in result.refr_cliques:
            for pred_clique in result.pred_cliques:
                pair = CliquePair(refr_clique, pred_clique, locus.start, locus.end,
                                  tolerance=configuration.tolerance)
                try:
                    pair.comparative_analysis()
                except ModelVectorOverflow as exc:
                    logger.error("%s: skipping the comparison of %s vs %s: %s",
                                 locus.id, refr_clique.id, pred_clique.id, exc)
                    locus.notes.append("comparison of {0} vs {1} skipped: {2}".format(
                        refr_clique.id, pred_clique.id, exc))
                    continue
                candidates.append(pair)
        result.comparisons = len(candidates)

    result.pairs, result.unique_refr, result.novel_pred = select_pairs(
        candidates, result.refr_cliques, result.pred_cliques)
    if not configuration.model_vectors:
        for pair in candidates:
            pair.release_vectors()
    logger.debug("%s: %d comparisons, %d reported pairs", locus.id, result.comparisons, len(result.pairs))
    return result
