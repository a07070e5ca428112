"""
This module contains the clusterers, which partition the genes of a sequence into loci.
Two genes end up in the same locus if and only if they are connected by a chain of
overlapping genes. The loci are built by fixed-point expansion: each locus is seeded
with an unclaimed gene and then grows by claiming every gene overlapping its current
range, until no new gene is found.
"""

from ..exceptions import IndexQueryError, SequenceNotFound
from ..utilities.log_utils import create_null_logger
from .feature_index import FeatureIndex
from .locus import Locus


class LocusClusterer:

    """
    Clusterer for a single annotation.

    :param index: the index of the annotation.
    :type index: FeatureIndex
    :param logger: optional logger.
    """

    def __init__(self, index: FeatureIndex, logger=None):
        self.index = index
        self.logger = logger if logger is not None else create_null_logger()

    def cluster(self, seqid) -> list:
        """
        Partition the genes of a sequence into loci.
        :raises SequenceNotFound: if the sequence is unknown to the index.
        :rtype: list[Locus]
        """

        claimed = set()
        loci = []
        for handle in self.index.features_for_sequence(seqid):
            if handle in claimed:
                continue
            loci.append(self._seed(seqid, handle, "reference", [(self.index, "reference")], claimed))
        return self._seal(seqid, loci)

    def _seed(self, seqid, handle, source, sources, claimed) -> Locus:
        gene = self.index.arena[handle]
        locus = Locus(seqid, gene.start, gene.end, self.index.arena)
        locus.add(handle, source)
        claimed.add(handle)
        self._expand(locus, sources, claimed)
        return locus

    def _expand(self, locus, sources, claimed):
        """Claim overlapping genes from the given sources until the locus stops growing."""

        while True:
            added = 0
            for index, source in sources:
                for handle in self._query(index, locus):
                    if handle in claimed:
                        continue
                    claimed.add(handle)
                    locus.add(handle, source)
                    added += 1
            if added == 0:
                break

    def _query(self, index, locus):
        try:
            return index.features_overlapping(locus.chrom, locus.start, locus.end)
        except IndexQueryError as exc:
            self.logger.error("Query for %s:%s-%s in the %s index failed: %s",
                              locus.chrom, locus.start, locus.end, index.label, exc)
            locus.notes.append("overlap query failed on the {0} index: {1}".format(index.label, exc))
            return []

    def _seal(self, seqid, loci):
        loci = sorted(loci, key=lambda locus: (locus.start, locus.end))
        self.logger.debug("Found %d loci on %s", len(loci), seqid)
        return loci


class PairwiseLocusClusterer(LocusClusterer):

    """
    Clusterer for a reference and a prediction annotation. Reference genes seed the first
    round of loci, which absorb the overlapping genes from both annotations; the remaining
    prediction genes seed a second round, which can only contain prediction genes.

    :type refr_index: FeatureIndex
    :type pred_index: FeatureIndex
    """

    def __init__(self, refr_index: FeatureIndex, pred_index: FeatureIndex, logger=None):
        super().__init__(refr_index, logger=logger)
        self.refr_index = refr_index
        self.pred_index = pred_index
        if refr_index.arena is not pred_index.arena:
            raise ValueError("The reference and prediction indices must share the same arena")

    def cluster(self, seqid) -> list:
        """
        Partition the genes of both annotations on a sequence into loci.
        A sequence present in only one of the two annotations is clustered with that one only.
        :raises SequenceNotFound: if the sequence is unknown to both indices.
        :rtype: list[Locus]
        """

        if seqid not in self.refr_index.sequence_ids() and seqid not in self.pred_index.sequence_ids():
            raise SequenceNotFound("Sequence {0} not found in either index".format(seqid))

        claimed = set()
        loci = []
        both = [(self.refr_index, "reference"), (self.pred_index, "prediction")]
        for handle in self.__genes(self.refr_index, seqid):
            if handle not in claimed:
                loci.append(self._seed(seqid, handle, "reference", both, claimed))

        only_prediction = [(self.pred_index, "prediction")]
        for handle in self.__genes(self.pred_index, seqid):
            if handle not in claimed:
                loci.append(self._seed(seqid, handle, "prediction", only_prediction, claimed))

        return self._seal(seqid, loci)

    @staticmethod
    def __genes(index, seqid):
        if seqid not in index.sequence_ids():
            return []
        return index.features_for_sequence(seqid)
