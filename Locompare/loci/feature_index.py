"""
This module defines the FeatureIndex, the range-query index over the genes of one
annotation. It is filled once, after loading, and is read-only afterwards, so that
different threads can query it concurrently for different sequences.
"""

from collections import defaultdict
from intervaltree import IntervalTree
from ..exceptions import IndexQueryError, SequenceNotFound
from ..transcripts.arena import FeatureArena


class FeatureIndex:

    """
    Index of the genes of one annotation, grouped by sequence ID.
    Genes are stored as handles into a FeatureArena; coordinates are 1-based and inclusive.

    :param arena: the arena which owns the genes.
    :type arena: FeatureArena

    :param label: label of the annotation (e.g. "reference").
    """

    def __init__(self, arena: FeatureArena, label=None):
        self.arena = arena
        self.label = label
        self.__positions = defaultdict(list)
        self.__trees = dict()
        self.__order = dict()

    def add(self, handle: int):
        """Add the gene with the given handle to the index."""
        gene = self.arena[handle]
        if gene.start is None or gene.end is None:
            raise IndexQueryError("Gene {0} has no coordinates and cannot be indexed".format(gene.id))
        self.__order[handle] = len(self.__order)
        self.__positions[gene.chrom].append(handle)
        self.__trees.pop(gene.chrom, None)

    def __tree(self, seqid) -> IntervalTree:
        # intervaltree uses half-open intervals
        if seqid not in self.__trees:
            self.__trees[seqid] = IntervalTree.from_tuples(
                (self.arena[handle].start, self.arena[handle].end + 1, handle)
                for handle in self.__positions[seqid])
        return self.__trees[seqid]

    def sequence_ids(self) -> list:
        """The sequence IDs of the index, in order of first appearance."""
        return list(self.__positions.keys())

    def __contains__(self, seqid):
        return seqid in self.__positions

    def __len__(self):
        return len(self.__order)

    def features_for_sequence(self, seqid) -> list:
        """
        All the gene handles on a sequence, in the order they were added.
        :raises SequenceNotFound: if the sequence ID is unknown to the index.
        """
        if seqid not in self.__positions:
            raise SequenceNotFound("Sequence {0} not found in the {1} index".format(
                seqid, self.label or "feature"))
        return list(self.__positions[seqid])

    def features_overlapping(self, seqid, start, end) -> list:
        """
        Handles of the genes overlapping the closed range [start, end] on a sequence,
        in the order they were added. An unknown sequence yields an empty list.

        :raises IndexQueryError: if the range is malformed.
        """

        for value in (start, end):
            if isinstance(value, bool) or not isinstance(value, int):
                raise IndexQueryError("Invalid coordinate for a query on {0}: {1!r}".format(seqid, value))
        if start > end:
            raise IndexQueryError("Invalid range for a query on {0}: {1}-{2}".format(seqid, start, end))
        if seqid not in self.__positions:
            return []
        found = [interval.data for interval in self.__tree(seqid).overlap(start, end + 1)]
        return sorted(found, key=self.__order.__getitem__)

    def restrict(self, seqid):
        """
        Return a private copy of the index which contains only the genes of one sequence.
        The copy shares the arena, which is read-only during the comparison.
        :rtype: FeatureIndex
        """

        view = self.__class__(self.arena, label=self.label)
        for handle in self.__positions.get(seqid, []):
            view.add(handle)
        if seqid in self.__positions:
            view.__tree(seqid)
        return view
