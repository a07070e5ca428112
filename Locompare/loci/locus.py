"""
This module defines the Locus, a maximal group of overlapping genes on one sequence.
"""

from ..transcripts.arena import FeatureArena


class Locus:

    """
    A locus holds the handles of its genes, divided by source, and the range that they span.
    Coordinates are 1-based and inclusive.

    :param chrom: the sequence ID.
    :param start: start of the locus.
    :param end: end of the locus.
    :param arena: the arena owning the genes.
    :type arena: FeatureArena
    """

    __name__ = "locus"

    def __init__(self, chrom, start, end, arena: FeatureArena):
        self.chrom = chrom
        self.start, self.end = start, end
        self.arena = arena
        self.reference = []
        self.prediction = []
        self.notes = []

    def add(self, handle, source="reference"):
        """
        Add a gene to the locus, extending its boundaries if necessary.
        :param handle: handle of the gene in the arena.
        :param source: either "reference" or "prediction".
        """

        if source == "reference":
            self.reference.append(handle)
        elif source == "prediction":
            self.prediction.append(handle)
        else:
            raise ValueError("Invalid source: {}".format(source))
        gene = self.arena[handle]
        self.start = min(self.start, gene.start)
        self.end = max(self.end, gene.end)

    @property
    def handles(self):
        return self.reference + self.prediction

    @property
    def reference_genes(self):
        return [self.arena[handle] for handle in self.reference]

    @property
    def prediction_genes(self):
        return [self.arena[handle] for handle in self.prediction]

    @property
    def reference_transcripts(self):
        return sorted(self.arena.transcripts(self.reference))

    @property
    def prediction_transcripts(self):
        return sorted(self.arena.transcripts(self.prediction))

    @property
    def degraded(self):
        """Flag. True if some problem occurred while building or comparing the locus."""
        return len(self.notes) > 0

    @property
    def id(self):
        return "{0}_{1}-{2}".format(self.chrom, self.start, self.end)

    def __len__(self):
        return self.end - self.start + 1

    def __repr__(self):
        return "Locus({0}, {1} reference genes, {2} prediction genes)".format(
            self.id, len(self.reference), len(self.prediction))
