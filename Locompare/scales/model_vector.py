"""
Model vectors encode the structure of a transcript clique along a locus, one ASCII symbol per nucleotide:

- G: intergenic
- I: intron
- C: coding sequence
- F: 5' UTR
- T: 3' UTR
- N: exon of a non-coding transcript
"""

import numpy as np
from ..exceptions import ModelVectorOverflow

MAX_EXONS = 512
MAX_UTRS = 64

INTERGENIC, INTRON, CDS, FIVE_UTR, THREE_UTR, NONCODING = "G", "I", "C", "F", "T", "N"
SYMBOLS = (INTERGENIC, INTRON, CDS, FIVE_UTR, THREE_UTR, NONCODING)


class ModelVector:

    """
    Per-nucleotide encoding of a clique over the closed range [start, end].

    :param clique: the clique to encode.
    :type clique: Locompare.scales.clique.TranscriptClique
    :param start: start of the locus.
    :param end: end of the locus.

    :raises ModelVectorOverflow: if the clique has more than MAX_EXONS exons or CDS segments,
    or more than MAX_UTRS UTR segments.
    """

    def __init__(self, clique, start, end):

        if start > end:
            raise ValueError("Invalid range for a model vector: {0}-{1}".format(start, end))
        if len(clique.exons) > MAX_EXONS or len(clique.cds) > MAX_EXONS:
            raise ModelVectorOverflow("Clique {0} has {1} exons and {2} CDS segments; the limit is {3}".format(
                clique.id, len(clique.exons), len(clique.cds), MAX_EXONS))
        if len(clique.utrs) > MAX_UTRS:
            raise ModelVectorOverflow("Clique {0} has {1} UTR segments; the limit is {2}".format(
                clique.id, len(clique.utrs), MAX_UTRS))

        self.start, self.end = start, end
        self.vector = np.full(end - start + 1, INTERGENIC.encode(), dtype="S1")

        for transcript in clique:
            if transcript.start < start or transcript.end > end:
                raise ValueError("{0} ({1}-{2}) falls outside of the range {3}-{4}".format(
                    transcript.id, transcript.start, transcript.end, start, end))
            self.__paint(transcript.start, transcript.end, INTRON)

        for transcript in clique:
            if transcript.is_coding:
                for segments, symbol in ((transcript.combined_cds, CDS), (transcript.five_utr, FIVE_UTR),
                                         (transcript.three_utr, THREE_UTR)):
                    for segment_start, segment_end in segments:
                        self.__paint(segment_start, segment_end, symbol)
            else:
                for exon_start, exon_end in transcript.exons:
                    self.__paint(exon_start, exon_end, NONCODING)

    def __paint(self, start, end, symbol):
        self.vector[start - self.start:end - self.start + 1] = symbol.encode()

    def mask(self, *symbols):
        """Boolean array, True where the vector carries one of the given symbols."""
        return np.isin(self.vector, [symbol.encode() for symbol in symbols])

    def units(self):
        """
        Run-length structure of the vector, as a list of (symbol, start, end) tuples
        in genomic coordinates.
        """

        if len(self.vector) == 0:
            return []
        breaks = np.flatnonzero(self.vector[1:] != self.vector[:-1]) + 1
        starts = np.concatenate(([0], breaks))
        ends = np.concatenate((breaks, [len(self.vector)])) - 1
        return [(self.vector[first].decode(), int(first) + self.start, int(last) + self.start)
                for first, last in zip(starts, ends)]

    def matches(self, other):
        """Number of positions where two vectors over the same range carry the same symbol."""
        if (self.start, self.end) != (other.start, other.end):
            raise ValueError("Model vectors over different ranges cannot be compared")
        return int((self.vector == other.vector).sum())

    def __len__(self):
        return len(self.vector)

    def __str__(self):
        return self.vector.tobytes().decode()
