# coding: utf-8

"""
This module defines the Transcript class, the basic unit of the comparison.
A transcript is created from a GFF3 transcript line (or from its bare coordinates),
receives its exons, CDS and UTR segments, and is then finalized. After finalization,
the transcript is immutable and exposes its derived 5' and 3' UTR segments.
"""

from sys import intern
from ..exceptions import InvalidTranscript, InvalidCDS, ModificationError
from ..parsers.GFF import GffLine
from ..utilities import overlap
from ..utilities.log_utils import create_null_logger


class Transcript:

    """
    Class which describes a transcript with its exons and coding segments.
    Coordinates are 1-based and inclusive, as in GFF3.

    :param transcript_row: the GFF3 line which defines the transcript, if any.
    :type transcript_row: (None|GffLine)

    :param tid: ID of the transcript, when no GFF3 line is provided.
    :param chrom: sequence ID.
    :param strand: strand of the transcript (+, - or None).
    :param parent: ID of the parent gene.
    :param source: label of the annotation the transcript comes from.
    """

    __name__ = "transcript"

    def __init__(self, transcript_row=None, tid=None, chrom=None, strand=None, parent=None,
                 source=None, logger=None):

        self.__finalized = False
        self.logger = logger
        self.id, self.chrom, self.strand, self.parent = tid, chrom, strand, parent
        self.source = source
        self.start, self.end = None, None
        self.attributes = dict()
        self.feature = "mRNA"
        self.exons, self.combined_cds, self.combined_utr = [], [], []
        self.five_utr, self.three_utr = [], []

        if isinstance(transcript_row, GffLine):
            if transcript_row.is_transcript is False:
                raise InvalidTranscript("{} is not a transcript line".format(transcript_row))
            self.id = transcript_row.id
            self.chrom = transcript_row.chrom
            self.strand = transcript_row.strand
            self.start, self.end = transcript_row.start, transcript_row.end
            self.parent = transcript_row.parent[0] if transcript_row.parent else None
            self.feature = transcript_row.feature
            self.attributes = transcript_row.attributes.copy()
            if self.source is None:
                self.source = transcript_row.source
        elif transcript_row is not None:
            raise TypeError("Invalid transcript row: {}".format(type(transcript_row)))

        if self.id is None:
            raise InvalidTranscript("A transcript must have an ID!")
        self.id = intern(str(self.id))
        if self.chrom is not None:
            self.chrom = intern(str(self.chrom))

    @property
    def logger(self):
        """The logger of the transcript."""
        return self.__logger

    @logger.setter
    def logger(self, logger):
        if logger is None:
            logger = create_null_logger()
        self.__logger = logger

    @property
    def finalized(self):
        """Flag. True if the transcript has been finalized and cannot be modified any longer."""
        return self.__finalized

    def add_exon(self, segment, feature=None):
        """This function will append an exon/CDS/UTR feature to the object.
        :param segment: an annotation line, or a (start, end) tuple
        :type segment: (GffLine | tuple | list)
        :param feature: type of the feature; it defaults to "exon" for tuples.
        """

        if self.finalized is True:
            raise ModificationError("You cannot add exons to a finalized transcript!")

        if isinstance(segment, GffLine):
            if self.id not in segment.parent:
                raise InvalidTranscript("Mismatch between transcript and exon: {0}, {1}".format(
                    self.id, segment.parent))
            if segment.chrom != self.chrom:
                raise InvalidTranscript("Exon on {0} added to {1}, on {2}".format(
                    segment.chrom, self.id, self.chrom))
            start, end = segment.start, segment.end
            if feature is None:
                feature = segment.feature
        elif isinstance(segment, (tuple, list)) and len(segment) == 2:
            start, end = sorted(int(_) for _ in segment)
            if feature is None:
                feature = "exon"
        else:
            raise InvalidTranscript("Unknown feature type! {}".format(type(segment)))

        if feature.upper() == "CDS":
            store = self.combined_cds
        elif "utr" in feature.lower():
            store = self.combined_utr
        elif feature.lower() == "exon":
            store = self.exons
        elif feature in ("start_codon", "stop_codon", "intron"):
            return
        else:
            raise InvalidTranscript("Unknown feature: {0}".format(feature))

        if (start, end) not in store:
            store.append((start, end))

    def add_exons(self, exons, feature=None):
        """Wrapper around add_exon for multiple segments of the same kind."""
        for exon in exons:
            self.add_exon(exon, feature=feature)

    def finalize(self):
        """
        Check the consistency of the transcript and calculate its derived features.
        After this call the transcript cannot be modified any longer.
        """

        if self.finalized is True:
            return

        self.combined_cds = sorted(self.combined_cds)
        self.combined_utr = sorted(self.combined_utr)
        if not self.exons:
            self.exons = self.__exons_from_segments()
        self.exons = sorted(self.exons)

        for first, second in zip(self.exons[:-1], self.exons[1:]):
            if overlap(first, second) > 0:
                raise InvalidTranscript("Overlapping exons in {0}: {1}, {2}".format(self.id, first, second))

        for first, second in zip(self.combined_cds[:-1], self.combined_cds[1:]):
            if overlap(first, second) > 0:
                raise InvalidCDS("Overlapping CDS segments in {0}: {1}, {2}".format(self.id, first, second))

        for segment in self.combined_cds:
            if not any(exon[0] <= segment[0] and segment[1] <= exon[1] for exon in self.exons):
                raise InvalidCDS("CDS segment {0} of {1} is not contained in any exon".format(segment, self.id))

        if self.combined_utr and not self.combined_cds:
            raise InvalidTranscript("Transcript {0} has defined UTRs but no CDS feature!".format(self.id))

        start, end = self.exons[0][0], self.exons[-1][1]
        if self.start is not None and (self.start != start or self.end != end):
            self.logger.debug("Resetting the boundaries of %s from %s-%s to %s-%s",
                              self.id, self.start, self.end, start, end)
        self.start, self.end = start, end
        self.__calculate_utrs()
        self.exons = tuple(self.exons)
        self.combined_cds = tuple(self.combined_cds)
        self.__finalized = True

    def __exons_from_segments(self):

        segments = sorted(self.combined_cds + self.combined_utr)
        if not segments:
            if self.start is not None and self.end is not None:
                self.logger.debug("Inferring that %s is a single-exon transcript", self.id)
                return [(self.start, self.end)]
            raise InvalidTranscript("No exon defined for the transcript {0}. Aborting".format(self.id))

        exons = [segments[0]]
        for start, end in segments[1:]:
            if start <= exons[-1][1] + 1:
                exons[-1] = (exons[-1][0], max(end, exons[-1][1]))
            else:
                exons.append((start, end))
        return exons

    def __calculate_utrs(self):

        """Derive the UTR segments as the exonic sequence outside of the CDS."""

        before, after = [], []
        if self.combined_cds:
            cds_start, cds_end = self.combined_cds[0][0], self.combined_cds[-1][1]
            for exon in self.exons:
                if exon[0] < cds_start:
                    before.append((exon[0], min(exon[1], cds_start - 1)))
                if exon[1] > cds_end:
                    after.append((max(exon[0], cds_end + 1), exon[1]))

        if self.strand == "-":
            self.five_utr, self.three_utr = tuple(after), tuple(before)
        else:
            self.five_utr, self.three_utr = tuple(before), tuple(after)
        self.combined_utr = tuple(sorted(before + after))

    @property
    def utrs(self):
        """Sorted UTR segments, each labelled as five_prime_utr or three_prime_utr."""
        return sorted([(start, end, "five_prime_utr") for start, end in self.five_utr] +
                      [(start, end, "three_prime_utr") for start, end in self.three_utr])

    @property
    def is_coding(self):
        return len(self.combined_cds) > 0

    @property
    def exon_num(self):
        return len(self.exons)

    @property
    def cdna_length(self):
        return sum(end - start + 1 for start, end in self.exons)

    @property
    def cds_length(self):
        return sum(end - start + 1 for start, end in self.combined_cds)

    def __len__(self):
        return self.end - self.start + 1

    def __lt__(self, other):
        return (self.chrom, self.start, self.end, self.id) < (other.chrom, other.start, other.end, other.id)

    def __repr__(self):
        return "{0}({1}:{2}-{3}{4})".format(self.__class__.__name__, self.chrom, self.start, self.end,
                                            self.strand or "")

    def exon_overlap(self, other):
        """
        Check whether the exons of two transcripts share at least one base.
        :type other: Transcript
        :rtype: bool
        """

        if self.chrom != other.chrom or overlap((self.start, self.end), (other.start, other.end)) <= 0:
            return False
        return any(overlap(exon, other_exon) > 0 for exon in self.exons for other_exon in other.exons)

    def format(self, prefix=""):
        """
        Return the GFF3 lines of the transcript.
        :param prefix: optional string to be prepended to each line.
        :rtype: str
        """

        lines = []
        source = self.source or "Locompare"
        strand = self.strand or "."
        attributes = "ID={0}".format(self.id)
        if self.parent is not None:
            attributes += ";Parent={0}".format(self.parent)
        lines.append([self.chrom, source, self.feature, self.start, self.end, ".", strand, ".", attributes])
        for feature, segments in (("exon", self.exons), ("CDS", self.combined_cds),
                                  ("five_prime_UTR", self.five_utr), ("three_prime_UTR", self.three_utr)):
            for start, end in segments:
                lines.append([self.chrom, source, feature, start, end, ".", strand, ".",
                              "Parent={0}".format(self.id)])
        return "\n".join(prefix + "\t".join(str(_) for _ in line) for line in lines)
