# coding: utf-8

"""
Pretty basic class that defines a gene with its transcripts.
Minimal checks.
"""

from sys import intern
from .transcript import Transcript
from ..exceptions import InvalidTranscript, ModificationError
from ..parsers.GFF import GffLine
from ..utilities.log_utils import create_null_logger


class Gene:

    """
    :param row: a GFF3 gene line or a transcript used to initialize the container.
    :param gid: Id of the gene.
    :param source: label of the annotation the gene comes from.
    :param logger: an optional Logger from the logging module.
    """

    __name__ = "gene"

    def __init__(self, row=None, gid=None, source=None, logger=None):

        self.transcripts = dict()
        self.logger = logger if logger is not None else create_null_logger()
        self.chrom, self.start, self.end, self.strand = [None] * 4
        self.source = source
        self.id = None
        self.attributes = dict()
        self.feature = "gene"
        self.__finalized = False

        if isinstance(row, GffLine):
            if row.is_gene is False:
                raise InvalidTranscript("{} is not a gene line".format(row))
            self.id = row.id
            self.feature = row.feature
            self.attributes = row.attributes.copy()
            self.chrom, self.start, self.end, self.strand = row.chrom, row.start, row.end, row.strand
        elif isinstance(row, Transcript):
            self.chrom, self.strand = row.chrom, row.strand
            if row.parent is None:
                self.logger.debug("No gene ID found for %s, creating a mock one.", row.id)
                row.parent = "{0}.gene".format(row.id)
            self.id = row.parent
            self.add(row)
        elif row is not None:
            raise TypeError("Invalid gene row: {}".format(type(row)))

        if gid is not None:
            self.id = gid
        if self.id is None:
            raise InvalidTranscript("A gene must have an ID!")
        self.id = intern(str(self.id))

    def add(self, transcript: Transcript):
        """
        Add a transcript to the gene.
        :type transcript: Transcript
        """

        if self.__finalized is True:
            raise ModificationError("You cannot add transcripts to a finalized gene!")
        if self.chrom is None:
            self.chrom = transcript.chrom
        elif transcript.chrom is not None and transcript.chrom != self.chrom:
            raise InvalidTranscript("{0} is on {1}, while its gene {2} is on {3}".format(
                transcript.id, transcript.chrom, self.id, self.chrom))
        self.transcripts[transcript.id] = transcript

    def finalize(self, exclude_invalid=True):
        """
        Finalize all the transcripts of the gene and set its boundaries.
        Invalid transcripts are removed with a warning, unless exclude_invalid is False,
        in which case the exception is raised.
        """

        if self.__finalized is True:
            return

        for tid in list(self.transcripts.keys()):
            try:
                self.transcripts[tid].finalize()
            except InvalidTranscript as exc:
                if exclude_invalid is False:
                    raise
                self.logger.warning("Removing invalid transcript %s from %s: %s", tid, self.id, exc)
                del self.transcripts[tid]

        if self.transcripts:
            self.start = min(_.start for _ in self.transcripts.values())
            self.end = max(_.end for _ in self.transcripts.values())
        self.__finalized = True

    @property
    def finalized(self):
        return self.__finalized

    def __iter__(self):
        return iter(self.transcripts.values())

    def __len__(self):
        return len(self.transcripts)

    def __contains__(self, item):
        if isinstance(item, (str, bytes)):
            return item in self.transcripts
        elif isinstance(item, Transcript):
            return item in self.transcripts.values()
        return False

    def __repr__(self):
        return "Gene({0}, {1}:{2}-{3}, {4} transcripts)".format(self.id, self.chrom, self.start, self.end,
                                                                len(self.transcripts))
