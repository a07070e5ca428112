#!/usr/bin/env python3
# coding: utf_8


"""
Module to parse GFF3 files.
"""

from .parser import Parser
from ..exceptions import InvalidParsingFormat
from sys import intern
import re


def _attribute_definition(val):
    try:
        val = float(val)
        if val.is_integer():
            return int(val)
        return val
    except (ValueError, TypeError):
        if val.lower() in ("true", "false"):
            return val.lower() == "true"
        return val


class GffLine:
    """Object which serializes a GFF3 line."""

    # The (?:;|$) means "match, but **do not capture**, either semicolon or end of the line.
    _attribute_pattern = re.compile(r"([^;]*)=([^$=]*)(?:;|$)")

    __transcript_features = {"mrna", "transcript", "ncrna", "rrna", "trna", "lnc_rna", "lncrna",
                             "snrna", "snorna", "mirna", "primary_transcript", "pseudogenic_transcript"}
    __gene_features = {"gene", "pseudogene", "ncrna_gene", "protein_coding_gene"}
    __utr_features = {"five_prime_utr", "three_prime_utr", "utr", "5utr", "3utr"}

    def __init__(self, line, header=False):
        """
        Constructor method.
        :param line: the GFF line to be serialised
        :type line: str

        :param header: boolean flag that indicates whether the instance will be a header or not.
        :type header: bool
        """

        self.attributes = dict()
        self.chrom, self.source, self.feature = None, None, None
        self.start, self.end = None, None
        self.score, self.strand, self.phase = None, None, None
        self.id = None
        self.parent = []
        self._line = line.rstrip("\n")
        self.header = header

        fields = self._line.split("\t")
        if self.header or len(fields) != 9 or self._line.strip() == "" or self._line[0] == "#":
            self.header = True
            return

        self.chrom, self.source, self.feature = [intern(_) for _ in fields[:3]]
        try:
            self.start, self.end = tuple(int(i) for i in fields[3:5])
        except (ValueError, TypeError):
            raise InvalidParsingFormat("Invalid start and end values: {}\nLine: {}".format(
                " ".join(fields[3:5]), self._line))
        if self.start > self.end:
            self.start, self.end = self.end, self.start

        self.score = None if fields[5] in (".", "") else float(fields[5])
        self.strand = fields[6] if fields[6] in ("+", "-") else None
        self.phase = None if fields[7] in (".", "") else int(fields[7])
        self._parse_attributes(fields[8])

    def _parse_attributes(self, attribute_string):

        """
        Private method that parses the last field of the GFF line.
        """

        infolist = self._attribute_pattern.findall(attribute_string.rstrip().rstrip(";"))
        for key, val in infolist:
            key = key.strip()
            if key in ("Parent", "parent"):
                self.parent = val.split(",")
            elif key in ("ID", "id", "Id"):
                self.id = val
            else:
                self.attributes[key] = _attribute_definition(val)

    def __str__(self):
        return self._line

    def __len__(self):
        if self.header is False:
            return self.end - self.start + 1
        return 0

    @property
    def name(self):
        """Name of the feature, defaulting to its ID."""
        return self.attributes.get("Name", self.id)

    @property
    def is_gene(self):
        """True if the feature is a gene."""
        return self.feature is not None and self.feature.lower() in self.__gene_features

    @property
    def is_transcript(self):
        """True if the feature is an RNA or any other transcript."""
        if self.feature is None or self.is_gene:
            return False
        feature = self.feature.lower()
        return feature in self.__transcript_features or feature.endswith("transcript") or "rna" in feature

    @property
    def is_exon(self):
        """True for exons, CDS segments and UTR segments."""
        return self.feature is not None and (self.is_cds or self.is_utr or self.feature.lower() == "exon")

    @property
    def is_cds(self):
        return self.feature is not None and self.feature.upper() == "CDS"

    @property
    def is_utr(self):
        return self.feature is not None and self.feature.lower() in self.__utr_features

    @property
    def gene(self):
        """
        Property. If the feature is a transcript, returns the parent gene; if it is a gene, its ID.
        """

        if self.is_transcript is True and self.parent:
            return self.parent[0]
        elif self.is_gene:
            return self.id
        return None


class GFF3(Parser):
    """
    Class that is used to parse a GFF file.
    """

    __annot_type__ = "gff3"

    def __init__(self, handle):
        """
        Constructor method.
        :param handle: the input file. It can be a file handle or a file name.
        :type handle: io.TextIOWrapper | str
        """
        super().__init__(handle)
        self.header = False

    def __next__(self):

        if self.closed:
            raise StopIteration
        line = next(self._handle)

        if line[0] == "#":
            return GffLine(line, header=True)

        try:
            gff_line = GffLine(line)
        except (InvalidParsingFormat, ValueError) as exc:
            raise InvalidParsingFormat("Invalid line for file {}:\n{}\n{}".format(self.name, line, exc))
        return gff_line

    @property
    def file_format(self):
        return self.__annot_type__
