#!/usr/bin/env python3
# coding: utf_8

"""
Locompare is a Python suite to cluster gene annotations into loci and to compare
the gene models of a prediction against those of a reference annotation.
This is the library it relies onto.
"""

from Locompare.version import __version__

__title__ = "Locompare"
__license__ = 'LGPL3'

__all__ = ["configuration",
           "exceptions",
           "loading",
           "loci",
           "parsers",
           "scales",
           "subprograms",
           "transcripts",
           "utilities",
           "__version__"]


from .utilities.log_utils import create_default_logger
from numpy._pytesttester import PytestTester
test = PytestTester(__name__)
