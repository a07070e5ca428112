# coding:utf-8

"""
Custom exceptions for Locompare.
"""

from marshmallow import ValidationError


class ModificationError(RuntimeError):
    """This exception is raised when something tries to modify a finalized object."""
    pass


class InvalidConfiguration(ValidationError, KeyError):
    """
    Exception to be raised when the JSON/YAML/TOML configuration is invalid.
    """
    pass


class InvalidTranscript(ValueError):
    """
    Exception to be raised when a transcript contains corrupted data
    (e.g. overlapping or missing exons).
    """

    pass


class InvalidCDS(InvalidTranscript):
    """
    Exception to be raised when a transcript contains an invalid CDS
    (e.g. a coding segment falling outside of the exons).
    """

    pass


class IndexQueryError(ValueError):
    """
    Exception to be raised when the feature index cannot answer a query,
    e.g. because the requested range is malformed.
    """

    pass


class SequenceNotFound(IndexQueryError):
    """
    Exception to be raised when a sequence ID is unknown to a feature index.
    """
    pass


class CombinatorialLimitExceeded(RuntimeError):
    """
    Exception used to signal that the number of clique pairs at a locus
    exceeds the configured limit. The locus is reported, but not compared.
    """

    def __init__(self, pair_count, limit):
        self.pair_count = pair_count
        self.limit = limit
        super().__init__(
            "The number of transcript clique pairs ({0}) exceeds the limit of {1}".format(pair_count, limit))


class DegenerateRatio(ArithmeticError):
    """
    Exception to be raised when a ratio with a zero denominator is used as a number.
    """
    pass


class ModelVectorOverflow(OverflowError):
    """
    Exception to be raised when a transcript clique has more structural units
    than a model vector can hold.
    """
    pass


class InvalidParsingFormat(TypeError):
    """
    Exception to be raised when the format specified for the parsing is incorrect
    """
