import copy
from dataclasses import field
from marshmallow import validate
from marshmallow_dataclass import dataclass
from ..utilities.log_utils import LoggingConfiguration


@dataclass
class CompareConfiguration:
    max_transcripts: int = field(default=32, metadata={
        "metadata": {"description": "Maximum number of transcripts allowed on either side of a locus before "
                                    "the enumeration of transcript cliques is skipped. 0 disables the limit."},
        "validate": validate.Range(min=0),
    })
    max_comparisons: int = field(default=512, metadata={
        "metadata": {"description": "Maximum number of transcript clique pairs to compare at a locus. Loci "
                                    "exceeding this limit are reported, but not compared. 0 disables the limit."},
        "validate": validate.Range(min=0),
    })
    tolerance: float = field(default=1e-6, metadata={
        "metadata": {"description": "Tolerance used when deciding whether the nucleotide identity of a "
                                    "comparison is perfect."},
        "validate": validate.Range(min=0, max=1),
    })
    model_vectors: bool = field(default=False, metadata={
        "metadata": {"description": "Print the model vectors of each comparison in the locus report."}
    })
    gff3: bool = field(default=False, metadata={
        "metadata": {"description": "Print the GFF3 of the compared transcripts in the locus report."}
    })


@dataclass
class LabelConfiguration:
    reference: str = field(default="reference", metadata={
        "metadata": {"description": "Label used for the reference annotation in the reports."}
    })
    prediction: str = field(default="prediction", metadata={
        "metadata": {"description": "Label used for the prediction annotation in the reports."}
    })


@dataclass
class LocompareConfiguration:
    """
    Configuration properties for Locompare.
    """

    threads: int = field(default=1, metadata={
        "metadata": {"description": "Number of worker threads. Each thread processes one sequence at a time."},
        "validate": validate.Range(min=1)
    })
    log_settings: LoggingConfiguration = field(default_factory=LoggingConfiguration, metadata={
                "metadata": {"description": "Settings related to the verbosity of logs"}
    })
    compare: CompareConfiguration = field(default_factory=CompareConfiguration, metadata={
                "metadata": {"description": "Settings related to the comparison of the annotations"}
    })
    labels: LabelConfiguration = field(default_factory=LabelConfiguration, metadata={
                "metadata": {"description": "Labels of the two annotations"}
    })

    def copy(self):
        return copy.deepcopy(self)
