# Reserved Instance normalization factors per instance size.
# A family's reservation applies to any size of that family in proportion
# to these units, e.g. one 2xlarge reservation covers four large instances.
# The table is not a strict doubling (9xlarge is 72, not 128), keep it as
# AWS publishes it.
#
from typing import Dict

from capacity_coverage.interface import split_shape
from capacity_coverage.interface import UnknownNormalizationFactorError

NORMALIZATION_FACTORS: Dict[str, float] = {
    "nano": 0.25,
    "micro": 0.5,
    "small": 1.0,
    "medium": 2.0,
    "large": 4.0,
    "xlarge": 8.0,
    "2xlarge": 16.0,
    "3xlarge": 24.0,
    "4xlarge": 32.0,
    "6xlarge": 48.0,
    "8xlarge": 64.0,
    "9xlarge": 72.0,
    "10xlarge": 80.0,
    "12xlarge": 96.0,
    "16xlarge": 128.0,
    "18xlarge": 144.0,
    "24xlarge": 192.0,
    "32xlarge": 256.0,
    "56xlarge": 448.0,
    "112xlarge": 896.0,
}


def normalization_factor(size: str) -> float:
    try:
        return NORMALIZATION_FACTORS[size]
    except KeyError:
        raise UnknownNormalizationFactorError(size) from None


def normalized_units(instance_type: str, count: int) -> float:
    """Converts a count of instance_type into normalized units"""
    _, size = split_shape(instance_type)
    return count * normalization_factor(size)
