import pytest

from capacity_coverage.interface import MalformedShapeError
from capacity_coverage.interface import split_shape
from capacity_coverage.interface import UnknownNormalizationFactorError
from capacity_coverage.normalization import normalization_factor
from capacity_coverage.normalization import NORMALIZATION_FACTORS
from capacity_coverage.normalization import normalized_units


def test_normalization_factors():
    sizes = (
        "nano",
        "micro",
        "small",
        "medium",
        "large",
        "xlarge",
        "2xlarge",
        "4xlarge",
        "16xlarge",
        "112xlarge",
    )
    expected = (0.25, 0.5, 1.0, 2.0, 4.0, 8.0, 16.0, 32.0, 128.0, 896.0)
    for i, size in enumerate(sizes):
        assert normalization_factor(size) == expected[i]


def test_factors_that_do_not_double():
    # These follow the vCPU count, not powers of two
    assert normalization_factor("3xlarge") == 24.0
    assert normalization_factor("6xlarge") == 48.0
    assert normalization_factor("9xlarge") == 72.0
    assert normalization_factor("10xlarge") == 80.0
    assert normalization_factor("12xlarge") == 96.0
    assert normalization_factor("18xlarge") == 144.0
    assert normalization_factor("24xlarge") == 192.0
    assert normalization_factor("32xlarge") == 256.0
    assert normalization_factor("56xlarge") == 448.0
    assert len(NORMALIZATION_FACTORS) == 20


def test_unknown_size():
    with pytest.raises(UnknownNormalizationFactorError) as exc_info:
        normalization_factor("99xlarge")
    assert exc_info.value.size == "99xlarge"
    assert "99xlarge" in str(exc_info.value)

    # metal sizes are not normalized
    with pytest.raises(UnknownNormalizationFactorError):
        normalized_units("m5.metal", 1)


def test_split_shape():
    assert split_shape("m5.large") == ("m5", "large")
    assert split_shape("r6id.24xlarge") == ("r6id", "24xlarge")
    # Only the first separator splits
    assert split_shape("db.r5.large") == ("db", "r5.large")


def test_split_shape_without_separator():
    with pytest.raises(MalformedShapeError) as exc_info:
        split_shape("m5large")
    assert exc_info.value.shape == "m5large"

    with pytest.raises(MalformedShapeError):
        split_shape("")


def test_normalized_units():
    assert normalized_units("m5.large", 3) == 12.0
    assert normalized_units("c5.2xlarge", 0) == 0.0
    assert normalized_units("t3.nano", 2) == 0.5
