import pytest

from calcq.errors import InvalidArgument
from calcq.formatting import (
    RoundingMode,
    determine_precision,
    format_by_category,
    format_number,
    format_plain,
    format_relationship,
    round_decimal,
)


@pytest.mark.parametrize(
    "mode, positive, negative",
    [
        ("round", "2.5", "-2.5"),
        ("ceil", "2.5", "-2.4"),
        ("floor", "2.4", "-2.5"),
        ("trunc", "2.4", "-2.4"),
    ],
)
def test_rounding_modes(mode, positive, negative):
    assert format_number(2.45, 1, mode) == positive
    assert format_number(-2.45, 1, mode) == negative


def test_round_is_half_away_from_zero():
    assert str(round_decimal(0.5, 0)) == "1"
    assert str(round_decimal(-0.5, 0)) == "-1"
    assert str(round_decimal(2.675, 2)) == "2.68"


def test_unknown_rounding_mode_is_rejected():
    with pytest.raises(InvalidArgument):
        RoundingMode.coerce("bankers")


def test_format_number_trims_and_groups():
    assert format_number(1609.344, 4) == "1,609.344"
    assert format_number(1048576.0, 0) == "1,048,576"
    assert format_number(12.0, 3) == "12"
    assert format_number(1234.5, 2, separators=False) == "1234.5"
    assert format_number(-0.0001, 2) == "-1.000e-04"
    assert format_number(2e16, 4) == "2.0000e+16"


def test_temperature_keeps_one_decimal():
    assert format_by_category(32.0, 2, "temperature") == "32.0"
    assert format_by_category(32.0, 2, "length") == "32"


def test_precision_selection():
    assert determine_precision(5.0, "length", requested=1, unit_precision=4) == 1
    assert determine_precision(5.0, "length", unit_precision=2) == 2
    assert determine_precision(0.005, "length", unit_precision=2) == 6
    assert determine_precision(5.0, "length") == 4
    assert determine_precision(50_000.0, "length") == 1
    assert determine_precision(5_000_000.0, "length") == 0
    assert determine_precision(5.0, "speed") == 4


def test_plain_rendering_has_no_grouping_or_exponent():
    assert format_plain(1609.344) == "1609.344"
    assert format_plain(32.0) == "32"
    text = format_plain(3.0856775814913673e16)
    assert "e" not in text and "," not in text


def test_relationship_text():
    assert format_relationship("ft", "m", 0.3048) == "1 ft = 0.3048 m"
    assert format_relationship("in", "ft", 1 / 12) == "1 in = 1/12 ft"
    assert format_relationship("m", "m", 1.0) == "1 m = 1 m"
    assert format_relationship("mi", "mm", 1609344.0) == "1 mi = 1.6093e+06 mm"
