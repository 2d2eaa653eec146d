import asyncio
import math

import pytest

from calcq.conversion import ConversionOptions, UnitConverter
from calcq.errors import CategoryNotFound, ConversionFailed, InvalidArgument, UnitNotFound
from calcq.formatting import RoundingMode
from calcq.loader import CategoryLoader


def _convert(*args, **kwargs):
    converter = UnitConverter(CategoryLoader())
    return asyncio.run(converter.convert(*args, **kwargs))


def test_known_values():
    assert _convert(0, "temperature", "celsius", "fahrenheit").value == 32
    assert _convert(100, "temperature", "celsius", "fahrenheit").value == pytest.approx(212)
    assert _convert(1, "length", "mile", "meter").value == pytest.approx(1609.344)
    assert _convert(1024, "digital", "kibibyte", "byte").value == 1048576


def test_pivot_round_trip_across_categories():
    converter = UnitConverter(CategoryLoader())
    cases = [
        (12.7, "length", "furlong", "nautical_mile"),
        (-40, "temperature", "fahrenheit", "rankine"),
        (6.5, "temperature", "gas_mark", "kelvin"),
        (7, "speed", "beaufort", "mile_per_hour"),
        (3.5, "volume", "cup", "gallon_imperial"),
        (2, "area", "acre", "hectare"),
        (90, "time", "minute", "fortnight"),
    ]

    async def scenario():
        for value, category, source, target in cases:
            there = await converter.convert(value, category, source, target)
            back = await converter.convert(there.value, category, target, source)
            assert back.value == pytest.approx(value), (category, source, target)

    asyncio.run(scenario())


def test_result_carries_units_and_formatting():
    result = _convert(1, "length", "mile", "meter")

    assert result.from_unit.id == "mile"
    assert result.to_unit.id == "meter"
    assert result.category_id == "length"
    assert result.formatted_value == "1,609.344"
    assert result.display == "1,609.344 m"
    assert result.rounding_mode is RoundingMode.ROUND


def test_temperature_display_uses_unit_formatter():
    result = _convert(0, "temperature", "celsius", "fahrenheit")

    assert result.formatted_value == "32.0"
    assert result.display == "32.0°F"


def test_unit_formatter_respects_requested_precision():
    whole = _convert(1, "temperature", "celsius", "fahrenheit", ConversionOptions(precision=0))
    floored = _convert(1, "temperature", "celsius", "fahrenheit",
                       ConversionOptions(precision=1, rounding_mode="floor"))

    assert whole.formatted_value == "34"
    assert whole.display == "34°F"
    assert floored.display == "33.8°F"
    assert whole.value == pytest.approx(33.8)


@pytest.mark.parametrize(
    "mode, expected",
    [("round", "0.042"), ("ceil", "0.042"), ("floor", "0.041"), ("trunc", "0.041")],
)
def test_rounding_only_affects_formatted_value(mode, expected):
    result = _convert(1, "time", "hour", "day", ConversionOptions(precision=3, rounding_mode=mode))

    assert result.formatted_value == expected
    assert result.value == pytest.approx(1 / 24)
    assert result.precision == 3


def test_unformatted_result_is_plain_decimal():
    result = _convert(1, "length", "mile", "meter", ConversionOptions(format=False))
    assert result.formatted_value == "1609.344"

    huge = _convert(1, "length", "parsec", "meter", ConversionOptions(format=False))
    assert "," not in huge.formatted_value
    assert "e" not in huge.formatted_value.lower()
    assert float(huge.formatted_value) == pytest.approx(huge.value)


def test_precision_grows_for_small_results():
    result = _convert(1, "length", "millimeter", "meter")

    assert result.precision == 6
    assert result.formatted_value == "0.001"


def test_fixed_timestamp_is_kept():
    result = _convert(3, "mass", "pound", "kilogram", ConversionOptions(timestamp=1700000000.0))
    assert result.timestamp == 1700000000.0


def test_numeric_strings_are_accepted():
    assert _convert(" 2.5 ", "time", "hour", "minute").value == pytest.approx(150.0)


@pytest.mark.parametrize("value", [math.nan, math.inf, "abc", None, True])
def test_invalid_values_fail(value):
    with pytest.raises(ConversionFailed) as excinfo:
        _convert(value, "length", "meter", "foot")
    assert excinfo.value.category_id == "length"
    assert excinfo.value.unit_ids == ("meter", "foot")


def test_unknown_ids_fail_with_cause():
    with pytest.raises(ConversionFailed) as excinfo:
        _convert(1, "flux", "meter", "foot")
    assert isinstance(excinfo.value.__cause__, CategoryNotFound)

    with pytest.raises(ConversionFailed) as excinfo:
        _convert(1, "length", "meter", "cubit")
    assert excinfo.value.unit_ids == ("cubit",)
    assert isinstance(excinfo.value.__cause__, UnitNotFound)


def test_overflowing_transform_is_not_success():
    with pytest.raises(ConversionFailed):
        _convert(1e300, "length", "parsec", "nanometer")


def test_options_are_validated():
    with pytest.raises(InvalidArgument):
        ConversionOptions(precision=-1)
    with pytest.raises(InvalidArgument):
        ConversionOptions(rounding_mode="sideways")


def test_compatible_and_popular_units():
    converter = UnitConverter(CategoryLoader())

    async def scenario():
        compatible = await converter.get_compatible_units("length", "meter")
        popular = await converter.get_popular_units("length")
        imperial = await converter.get_popular_units("length", "imperial", limit=2)
        flat = await converter.get_popular_units("time", limit=10)
        with pytest.raises(UnitNotFound):
            await converter.get_compatible_units("length", "cubit")
        return compatible, popular, imperial, flat

    compatible, popular, imperial, flat = asyncio.run(scenario())

    ids = [unit.id for unit in compatible]
    assert "meter" not in ids
    assert {"foot", "nautical_mile", "parsec"} <= set(ids)
    assert [unit.id for unit in popular] == ["meter", "kilometer", "centimeter", "foot", "inch"]
    assert [unit.id for unit in imperial] == ["foot", "inch"]
    assert [unit.id for unit in flat] == ["second", "minute", "hour", "day"]


def test_related_units_come_from_catalog():
    converter = UnitConverter(CategoryLoader())

    async def scenario():
        fahrenheit = await converter.get_related_units("temperature", "fahrenheit")
        inch = await converter.get_related_units("length", "inch")
        unrelated = await converter.get_related_units("length", "furlong")
        with pytest.raises(UnitNotFound):
            await converter.get_related_units("length", "cubit")
        return fahrenheit, inch, unrelated

    fahrenheit, inch, unrelated = asyncio.run(scenario())

    assert [unit.id for unit in fahrenheit] == ["celsius", "rankine"]
    assert [unit.id for unit in inch] == ["centimeter", "foot"]
    assert unrelated == []


def test_lookup_helpers_and_relationship():
    converter = UnitConverter(CategoryLoader())

    async def scenario():
        assert (await converter.get_unit("length", "foot")).symbol == "ft"
        assert await converter.find_unit("length", "cubit") is None
        assert await converter.find_unit("flux", "meter") is None
        with pytest.raises(UnitNotFound):
            await converter.get_unit("length", "cubit")
        return (
            await converter.describe_relationship("length", "foot", "meter"),
            await converter.describe_relationship("temperature", "celsius", "fahrenheit"),
        )

    linear, affine = asyncio.run(scenario())

    assert linear == "1 ft = 0.3048 m"
    assert affine == ""
