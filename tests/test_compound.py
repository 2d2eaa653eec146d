import asyncio

import pytest

from calcq.compound import (
    CompoundEngine,
    CompoundFormatType,
    CompoundGrammar,
    ParseRule,
    SlotKind,
    measurement_key,
    parse_number,
    redistribute,
)
from calcq.conversion import ConversionOptions, UnitConverter
from calcq.errors import InvalidArgument, UnitNotFound
from calcq.loader import CategoryLoader
from calcq.units import linear_unit

HEIGHT = CompoundFormatType.HEIGHT
COOKING = CompoundFormatType.COOKING
DISTANCE = CompoundFormatType.DISTANCE


def _engine():
    return CompoundEngine(UnitConverter(CategoryLoader()))


def _run(coro):
    return asyncio.run(coro)


@pytest.mark.parametrize("text", ["5'10\"", "5ft 10in", "5' 10", " 5 feet 10 inches ", "5′10″"])
def test_height_spellings(text):
    measurement = _run(_engine().parse_compound_input(text, HEIGHT))

    assert measurement.unit_ids == ("foot", "inch")
    assert measurement.values == (5.0, 10.0)
    assert measurement.category_id == "length"
    assert measurement.components[0].unit.symbol == "ft"


def test_feet_only_reads_missing_inches_as_zero():
    measurement = _run(_engine().parse_compound_input("6'", HEIGHT))
    assert measurement.values == (6.0, 0.0)


@pytest.mark.parametrize(
    "text", ["garbage", "", "   ", "5'x", "five feet", "1 parsec", "Height: 5'10\"", "5'10\" tall"]
)
def test_unrecognised_height_is_none(text):
    assert _run(_engine().parse_compound_input(text, HEIGHT)) is None


def test_parse_failures_are_not_logged(caplog):
    _run(_engine().parse_compound_input("garbage", HEIGHT))
    assert not [record for record in caplog.records if record.levelname in ("WARNING", "ERROR")]


def test_single_value_fallback():
    engine = _engine()

    metric = _run(engine.parse_compound_input("178 cm", HEIGHT))
    custom = _run(engine.parse_compound_input("3 Parsecs", CompoundFormatType.CUSTOM))
    negative = _run(engine.parse_compound_input("-2 yd", DISTANCE))

    assert (metric.unit_ids, metric.values) == (("centimeter",), (178.0,))
    assert (custom.unit_ids, custom.values) == (("parsec",), (3.0,))
    assert negative.values == (-2.0,)


def test_cooking_and_distance_grammars():
    engine = _engine()

    mixed = _run(engine.parse_compound_input("2 1/2 cups", COOKING))
    pair = _run(engine.parse_compound_input("1 cup 2 tbsp", COOKING))
    spoons = _run(engine.parse_compound_input("1/2 tsp", COOKING))
    miles = _run(engine.parse_compound_input("2 mi 300 yd", DISTANCE))
    km = _run(engine.parse_compound_input("2 km 350 m", DISTANCE))

    assert (mixed.unit_ids, mixed.values) == (("cup",), (2.5,))
    assert (pair.unit_ids, pair.values) == (("cup", "tablespoon"), (1.0, 2.0))
    assert (spoons.unit_ids, spoons.values) == (("teaspoon",), (0.5,))
    assert (miles.unit_ids, miles.values) == (("mile", "yard"), (2.0, 300.0))
    assert (km.unit_ids, km.values) == (("kilometer", "meter"), (2.0, 350.0))


def test_grammar_first_numeric_rule_wins():
    grammar = CompoundGrammar(
        [
            ParseRule(r"(\d+/\d+) widgets", kinds=(SlotKind.MIXED_FRACTION,)),
            ParseRule(r"(\d+)/(\d+) widgets", unit_ids=("a", "b")),
        ],
        default_unit_ids=("widget",),
    )

    match = grammar.match("3/4 widgets")
    assert match.unit_ids == ("widget",)
    assert match.values == (0.75,)

    fallback = grammar.match("3/0 widgets")
    assert fallback.unit_ids == ("a", "b")
    assert fallback.values == (3.0, 0.0)

    assert grammar.match("widgets") is None


def test_parse_number_kinds():
    assert parse_number("2 1/2", SlotKind.MIXED_FRACTION) == 2.5
    assert parse_number("1/0", SlotKind.MIXED_FRACTION) is None
    assert parse_number("1/2") is None
    assert parse_number(".5") == 0.5


def test_height_converts_to_metric_with_carry():
    engine = _engine()

    async def scenario():
        measurement = await engine.parse_compound_input("5'10\"", HEIGHT)
        return measurement, await engine.convert_compound(measurement, ["meter", "centimeter"])

    measurement, result = _run(scenario())

    assert result.original is measurement
    assert result.converted.unit_ids == ("meter", "centimeter")
    assert result.converted.values == (1.0, pytest.approx(77.8))
    recombined = result.converted.values[0] + result.converted.values[1] / 100
    original = 5 * 0.3048 + 10 * 0.0254
    assert recombined == pytest.approx(original, abs=1e-6)
    assert result.single_unit_equivalent.to_unit.id == "meter"
    assert result.single_unit_equivalent.value == pytest.approx(1.778)


def _convert_values(values, unit_ids, targets, precision=None, mode="round"):
    engine = _engine()

    async def scenario():
        measurement = await engine.create_compound_measurement(values, unit_ids, "length")
        options = ConversionOptions(precision=precision, rounding_mode=mode)
        return await engine.convert_compound(measurement, targets, options)

    return _run(scenario()).converted


def test_carry_from_smaller_unit():
    converted = _convert_values([0, 13], ["foot", "inch"], ["foot", "inch"])
    assert converted.values == (1.0, pytest.approx(1.0))


def test_targets_are_sorted_largest_first():
    converted = _convert_values([0, 13], ["foot", "inch"], ["inch", "foot"])
    assert converted.unit_ids == ("foot", "inch")


def test_quotient_close_to_integer_snaps_up():
    converted = _convert_values([72], ["inch"], ["foot", "inch"])
    assert converted.values == (6.0, 0.0)


def test_rounded_remainder_carries_into_previous_unit():
    converted = _convert_values([71.999], ["inch"], ["foot", "inch"])
    assert converted.values == (6.0, 0.0)

    kept = _convert_values([71.999], ["inch"], ["foot", "inch"], precision=3)
    assert kept.values == (5.0, pytest.approx(11.999))


def test_carry_uses_requested_rounding_mode():
    floored = _convert_values([71.999], ["inch"], ["foot", "inch"], mode="floor")
    assert floored.values == (5.0, pytest.approx(11.99))

    raised = _convert_values([5, 10.001], ["foot", "inch"], ["foot", "inch"], mode="ceil")
    assert raised.values == (5.0, pytest.approx(10.01))


def test_negative_total_signs_first_component():
    converted = _convert_values([-5, -10], ["foot", "inch"], ["foot", "inch"])
    assert converted.values == (-5.0, pytest.approx(10.0))

    small = _convert_values([-6], ["inch"], ["foot", "inch"])
    assert small.values == (0.0, pytest.approx(-6.0))


def test_zero_total_yields_zero_components():
    converted = _convert_values([0, 0], ["foot", "inch"], ["yard", "foot", "inch"])
    assert converted.values == (0.0, 0.0, 0.0)


def test_single_target_skips_carry():
    converted = _convert_values([5, 10], ["foot", "inch"], ["inch"])
    assert converted.values == (pytest.approx(70.0),)


def test_redistribute_cascades_through_three_units():
    yard = linear_unit("yard", "Yard", "yd", 0.9144)
    foot = linear_unit("foot", "Foot", "ft", 0.3048)
    inch = linear_unit("inch", "Inch", "in", 0.0254)

    parts = redistribute(35.9999 * 0.0254, [yard, foot, inch], precision=2)
    assert parts == [1.0, 0.0, 0.0]


def test_create_validates_arguments():
    engine = _engine()

    with pytest.raises(InvalidArgument):
        _run(engine.create_compound_measurement([1, 2], ["foot"], "length"))
    with pytest.raises(UnitNotFound):
        _run(engine.create_compound_measurement([1], ["cubit"], "length"))
    with pytest.raises(InvalidArgument):
        _run(engine.create_compound_measurement([1], ["parsec"], "length", HEIGHT))
    with pytest.raises(InvalidArgument):
        _run(engine.create_compound_measurement([float("nan")], ["foot"], "length"))


def test_convert_rejects_bad_targets():
    engine = _engine()

    async def scenario(targets):
        measurement = await engine.create_compound_measurement([1], ["foot"], "length")
        return await engine.convert_compound(measurement, targets)

    with pytest.raises(InvalidArgument):
        _run(scenario([]))
    with pytest.raises(UnitNotFound):
        _run(scenario(["cubit"]))


def test_display_formats_follow_format_type():
    engine = _engine()

    async def scenario():
        height = await engine.create_compound_measurement([5, 10], ["foot", "inch"], "length", HEIGHT)
        metric = await engine.create_compound_measurement([1, 78], ["meter", "centimeter"], "length", HEIGHT)
        cooking = await engine.create_compound_measurement([1, 2], ["cup", "tablespoon"], "volume", COOKING)
        distance = await engine.create_compound_measurement([2, 300], ["mile", "yard"], "length", DISTANCE)
        return height, metric, cooking, distance

    height, metric, cooking, distance = _run(scenario())

    assert engine.format_compound_measurement(height) == "5' 10\""
    assert engine.format_compound_measurement(metric) == "1 m 78 cm"
    assert engine.format_compound_measurement(cooking) == "1 cup + 2 tbsp"
    assert engine.format_compound_measurement(distance) == "2 mi 300 yd"
    assert engine.format_compound_measurement(height, CompoundFormatType.CUSTOM) == "5 ft 10 in"


def test_cooking_conversion_to_milliliters():
    engine = _engine()

    async def scenario():
        measurement = await engine.parse_compound_input("1 cup 2 tbsp", COOKING)
        return await engine.convert_compound(measurement, ["milliliter"])

    result = _run(scenario())
    assert result.converted.values == (pytest.approx(266.16),)


def test_defaults_and_target_validation():
    engine = _engine()

    async def scenario():
        return (
            await engine.default_measurement(HEIGHT),
            await engine.ensure_valid_target_units(HEIGHT, ["parsec", "meter", "meter"]),
            await engine.ensure_valid_target_units(HEIGHT, ["parsec"]),
            await engine.ensure_valid_target_units(HEIGHT, ["millimeter"]),
            await engine.ensure_valid_target_units(COOKING, ["quart", "pint", "gallon", "deciliter"]),
            await engine.ensure_valid_target_units(DISTANCE, ["inch", "centimeter"]),
            await engine.default_measurement(COOKING),
            await engine.default_measurement(DISTANCE),
        )

    default, filtered, fallback, millimeters, cooking, distance, cooking_default, distance_default = _run(scenario())

    assert default.values == (0.0, 0.0)
    assert default.unit_ids == ("foot", "inch")
    assert filtered == ("meter",)
    assert fallback == ("meter", "centimeter")
    assert millimeters == ("millimeter",)
    assert cooking == ("quart", "pint", "gallon", "deciliter")
    assert distance == ("inch", "centimeter")
    assert cooking_default.unit_ids == ("cup", "tablespoon", "teaspoon")
    assert distance_default.unit_ids == ("mile", "yard", "foot")


def test_larger_cooking_and_distance_units_are_accepted():
    engine = _engine()

    async def scenario():
        pint = await engine.create_compound_measurement([1], ["pint"], "volume", COOKING)
        converted = await engine.convert_compound(pint, ["cup"])
        triple = await engine.parse_compound_input("1 cup + 2 tbsp + 1 tsp", COOKING)
        route = await engine.parse_compound_input("1 mi 200 yd 2 ft", DISTANCE)
        return converted, triple, route

    converted, triple, route = _run(scenario())

    assert converted.converted.values == (pytest.approx(2.0),)
    assert (triple.unit_ids, triple.values) == (("cup", "tablespoon", "teaspoon"), (1.0, 2.0, 1.0))
    assert engine.format_compound_measurement(triple) == "1 cup + 2 tbsp + 1 tsp"
    assert (route.unit_ids, route.values) == (("mile", "yard", "foot"), (1.0, 200.0, 2.0))


def test_measurement_key_compares_by_value():
    engine = _engine()

    async def scenario():
        parsed = await engine.parse_compound_input("5'10\"", HEIGHT)
        built = await engine.create_compound_measurement([5, 10], ["foot", "inch"], "length", HEIGHT)
        other = await engine.create_compound_measurement([5, 11], ["foot", "inch"], "length", HEIGHT)
        return parsed, built, other

    parsed, built, other = _run(scenario())

    assert parsed is not built
    assert measurement_key(parsed) == measurement_key(built)
    assert measurement_key(parsed) != measurement_key(other)
    assert measurement_key(None) is None
