"""Temperature scales. Base unit: degree Celsius.

Every scale except Gas Mark is affine in Celsius. Gas Mark follows UK oven
settings: 25 °F per mark from mark 1 (275 °F) upwards, with the quarter and
half marks below it.
"""

from ..units import Category, CategoryId, Unit, affine_unit, base_unit


def _gas_mark_to_celsius(mark: float) -> float:
    if mark >= 1.0:
        fahrenheit = 250.0 + 25.0 * mark
    elif mark >= 0.5:
        fahrenheit = 225.0 + 50.0 * mark
    else:
        fahrenheit = 200.0 + 100.0 * mark
    return (fahrenheit - 32.0) * 5.0 / 9.0


def _celsius_to_gas_mark(celsius: float) -> float:
    fahrenheit = celsius * 9.0 / 5.0 + 32.0
    if fahrenheit >= 275.0:
        return (fahrenheit - 250.0) / 25.0
    if fahrenheit >= 250.0:
        return (fahrenheit - 225.0) / 50.0
    return (fahrenheit - 200.0) / 100.0


CATEGORY = Category(
    id=CategoryId.TEMPERATURE.value,
    name="Temperature",
    icon="thermometer",
    description="Temperature measurement scales",
    base_unit_id="celsius",
    popular_units=("celsius", "fahrenheit", "kelvin"),
    units=(
        base_unit("celsius", "Celsius", "°C", plural="degrees Celsius",
                  aliases=("centigrade", "C", "deg C"), precision=2, related=("fahrenheit", "kelvin")),
        affine_unit("fahrenheit", "Fahrenheit", "°F", scale=9.0 / 5.0, offset=32.0,
                    plural="degrees Fahrenheit", aliases=("F", "deg F"), precision=2,
                    related=("celsius", "rankine"), formatter=lambda text: f"{text}°F"),
        affine_unit("kelvin", "Kelvin", "K", scale=1.0, offset=273.15, plural="kelvins",
                    aliases=("degrees Kelvin", "deg K"), precision=2, related=("celsius", "rankine")),
        affine_unit("rankine", "Rankine", "°R", scale=9.0 / 5.0, offset=491.67, plural="degrees Rankine",
                    aliases=("R", "deg R"), precision=2, related=("fahrenheit", "kelvin")),
        affine_unit("reaumur", "Réaumur", "°Ré", scale=4.0 / 5.0, offset=0.0, plural="degrees Réaumur",
                    aliases=("Reaumur", "Ré", "Re"), precision=2),
        affine_unit("delisle", "Delisle", "°De", scale=-3.0 / 2.0, offset=150.0, plural="degrees Delisle",
                    aliases=("De",), precision=2),
        affine_unit("newton", "Newton", "°N", scale=33.0 / 100.0, offset=0.0, plural="degrees Newton",
                    precision=2),
        affine_unit("romer", "Rømer", "°Rø", scale=21.0 / 40.0, offset=7.5, plural="degrees Rømer",
                    aliases=("Romer", "Rø", "Ro"), precision=2),
        Unit(
            id="gas_mark",
            name="Gas Mark",
            symbol="GM",
            to_base=_gas_mark_to_celsius,
            from_base=_celsius_to_gas_mark,
            plural_name="gas marks",
            aliases=("gas", "regulo"),
            precision=1,
            formatter=lambda text: f"Gas Mark {text}",
        ),
    ),
)
