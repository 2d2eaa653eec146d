"""Speed units. Base unit: meter per second."""

import math

from ..units import Category, CategoryId, SubCategory, Unit, base_unit, linear_unit


def _beaufort_to_mps(force: float) -> float:
    # empirical v = 0.836 * B^(3/2); sign kept so the transform is total
    return math.copysign(0.836 * abs(force) ** 1.5, force)


def _mps_to_beaufort(speed: float) -> float:
    return math.copysign((abs(speed) / 0.836) ** (2.0 / 3.0), speed)


CATEGORY = Category(
    id=CategoryId.SPEED.value,
    name="Speed",
    icon="gauge",
    description="Units for measuring velocity",
    base_unit_id="meter_per_second",
    popular_units=("kilometer_per_hour", "mile_per_hour", "meter_per_second", "knot"),
    subcategories=(
        SubCategory(
            id="metric",
            name="Metric",
            units=(
                base_unit("meter_per_second", "Meter per Second", "m/s", plural="meters per second",
                          aliases=("mps", "metres per second"), precision=2),
                linear_unit("kilometer_per_hour", "Kilometer per Hour", "km/h", 1.0 / 3.6,
                            plural="kilometers per hour", aliases=("kph", "kmh", "km/hr"), precision=2,
                            related=("mile_per_hour",)),
                linear_unit("kilometer_per_second", "Kilometer per Second", "km/s", 1000.0,
                            plural="kilometers per second"),
                linear_unit("centimeter_per_second", "Centimeter per Second", "cm/s", 0.01,
                            plural="centimeters per second"),
                linear_unit("millimeter_per_second", "Millimeter per Second", "mm/s", 0.001,
                            plural="millimeters per second"),
            ),
            popular_units=("kilometer_per_hour", "meter_per_second"),
        ),
        SubCategory(
            id="imperial",
            name="Imperial & US",
            units=(
                linear_unit("mile_per_hour", "Mile per Hour", "mph", 0.44704, plural="miles per hour",
                            aliases=("mi/h",), precision=2, related=("kilometer_per_hour",)),
                linear_unit("foot_per_second", "Foot per Second", "ft/s", 0.3048, plural="feet per second",
                            aliases=("fps",)),
                linear_unit("foot_per_minute", "Foot per Minute", "ft/min", 0.00508, plural="feet per minute",
                            aliases=("fpm",)),
                linear_unit("inch_per_second", "Inch per Second", "in/s", 0.0254, plural="inches per second",
                            aliases=("ips",)),
            ),
            popular_units=("mile_per_hour",),
        ),
        SubCategory(
            id="maritime",
            name="Maritime",
            units=(
                linear_unit("knot", "Knot", "kn", 1852.0 / 3600.0, plural="knots", aliases=("kt", "nautical mph"),
                            precision=2),
                Unit(
                    id="beaufort",
                    name="Beaufort",
                    symbol="Bft",
                    to_base=_beaufort_to_mps,
                    from_base=_mps_to_beaufort,
                    plural_name="beaufort",
                    aliases=("beaufort scale", "beaufort number"),
                    precision=0,
                ),
            ),
            popular_units=("knot",),
        ),
        SubCategory(
            id="physics",
            name="Physics",
            units=(
                linear_unit("speed_of_sound", "Speed of Sound", "Ma", 343.0, plural="mach",
                            aliases=("mach", "sound speed")),
                linear_unit("speed_of_light", "Speed of Light", "c", 299792458.0, plural="speed of light",
                            aliases=("light speed",)),
            ),
        ),
    ),
)
