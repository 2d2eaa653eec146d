"""Length units. Base unit: meter."""

from ..units import Category, CategoryId, SubCategory, base_unit, linear_unit


CATEGORY = Category(
    id=CategoryId.LENGTH.value,
    name="Length",
    icon="ruler",
    description="Units for measuring distance or length",
    base_unit_id="meter",
    popular_units=("meter", "kilometer", "centimeter", "foot", "inch", "mile"),
    subcategories=(
        SubCategory(
            id="metric",
            name="Metric",
            description="International System of Units (SI)",
            units=(
                base_unit("meter", "Meter", "m", plural="meters", aliases=("metre", "metres"), precision=4,
                          related=("foot", "yard")),
                linear_unit("kilometer", "Kilometer", "km", 1000.0, plural="kilometers",
                            aliases=("kilometre", "kilometres", "klick"), precision=4, related=("mile",)),
                linear_unit("decimeter", "Decimeter", "dm", 0.1, plural="decimeters", aliases=("decimetre",)),
                linear_unit("centimeter", "Centimeter", "cm", 0.01, plural="centimeters",
                            aliases=("centimetre", "centimetres"), precision=2, related=("inch",)),
                linear_unit("millimeter", "Millimeter", "mm", 0.001, plural="millimeters",
                            aliases=("millimetre", "millimetres"), precision=2),
                linear_unit("micrometer", "Micrometer", "µm", 1e-6, plural="micrometers",
                            aliases=("micron", "microns", "um", "micrometre")),
                linear_unit("nanometer", "Nanometer", "nm", 1e-9, plural="nanometers", aliases=("nanometre",)),
            ),
            popular_units=("meter", "kilometer", "centimeter", "millimeter"),
        ),
        SubCategory(
            id="imperial",
            name="Imperial & US",
            description="US customary and imperial units",
            units=(
                linear_unit("inch", "Inch", "in", 0.0254, plural="inches", aliases=('"', "″"), precision=2,
                            related=("centimeter", "foot")),
                linear_unit("foot", "Foot", "ft", 0.3048, plural="feet", aliases=("'", "′"), precision=2,
                            related=("meter", "inch")),
                linear_unit("yard", "Yard", "yd", 0.9144, plural="yards", precision=2, related=("meter",)),
                linear_unit("mile", "Mile", "mi", 1609.344, plural="miles", aliases=("statute mile",), precision=4,
                            related=("kilometer",)),
                linear_unit("thou", "Thou", "th", 2.54e-5, plural="thou", aliases=("mil", "milli-inch")),
                linear_unit("chain", "Chain", "ch", 20.1168, plural="chains", aliases=("gunter's chain",)),
                linear_unit("furlong", "Furlong", "fur", 201.168, plural="furlongs"),
            ),
            popular_units=("foot", "inch", "mile", "yard"),
        ),
        SubCategory(
            id="nautical",
            name="Nautical",
            description="Units used at sea",
            units=(
                linear_unit("nautical_mile", "Nautical Mile", "nmi", 1852.0, plural="nautical miles",
                            aliases=("NM", "sea mile")),
                linear_unit("fathom", "Fathom", "ftm", 1.8288, plural="fathoms"),
                linear_unit("cable", "Cable", "cb", 185.2, plural="cables", aliases=("cable length",)),
            ),
            popular_units=("nautical_mile",),
        ),
        SubCategory(
            id="astronomical",
            name="Astronomical",
            description="Distances between celestial objects",
            units=(
                linear_unit("astronomical_unit", "Astronomical Unit", "au", 149597870700.0,
                            plural="astronomical units", aliases=("AU",)),
                linear_unit("light_year", "Light Year", "ly", 9460730472580800.0, plural="light years",
                            aliases=("lightyear", "light-year")),
                linear_unit("parsec", "Parsec", "pc", 3.0856775814913673e16, plural="parsecs"),
            ),
            popular_units=("light_year", "astronomical_unit"),
        ),
    ),
)
