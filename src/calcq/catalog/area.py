"""Area units. Base unit: square meter."""

from ..units import Category, CategoryId, SubCategory, base_unit, linear_unit


CATEGORY = Category(
    id=CategoryId.AREA.value,
    name="Area",
    icon="square",
    description="Units for measuring two-dimensional space",
    base_unit_id="square_meter",
    popular_units=("square_meter", "square_kilometer", "square_foot", "acre", "hectare"),
    subcategories=(
        SubCategory(
            id="metric",
            name="Metric",
            description="International System of Units (SI)",
            units=(
                base_unit("square_meter", "Square Meter", "m²", plural="square meters",
                          aliases=("square metre", "sq m", "m2"), precision=2),
                linear_unit("square_kilometer", "Square Kilometer", "km²", 1e6, plural="square kilometers",
                            aliases=("square kilometre", "sq km", "km2"), precision=4),
                linear_unit("square_centimeter", "Square Centimeter", "cm²", 1e-4, plural="square centimeters",
                            aliases=("square centimetre", "sq cm", "cm2"), precision=2),
                linear_unit("square_millimeter", "Square Millimeter", "mm²", 1e-6, plural="square millimeters",
                            aliases=("square millimetre", "sq mm", "mm2"), precision=2),
                linear_unit("hectare", "Hectare", "ha", 1e4, plural="hectares", precision=4, related=("acre",)),
                linear_unit("are", "Are", "a", 100.0, plural="ares", precision=2),
            ),
            popular_units=("square_meter", "square_kilometer", "hectare"),
        ),
        SubCategory(
            id="imperial",
            name="Imperial & US",
            description="US and UK measurement systems",
            units=(
                linear_unit("square_inch", "Square Inch", "in²", 0.00064516, plural="square inches",
                            aliases=("sq in",), precision=2),
                linear_unit("square_foot", "Square Foot", "ft²", 0.09290304, plural="square feet",
                            aliases=("sq ft",), precision=2, related=("square_meter", "square_yard")),
                linear_unit("square_yard", "Square Yard", "yd²", 0.83612736, plural="square yards",
                            aliases=("sq yd",), precision=2),
                linear_unit("square_mile", "Square Mile", "mi²", 2589988.110336, plural="square miles",
                            aliases=("sq mi",), precision=4, related=("square_kilometer", "acre")),
                linear_unit("acre", "Acre", "ac", 4046.8564224, plural="acres", precision=4,
                            related=("hectare", "square_foot")),
                linear_unit("rood", "Rood", "ro", 1011.7141056, plural="roods", precision=2),
            ),
            popular_units=("square_foot", "acre", "square_mile"),
        ),
        SubCategory(
            id="survey",
            name="Land Survey",
            description="Units used in property and land surveying",
            units=(
                linear_unit("township", "Township", "twp", 93239571.972, plural="townships", precision=4),
                linear_unit("section", "Section", "sec", 2589998.470319, plural="sections",
                            aliases=("square survey mile",), precision=4),
            ),
        ),
    ),
)
