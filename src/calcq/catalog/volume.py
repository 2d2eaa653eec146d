"""Volume units. Base unit: liter. Cooking units are US customary."""

from ..units import Category, CategoryId, SubCategory, base_unit, linear_unit


CATEGORY = Category(
    id=CategoryId.VOLUME.value,
    name="Volume",
    icon="beaker",
    description="Units for measuring three-dimensional space",
    base_unit_id="liter",
    popular_units=("liter", "milliliter", "gallon", "cup", "cubic_meter"),
    subcategories=(
        SubCategory(
            id="metric",
            name="Metric",
            units=(
                base_unit("liter", "Liter", "L", plural="liters", aliases=("litre", "litres", "l"), precision=3,
                          related=("gallon",)),
                linear_unit("milliliter", "Milliliter", "mL", 0.001, plural="milliliters",
                            aliases=("millilitre", "ml"), precision=1, related=("cup", "teaspoon")),
                linear_unit("centiliter", "Centiliter", "cL", 0.01, plural="centiliters", aliases=("centilitre", "cl")),
                linear_unit("deciliter", "Deciliter", "dL", 0.1, plural="deciliters", aliases=("decilitre", "dl")),
                linear_unit("cubic_meter", "Cubic Meter", "m³", 1000.0, plural="cubic meters",
                            aliases=("cubic metre", "m3"), precision=4),
                linear_unit("cubic_centimeter", "Cubic Centimeter", "cm³", 0.001, plural="cubic centimeters",
                            aliases=("cc", "cm3")),
            ),
            popular_units=("liter", "milliliter", "cubic_meter"),
        ),
        SubCategory(
            id="us_customary",
            name="US Customary",
            units=(
                linear_unit("gallon", "Gallon (US)", "gal", 3.785411784, plural="gallons",
                            aliases=("gallon_us", "us gallon"), precision=3, related=("liter",)),
                linear_unit("quart", "Quart (US)", "qt", 0.946352946, plural="quarts", aliases=("quart_us",)),
                linear_unit("pint", "Pint (US)", "pt", 0.473176473, plural="pints", aliases=("pint_us",)),
                linear_unit("cup", "Cup (US)", "cup", 0.2365882365, plural="cups", aliases=("cup_us", "c"),
                            precision=2, related=("milliliter", "tablespoon")),
                linear_unit("fluid_ounce", "Fluid Ounce (US)", "fl oz", 0.0295735295625, plural="fluid ounces",
                            aliases=("fluid_ounce_us", "floz", "oz")),
                linear_unit("tablespoon", "Tablespoon", "tbsp", 0.01478676478125, plural="tablespoons",
                            aliases=("tablespoon_us", "tbs", "tbl"), precision=2, related=("teaspoon",)),
                linear_unit("teaspoon", "Teaspoon", "tsp", 0.00492892159375, plural="teaspoons",
                            aliases=("teaspoon_us",), precision=2),
            ),
            popular_units=("gallon", "cup", "tablespoon", "teaspoon"),
        ),
        SubCategory(
            id="imperial",
            name="Imperial",
            units=(
                linear_unit("gallon_imperial", "Gallon (Imperial)", "gal (imp)", 4.54609, plural="imperial gallons",
                            aliases=("uk gallon",)),
                linear_unit("pint_imperial", "Pint (Imperial)", "pt (imp)", 0.56826125, plural="imperial pints",
                            aliases=("uk pint",)),
                linear_unit("fluid_ounce_imperial", "Fluid Ounce (Imperial)", "fl oz (imp)", 0.0284130625,
                            plural="imperial fluid ounces"),
                linear_unit("cubic_inch", "Cubic Inch", "in³", 0.016387064, plural="cubic inches", aliases=("in3",)),
                linear_unit("cubic_foot", "Cubic Foot", "ft³", 28.316846592, plural="cubic feet", aliases=("ft3",)),
            ),
        ),
    ),
)
