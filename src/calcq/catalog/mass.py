"""Mass units. Base unit: kilogram."""

from ..units import Category, CategoryId, SubCategory, base_unit, linear_unit


CATEGORY = Category(
    id=CategoryId.MASS.value,
    name="Mass",
    icon="weight",
    description="Units for measuring mass or weight",
    base_unit_id="kilogram",
    popular_units=("kilogram", "gram", "pound", "ounce"),
    subcategories=(
        SubCategory(
            id="metric",
            name="Metric",
            units=(
                base_unit("kilogram", "Kilogram", "kg", plural="kilograms", aliases=("kilo", "kilos", "kilogramme"),
                          precision=4, related=("pound",)),
                linear_unit("gram", "Gram", "g", 0.001, plural="grams", aliases=("gramme",), precision=2,
                            related=("ounce",)),
                linear_unit("milligram", "Milligram", "mg", 1e-6, plural="milligrams", precision=2),
                linear_unit("microgram", "Microgram", "µg", 1e-9, plural="micrograms", aliases=("mcg", "ug")),
                linear_unit("tonne", "Tonne", "t", 1000.0, plural="tonnes", aliases=("metric ton",), precision=4),
            ),
            popular_units=("kilogram", "gram", "milligram"),
        ),
        SubCategory(
            id="imperial",
            name="Imperial & US",
            units=(
                linear_unit("pound", "Pound", "lb", 0.45359237, plural="pounds", aliases=("lbs", "pound-mass"),
                            precision=2, related=("kilogram",)),
                linear_unit("ounce", "Ounce", "oz", 0.028349523125, plural="ounces", precision=2,
                            related=("gram",)),
                linear_unit("stone", "Stone", "st", 6.35029318, plural="stone"),
                linear_unit("short_ton", "Short Ton", "ton", 907.18474, plural="short tons", aliases=("US ton",)),
                linear_unit("long_ton", "Long Ton", "LT", 1016.0469088, plural="long tons",
                            aliases=("imperial ton",)),
                linear_unit("grain", "Grain", "gr", 6.479891e-5, plural="grains"),
            ),
            popular_units=("pound", "ounce", "stone"),
        ),
        SubCategory(
            id="precious",
            name="Troy & Jewellery",
            units=(
                linear_unit("troy_ounce", "Troy Ounce", "oz t", 0.0311034768, plural="troy ounces"),
                linear_unit("carat", "Carat", "ct", 0.0002, plural="carats", aliases=("karat",)),
            ),
        ),
    ),
)
