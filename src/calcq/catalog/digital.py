"""Digital storage units. Base unit: byte."""

from ..units import Category, CategoryId, SubCategory, base_unit, linear_unit


CATEGORY = Category(
    id=CategoryId.DIGITAL.value,
    name="Digital",
    icon="database",
    description="Units for measuring digital information",
    base_unit_id="byte",
    popular_units=("byte", "kilobyte", "megabyte", "gigabyte", "terabyte"),
    subcategories=(
        SubCategory(
            id="binary",
            name="Binary (IEC)",
            description="Powers of 1024",
            units=(
                linear_unit("bit", "Bit", "bit", 0.125, plural="bits", aliases=("b",), precision=0),
                base_unit("byte", "Byte", "B", plural="bytes", aliases=("octet",), precision=0),
                linear_unit("kibibyte", "Kibibyte", "KiB", 1024.0, plural="kibibytes", precision=2),
                linear_unit("mebibyte", "Mebibyte", "MiB", 1024.0 ** 2, plural="mebibytes", precision=2),
                linear_unit("gibibyte", "Gibibyte", "GiB", 1024.0 ** 3, plural="gibibytes", precision=2),
                linear_unit("tebibyte", "Tebibyte", "TiB", 1024.0 ** 4, plural="tebibytes", precision=2),
                linear_unit("pebibyte", "Pebibyte", "PiB", 1024.0 ** 5, plural="pebibytes", precision=2),
            ),
            popular_units=("byte", "kibibyte", "mebibyte", "gibibyte"),
        ),
        SubCategory(
            id="decimal",
            name="Decimal (SI)",
            description="Powers of 1000",
            units=(
                linear_unit("kilobyte", "Kilobyte", "KB", 1e3, plural="kilobytes", aliases=("kB",), precision=2),
                linear_unit("megabyte", "Megabyte", "MB", 1e6, plural="megabytes", precision=2),
                linear_unit("gigabyte", "Gigabyte", "GB", 1e9, plural="gigabytes", aliases=("gig",), precision=2),
                linear_unit("terabyte", "Terabyte", "TB", 1e12, plural="terabytes", precision=2),
                linear_unit("petabyte", "Petabyte", "PB", 1e15, plural="petabytes", precision=2),
            ),
            popular_units=("kilobyte", "megabyte", "gigabyte", "terabyte"),
        ),
        SubCategory(
            id="bits",
            name="Bits",
            units=(
                linear_unit("kilobit", "Kilobit", "kbit", 125.0, plural="kilobits", aliases=("Kb",)),
                linear_unit("megabit", "Megabit", "Mbit", 125000.0, plural="megabits", aliases=("Mb",)),
                linear_unit("gigabit", "Gigabit", "Gbit", 1.25e8, plural="gigabits", aliases=("Gb",)),
                linear_unit("kibibit", "Kibibit", "Kibit", 128.0, plural="kibibits"),
                linear_unit("mebibit", "Mebibit", "Mibit", 131072.0, plural="mebibits"),
            ),
        ),
        SubCategory(
            id="computing",
            name="Computing",
            units=(
                linear_unit("nibble", "Nibble", "nibble", 0.5, plural="nibbles"),
                linear_unit("word", "Word", "word", 4.0, plural="words", aliases=("32-bit word",)),
            ),
        ),
    ),
)
