"""Time units. Base unit: second. Months and years use Gregorian averages."""

from ..units import Category, CategoryId, base_unit, linear_unit


CATEGORY = Category(
    id=CategoryId.TIME.value,
    name="Time",
    icon="clock",
    description="Units for measuring time intervals",
    base_unit_id="second",
    popular_units=("second", "minute", "hour", "day"),
    units=(
        base_unit("second", "Second", "s", plural="seconds", aliases=("sec", "secs"), precision=3),
        linear_unit("nanosecond", "Nanosecond", "ns", 1e-9, plural="nanoseconds"),
        linear_unit("microsecond", "Microsecond", "µs", 1e-6, plural="microseconds", aliases=("us",)),
        linear_unit("millisecond", "Millisecond", "ms", 1e-3, plural="milliseconds", aliases=("msec",)),
        linear_unit("minute", "Minute", "min", 60.0, plural="minutes", aliases=("mins",), precision=3),
        linear_unit("hour", "Hour", "h", 3600.0, plural="hours", aliases=("hr", "hrs"), precision=3),
        linear_unit("day", "Day", "d", 86400.0, plural="days", precision=3),
        linear_unit("week", "Week", "wk", 604800.0, plural="weeks"),
        linear_unit("fortnight", "Fortnight", "fn", 1209600.0, plural="fortnights"),
        linear_unit("month", "Month", "mo", 2629746.0, plural="months", aliases=("average month",)),
        linear_unit("year", "Year", "yr", 31556952.0, plural="years", aliases=("gregorian year",)),
        linear_unit("decade", "Decade", "dec", 315569520.0, plural="decades"),
        linear_unit("century", "Century", "c.", 3155695200.0, plural="centuries"),
    ),
)
