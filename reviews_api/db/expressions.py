"""
SQL expressions that need a different rendering per backend.

Constants are rendered inline rather than bound so that an expression
used in both the select list and GROUP BY compiles to identical text.
"""

from sqlalchemy import Integer, Numeric, case, cast, extract, func, literal_column
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.expression import FunctionElement

# Epoch milliseconds of 0001-01-01T00:00:00Z and 9999-12-31T23:59:59.999Z
MIN_DATED_MS = -62135596800000
MAX_DATED_MS = 253402300799999


class utc_year(FunctionElement):
    """
    UTC calendar year of an epoch-millisecond column.

    Null for null timestamps and for timestamps outside years 1-9999.
    """

    type = Integer()
    name = "utc_year"
    inherit_cache = True


def _seconds_and_range(element):
    (column,) = element.clauses
    seconds = column / literal_column("1000.0", Numeric)
    in_range = column.between(
        literal_column(str(MIN_DATED_MS), Integer),
        literal_column(str(MAX_DATED_MS), Integer),
    )
    return seconds, in_range


@compiles(utc_year)
def _compile_utc_year(element, compiler, **kw):
    seconds, in_range = _seconds_and_range(element)
    moment = func.timezone(literal_column("'UTC'"), func.to_timestamp(seconds))
    return compiler.process(case((in_range, cast(extract("year", moment), Integer))), **kw)


@compiles(utc_year, "sqlite")
def _compile_utc_year_sqlite(element, compiler, **kw):
    seconds, in_range = _seconds_and_range(element)
    year = func.strftime(literal_column("'%Y'"), seconds, literal_column("'unixepoch'"))
    return compiler.process(case((in_range, cast(year, Integer))), **kw)
