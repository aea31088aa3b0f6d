"""Translate ``ReviewQuery`` descriptors into SQLAlchemy clauses."""

from typing import Iterable, List, Type, Union

from sqlalchemy import and_, func, or_
from sqlalchemy.sql import Select
from sqlalchemy.sql.expression import ColumnElement

from reviews_api.db.base import Base
from reviews_api.services.query_builder import (
    AnyOf,
    Condition,
    FilterOp,
    OrderDirection,
    SortKey,
)


def condition_clause(model: Type[Base], condition: Condition) -> ColumnElement:
    column = getattr(model, condition.field)
    if condition.op is FilterOp.CONTAINS_CI:
        # autoescape keeps %, _ and the escape char literal
        return func.lower(column).contains(condition.value.lower(), autoescape=True)
    if condition.op is FilterOp.GTE:
        return column >= condition.value
    if condition.op is FilterOp.EQ:
        return column == condition.value
    if condition.op is FilterOp.RANGE:
        low, high = condition.value
        return and_(column >= low, column < high)
    raise ValueError(f"Unsupported filter operator: {condition.op}")


def filter_clauses(
    model: Type[Base],
    filters: Iterable[Union[Condition, AnyOf]],
) -> List[ColumnElement]:
    clauses = []
    for item in filters:
        if isinstance(item, AnyOf):
            clauses.append(or_(*(condition_clause(model, c) for c in item.conditions)))
        else:
            clauses.append(condition_clause(model, item))
    return clauses


def order_clauses(model: Type[Base], sort: Iterable[SortKey]) -> List[ColumnElement]:
    # Nulls rank lowest in both directions
    clauses = []
    for key in sort:
        column = getattr(model, key.field)
        if key.direction is OrderDirection.DESC:
            clauses.append(column.desc().nulls_last())
        else:
            clauses.append(column.asc().nulls_first())
    return clauses


def apply_filters(stmt: Select, model: Type[Base], filters) -> Select:
    clauses = filter_clauses(model, filters)
    if clauses:
        stmt = stmt.where(and_(*clauses))
    return stmt
