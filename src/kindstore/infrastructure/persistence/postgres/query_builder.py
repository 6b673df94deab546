"""SQL building for the PostgreSQL entity store."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from kindstore.application.query.compiled import NE, STORE_OPERATORS, CompiledQuery, FilterClause
from kindstore.domain.value_objects import LargeText

LARGE_TEXT = "text"

_NUMBER = "COALESCE({a}.int_value::numeric, {a}.float_value::numeric)"

# Python type -> (property types of the same family, compared column, param placeholder)
_FAMILIES: list[tuple[type, tuple[str, ...], str, str]] = [
    (bool, ("bool",), "{a}.bool_value", "%s"),
    (int, ("int", "float"), _NUMBER, "%s::numeric"),
    (float, ("int", "float"), _NUMBER, "%s::numeric"),
    (datetime, ("datetime", "naive_datetime"), "{a}.time_value", "%s"),
    (str, ("str",), '{a}.str_value COLLATE "C"', "%s"),
    (bytes, ("bytes",), "{a}.bytes_value", "%s"),
]

_FAMILY_RANK = (
    "CASE {a}.property_type WHEN 'bool' THEN 0 WHEN 'int' THEN 1 WHEN 'float' THEN 1 "
    "WHEN 'datetime' THEN 2 WHEN 'naive_datetime' THEN 2 WHEN 'str' THEN 3 "
    "WHEN 'bytes' THEN 4 END"
)

_ORDER_COLUMNS = (
    _FAMILY_RANK,
    "{a}.bool_value",
    _NUMBER,
    "{a}.time_value",
    '{a}.str_value COLLATE "C"',
    "{a}.bytes_value",
)

PROPERTY_COLUMNS = (
    "property_type",
    "str_value",
    "int_value",
    "float_value",
    "bool_value",
    "time_value",
    "bytes_value",
)


@dataclass
class PostgresQuery:
    """Prepared SQL fragments for one compiled query."""

    kind: str
    parent: str
    joins: list[str] = field(default_factory=list)
    join_params: list[object] = field(default_factory=list)
    conditions: list[str] = field(default_factory=list)
    condition_params: list[object] = field(default_factory=list)
    order_by: list[str] = field(default_factory=list)

    def from_where(self) -> tuple[str, list[object]]:
        """FROM ... WHERE ... clause and its params, in placeholder order."""
        where = ["e.kind = %s", "e.parent = %s", *self.conditions]
        sql = "FROM entity e" + "".join(f" {j}" for j in self.joins)
        sql += " WHERE " + " AND ".join(where)
        return sql, [*self.join_params, self.kind, self.parent, *self.condition_params]

    def count_sql(self) -> tuple[str, list[object]]:
        from_where, params = self.from_where()
        return f"SELECT count(*) {from_where}", params

    def page_sql(self, offset: int, limit: int) -> tuple[str, list[object]]:
        from_where, params = self.from_where()
        order = ", ".join([*self.order_by, 'e.name COLLATE "C"'])
        return (
            f"SELECT e.name {from_where} ORDER BY {order} LIMIT %s OFFSET %s",
            [*params, limit, offset],
        )


def _family(value: object) -> tuple[tuple[str, ...], str, str]:
    for py_type, property_types, column, placeholder in _FAMILIES:
        if isinstance(value, py_type):
            return property_types, column, placeholder
    raise TypeError(f"Unsupported filter value type [{type(value).__name__}]")


def _param(value: object) -> object:
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def build_filter_condition(clause: FilterClause, alias: str) -> tuple[str, list[object]]:
    """EXISTS condition matching one filter clause against property rows."""
    if clause.op not in STORE_OPERATORS:
        raise ValueError(f"Unknown store operator [{clause.op}]")
    property_types, column, placeholder = _family(clause.value)
    column = column.format(a=alias)
    head = (
        f"EXISTS (SELECT 1 FROM entity_property {alias} "
        f"WHERE {alias}.kind = e.kind AND {alias}.parent = e.parent "
        f"AND {alias}.name = e.name AND {alias}.key = %s"
    )
    if clause.op == NE:
        sql = (
            f"{head} AND {alias}.property_type <> '{LARGE_TEXT}' "
            f"AND NOT ({alias}.property_type = ANY(%s) AND {column} = {placeholder}))"
        )
    else:
        sql = (
            f"{head} AND {alias}.property_type = ANY(%s) "
            f"AND {column} {clause.op} {placeholder})"
        )
    return sql, [clause.key, list(property_types), _param(clause.value)]


def build_sort_join(key: str, alias: str) -> tuple[str, list[object]]:
    """Inner join on the sorted property; entities lacking it drop out."""
    return (
        f"JOIN entity_property {alias} ON {alias}.kind = e.kind "
        f"AND {alias}.parent = e.parent AND {alias}.name = e.name "
        f"AND {alias}.key = %s AND {alias}.property_type <> '{LARGE_TEXT}'",
        [key],
    )


def build_order_by(alias: str, descending: bool) -> list[str]:
    direction = "DESC" if descending else "ASC"
    return [f"{column.format(a=alias)} {direction}" for column in _ORDER_COLUMNS]


def build_query(query: CompiledQuery, parent: str) -> PostgresQuery:
    """Translate a compiled query into SQL fragments."""
    prepared = PostgresQuery(kind=query.kind, parent=parent)
    for i, clause in enumerate(query.filters):
        condition, params = build_filter_condition(clause, f"f{i}")
        prepared.conditions.append(condition)
        prepared.condition_params.extend(params)
    for i, clause in enumerate(query.sorts):
        join, params = build_sort_join(clause.key, f"s{i}")
        prepared.joins.append(join)
        prepared.join_params.extend(params)
        prepared.order_by.extend(build_order_by(f"s{i}", clause.descending))
    return prepared


def encode_value(value: object) -> tuple[object, ...]:
    """Property row columns (PROPERTY_COLUMNS order) for one value."""
    if isinstance(value, LargeText):
        return (LARGE_TEXT, value.value, None, None, None, None, None)
    if isinstance(value, bool):
        return ("bool", None, None, None, value, None, None)
    if isinstance(value, int):
        return ("int", None, value, None, None, None, None)
    if isinstance(value, float):
        return ("float", None, None, value, None, None, None)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return ("naive_datetime", None, None, None, None, value.replace(tzinfo=UTC), None)
        return ("datetime", None, None, None, None, value, None)
    if isinstance(value, str):
        return ("str", value, None, None, None, None, None)
    if isinstance(value, bytes):
        return ("bytes", None, None, None, None, None, value)
    raise TypeError(f"Unsupported property value type [{type(value).__name__}]")


def decode_value(row: tuple[object, ...]) -> object:
    """Inverse of encode_value for a row in PROPERTY_COLUMNS order."""
    property_type, str_value, int_value, float_value, bool_value, time_value, bytes_value = row
    if property_type == LARGE_TEXT:
        return LargeText(str_value)
    if property_type == "str":
        return str_value
    if property_type == "int":
        return int(int_value)
    if property_type == "float":
        return float(float_value)
    if property_type == "bool":
        return bool(bool_value)
    if property_type == "datetime":
        return time_value
    if property_type == "naive_datetime":
        return time_value.astimezone(UTC).replace(tzinfo=None)
    if property_type == "bytes":
        return bytes(bytes_value)
    raise ValueError(f"Unknown property type [{property_type}]")
