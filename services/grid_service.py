# services/grid_service.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from sqlalchemy import String, cast, func, literal, or_, select

from extensions import db

COLUMN_SEARCH_RE = re.compile(r"^columns\[(\d+)\]\[search\]\[value\]$")

STATUS_TRUE = ("1", "true", "active")
STATUS_FALSE = ("0", "false", "inactive")

# Máximo entero que acepta la base (BIGINT con signo)
MAX_SQL_INT = 2**63 - 1


def _to_int(raw, default=None):
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default


# ---------------------------------------------------------------------------
# Parámetros de la grilla (DataTables server-side)
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GridRequest:
    """
    Parámetros normalizados de un request de DataTables.
    Nada se rechaza: todo valor inválido toma un default.
    """

    draw: int = 1
    start: int = 0
    length: int = 10
    order_column: int | None = None
    order_dir: str | None = None
    search: str = ""
    column_search: Mapping[int, str] = field(default_factory=dict)
    filters: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_args(
        cls,
        args: Mapping,
        *,
        default_length: int = 10,
        max_length: int = 500,
        filter_names=(),
    ) -> "GridRequest":
        draw = _to_int(args.get("draw"), 1)

        start = _to_int(args.get("start"), 0)
        if start < 0:
            start = 0
        elif start > MAX_SQL_INT:
            start = MAX_SQL_INT

        length = _to_int(args.get("length"))
        if length == -1 or (length is not None and length > max_length):
            length = max_length
        elif length is None or length <= 0:
            length = default_length

        order_dir = (args.get("order[0][dir]") or "").strip().lower()
        if order_dir not in ("asc", "desc"):
            order_dir = None

        column_search = {}
        for key in args.keys():
            match = COLUMN_SEARCH_RE.match(key)
            if not match:
                continue
            value = (args.get(key) or "").strip()
            if value:
                column_search[int(match.group(1))] = value

        filters = {}
        for name in filter_names:
            value = (args.get(name) or "").strip()
            if value:
                filters[name] = value

        return cls(
            draw=draw,
            start=start,
            length=length,
            order_column=_to_int(args.get("order[0][column]")),
            order_dir=order_dir,
            search=(args.get("search[value]") or "").strip(),
            column_search=column_search,
            filters=filters,
        )


# ---------------------------------------------------------------------------
# Definición estática de cada grilla
# ---------------------------------------------------------------------------
@dataclass(frozen=True, eq=False)
class GridColumn:
    """
    Columna de la grilla, en el mismo orden que las celdas de la respuesta.
    `expression` es None para pseudo-columnas (acciones).
    """

    name: str
    expression: Any = None
    sortable: bool = True
    searchable: bool = True
    kind: str = "text"
    false_keyword: str = "inactive"
    search_expressions: tuple = ()

    def match(self, value: str):
        if self.expression is None or not self.searchable:
            return None
        if self.kind == "boolean":
            return self.expression == literal(self.false_keyword not in value.lower())
        targets = self.search_expressions or (self.expression,)
        return or_(*(text_match(target, value) for target in targets))


def boolean_column(name, expression, false_keyword="inactive") -> GridColumn:
    return GridColumn(name, expression, kind="boolean", false_keyword=false_keyword)


ACTIONS = GridColumn("actions", sortable=False, searchable=False)


@dataclass(frozen=True, eq=False)
class GridFilter:
    """Filtro propio de la entidad (term_fk, status, ...) que llega como query param."""

    param: str
    expression: Any
    kind: str = "int"

    def clause(self, raw: str):
        if self.kind == "int":
            value = _to_int(raw)
            return self.expression == value if value and 0 < value <= MAX_SQL_INT else None
        if self.kind == "status":
            value = raw.strip().lower()
            if value in STATUS_TRUE:
                return self.expression == literal(True)
            if value in STATUS_FALSE:
                return self.expression == literal(False)
            return None
        return self.expression == raw


@dataclass(frozen=True, eq=False)
class GridDefinition:
    name: str
    key: Any
    query: Callable[[], Any]
    columns: tuple
    global_search: tuple = ()
    default_sort: str = "id"
    default_dir: str = "asc"
    filters: tuple = ()

    @property
    def filter_names(self) -> tuple:
        return tuple(f.param for f in self.filters)

    def column(self, name: str) -> GridColumn:
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(name)


@dataclass
class GridPage:
    draw: int
    records_total: int
    records_filtered: int
    rows: list = field(default_factory=list)

    def envelope(self, data: list) -> dict:
        return {
            "draw": self.draw,
            "recordsTotal": self.records_total,
            "recordsFiltered": self.records_filtered,
            "data": data,
        }


# ---------------------------------------------------------------------------
# Predicados
# ---------------------------------------------------------------------------
def text_match(expression, value: str):
    """LIKE %valor% con parámetro ligado; las columnas no textuales se castean."""
    if not isinstance(expression.type, String):
        expression = cast(expression, String)
    return expression.icontains(value, autoescape=True)


def build_predicates(definition: GridDefinition, grid_request: GridRequest) -> list:
    clauses = []

    if grid_request.search and definition.global_search:
        clauses.append(or_(*(text_match(e, grid_request.search) for e in definition.global_search)))

    for index, value in sorted(grid_request.column_search.items()):
        if index >= len(definition.columns):
            continue
        clause = definition.columns[index].match(value)
        if clause is not None:
            clauses.append(clause)

    for grid_filter in definition.filters:
        raw = grid_request.filters.get(grid_filter.param)
        if not raw:
            continue
        clause = grid_filter.clause(raw)
        if clause is not None:
            clauses.append(clause)

    return clauses


def resolve_order(definition: GridDefinition, grid_request: GridRequest) -> tuple[GridColumn, str]:
    """
    Columna/dirección pedidas, o el orden por defecto de la grilla si el índice
    está fuera de rango o apunta a una pseudo-columna.
    """
    index = grid_request.order_column
    if index is not None and 0 <= index < len(definition.columns):
        column = definition.columns[index]
        if column.sortable and column.expression is not None:
            return column, grid_request.order_dir or "asc"
    return definition.column(definition.default_sort), definition.default_dir


# ---------------------------------------------------------------------------
# Ejecución
# ---------------------------------------------------------------------------
class GridService:
    @staticmethod
    def count(statement) -> int:
        return db.session.scalar(select(func.count()).select_from(statement.subquery())) or 0

    @staticmethod
    def fetch(definition: GridDefinition, grid_request: GridRequest) -> GridPage:
        base = definition.query()
        clauses = build_predicates(definition, grid_request)
        filtered = base.where(*clauses) if clauses else base

        records_total = GridService.count(base)
        records_filtered = GridService.count(filtered) if clauses else records_total

        column, direction = resolve_order(definition, grid_request)
        ordering = column.expression.desc() if direction == "desc" else column.expression.asc()

        statement = (
            filtered.order_by(ordering, definition.key.asc())
            .offset(grid_request.start)
            .limit(grid_request.length)
        )
        rows = [dict(row) for row in db.session.execute(statement).mappings()]

        return GridPage(
            draw=grid_request.draw,
            records_total=records_total,
            records_filtered=records_filtered,
            rows=rows,
        )
