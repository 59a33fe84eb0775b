"""
Chaîne de requête `select → from_ → where → limit`.

Chaque étape n'expose que la méthode de l'étape suivante ; seule `limit`
exécute la requête. Les doubles de test implémentent ces mêmes Protocols
(voir tests/fakes.py) : si le code appelle une méthode absente du double,
le test échoue sur un AttributeError.
"""
from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable

from sqlalchemy import select as sa_select
from sqlalchemy.orm import Session

Row = Dict[str, Any]


@runtime_checkable
class LimitStage(Protocol):
    def limit(self, count: int) -> List[Row]: ...


@runtime_checkable
class WhereStage(Protocol):
    def where(self, *criteria: Any) -> LimitStage: ...


@runtime_checkable
class FromStage(Protocol):
    def from_(self, table: Any) -> WhereStage: ...


@runtime_checkable
class QueryClient(Protocol):
    def select(self, **columns: Any) -> FromStage: ...


class _SqlLimit:
    def __init__(self, db: Session, columns: Dict[str, Any], table: Any, criteria: tuple) -> None:
        self._db = db
        self._columns = columns
        self._table = table
        self._criteria = criteria

    def limit(self, count: int) -> List[Row]:
        stmt = (
            sa_select(*[col.label(name) for name, col in self._columns.items()])
            .select_from(self._table)
            .where(*self._criteria)
            .limit(count)
        )
        return [dict(r._mapping) for r in self._db.execute(stmt)]


class _SqlWhere:
    def __init__(self, db: Session, columns: Dict[str, Any], table: Any) -> None:
        self._db = db
        self._columns = columns
        self._table = table

    def where(self, *criteria: Any) -> _SqlLimit:
        return _SqlLimit(self._db, self._columns, self._table, criteria)


class _SqlFrom:
    def __init__(self, db: Session, columns: Dict[str, Any]) -> None:
        self._db = db
        self._columns = columns

    def from_(self, table: Any) -> _SqlWhere:
        return _SqlWhere(self._db, self._columns, table)


class SqlAlchemyQueryClient:
    """Implémentation réelle au-dessus d'une Session SQLAlchemy."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def select(self, **columns: Any) -> _SqlFrom:
        if not columns:
            raise ValueError("select() needs at least one labelled column")
        return _SqlFrom(self._db, columns)
