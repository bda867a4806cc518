"""
Generic record store over a SQLAlchemy session.

Services depend on this small contract (find_one / find / create / update /
update_if / upsert) rather than on query construction, so the domain code
reads the same regardless of the backing engine. Nothing here commits: the owning service
decides the transaction boundary.
"""
import logging
from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from hrms.database import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class RecordStore(Generic[ModelT]):
    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model

    def _where(self, filters: Dict[str, Any]):
        return [getattr(self.model, key) == value for key, value in filters.items()]

    def get(self, record_id: int) -> Optional[ModelT]:
        return self.db.get(self.model, record_id)

    def find_one(self, **filters) -> Optional[ModelT]:
        stmt = select(self.model).where(*self._where(filters)).limit(1)
        return self.db.scalars(stmt).first()

    def find(
        self,
        *criteria,
        order_by: Optional[Sequence[Any]] = None,
        **filters,
    ) -> List[ModelT]:
        """Filter by equality keywords plus any extra SQLAlchemy criteria."""
        stmt = select(self.model).where(*self._where(filters), *criteria)
        if order_by is not None:
            stmt = stmt.order_by(*order_by)
        return list(self.db.scalars(stmt).all())

    def create(self, **fields) -> ModelT:
        obj = self.model(**fields)
        self.db.add(obj)
        self.db.flush()
        return obj

    def update(self, obj: ModelT, **patch) -> ModelT:
        for key, value in patch.items():
            setattr(obj, key, value)
        self.db.flush()
        return obj

    def update_if(self, obj: ModelT, *conditions, **patch) -> bool:
        """
        Guarded single-row UPDATE: written only while the stored row still
        matches ``conditions``. Returns False when another writer got there first.
        """
        stmt = (
            update(self.model)
            .where(self.model.id == obj.id, *conditions)
            .values(**patch)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if result.rowcount != 1:
            return False
        self.db.refresh(obj)
        return True

    def upsert(self, keys: Dict[str, Any], patch: Dict[str, Any], index_elements: Iterable[str]) -> ModelT:
        """
        Insert-or-update keyed by a unique constraint, as one atomic statement.

        ``keys`` must cover ``index_elements``; ``patch`` is written on both paths.
        """
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Atomic upsert not supported for dialect '{dialect}'")

        set_ = dict(patch)
        # Column onupdate defaults do not fire for ON CONFLICT updates
        if "updated_at" in self.model.__table__.c:
            set_["updated_at"] = func.now()

        stmt = (
            insert(self.model)
            .values(**keys, **patch)
            .on_conflict_do_update(index_elements=list(index_elements), set_=set_)
        )
        self.db.execute(stmt)

        obj = self.find_one(**keys)
        # The row was written behind the ORM's back; drop any stale identity-map state
        self.db.refresh(obj)
        return obj
