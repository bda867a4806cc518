import logging
from sqlalchemy.orm import Session


class BaseService:
    """
    Common plumbing for session-bound services.
    Each service owns the commit/rollback of the operations it exposes.
    """

    def __init__(self, db: Session):
        self.db = db
        self._logger = logging.getLogger(self.__class__.__module__)

    def commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
