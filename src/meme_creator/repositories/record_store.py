"""Record store for templates and memes."""

import uuid
from typing import List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..exceptions import RecordNotFoundError, StoreError
from ..models.database import Base
from ..utils.logging import get_logger

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=Base)


class RecordStore:
    """Key-value style persistence for records over SQLAlchemy.

    Each call runs in its own session and transaction, so the store keeps no
    state between calls and can be shared by concurrent requests and workers.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        """
        Initialize the record store.

        Args:
            session_factory: Factory producing SQLAlchemy sessions
        """
        self.session_factory = session_factory

    def put(self, record: Base) -> str:
        """
        Insert ``record``, or overwrite the stored record with the same id.

        A record without an id is assigned a fresh one.

        Args:
            record: Record to persist

        Returns:
            str: The record id

        Raises:
            StoreError: If the database write fails
        """
        if not record.id:
            record.id = uuid.uuid4().hex

        try:
            with self.session_factory() as session, session.begin():
                session.merge(record)
        except SQLAlchemyError as e:
            logger.error("record_put_failed", kind=record.kind, id=record.id, error=str(e))
            raise StoreError(f"storing {record.kind} failed", original_error=e) from e

        return record.id

    def get(self, kind: Type[RecordT], record_id: str) -> RecordT:
        """
        Fetch a record by id.

        Raises:
            RecordNotFoundError: If no such record exists
            StoreError: If the database read fails
        """
        try:
            with self.session_factory() as session:
                record = session.get(kind, record_id)
                if record is not None:
                    session.expunge(record)
        except SQLAlchemyError as e:
            logger.error("record_get_failed", kind=kind.kind, id=record_id, error=str(e))
            raise StoreError(f"getting {kind.kind} failed", original_error=e) from e

        if record is None:
            raise RecordNotFoundError(kind.kind, record_id)
        return record

    def query(
        self,
        kind: Type[RecordT],
        order_by: str = "-created",
        limit: Optional[int] = None,
    ) -> List[RecordT]:
        """
        List records of one kind.

        Args:
            kind: Record class
            order_by: Column name, prefixed with ``-`` for descending order
            limit: Maximum number of records, unbounded when None

        Returns:
            List of records

        Raises:
            StoreError: If the database read fails
        """
        column = getattr(kind, order_by.lstrip("-"))
        stmt = select(kind).order_by(column.desc() if order_by.startswith("-") else column)
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            with self.session_factory() as session:
                records = list(session.scalars(stmt))
                session.expunge_all()
        except SQLAlchemyError as e:
            logger.error("record_query_failed", kind=kind.kind, error=str(e))
            raise StoreError(f"querying {kind.kind} failed", original_error=e) from e

        return records
