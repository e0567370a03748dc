"""UnitOfWork 패턴 모듈.

SqlAlchemy를 이용한 기본 구현체를 제공합니다.

UoW 는 레포지터리가 사용하는 세션을 감싸서 commit/rollback 과
아직 커밋되지 않은 변경 내역 조회를 제공합니다. 세션 자체는 외부에서
소유하므로 UoW 가 세션을 닫지는 않습니다.
"""
from __future__ import annotations

from typing import Any, NamedTuple

from sqlalchemy.orm import Session

from cqrepo.core import AbstractUnitOfWork, RepositoryInitError
from cqrepo.core._logging import get_logger

logger = get_logger("cqrepo.uow")


class PendingChanges(NamedTuple):
    """세션에 쌓여있는 미반영 변경 내역의 스냅샷."""

    new: list[Any]
    dirty: list[Any]
    deleted: list[Any]

    def __bool__(self) -> bool:
        return bool(self.new or self.dirty or self.deleted)


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """``SqlAlchemy`` ORM을 이용한 UnitOfWork 패턴 구현입니다."""

    def __init__(self, session: Session) -> None:
        """주어진 세션을 감싸는 UoW를 초기화합니다."""
        if session is None:
            raise RepositoryInitError("session is required for unit of work")
        self._session = session
        self.committed = False

    def __repr__(self):
        return f"SqlAlchemyUnitOfWork[{self._session!r}]"

    @property
    def session(self) -> Session:
        return self._session

    @property
    def pending(self) -> PendingChanges:
        """아직 커밋되지 않은 엔티티 목록을 리턴합니다."""
        return PendingChanges(
            new=list(self._session.new),
            dirty=list(self._session.dirty),
            deleted=list(self._session.deleted),
        )

    @property
    def has_changes(self) -> bool:
        return bool(self.pending)

    def flush(self) -> None:
        """변경 내역을 DB에 반영하되 트랜잭션은 유지합니다."""
        self._session.flush()

    def _commit(self) -> None:
        """세션을 커밋합니다."""
        logger.debug("commit: %r", self)
        self._session.commit()

    def rollback(self) -> None:
        """세션을 롤백합니다."""
        logger.debug("rollback: %r", self)
        self._session.rollback()
