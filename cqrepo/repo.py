"""레포지터리 패턴 구현.

레포지터리는 미리 만들어진 커맨드/쿼리 객체를 받아서 자신이 가진 세션으로
실행만 합니다. 검증, 재시도, 예외 변환은 하지 않습니다.

주의:

    SqlAlchemy 세션은 스레드 안전하지 않습니다. 하나의 레포지터리(세션)에 대해
    여러 ``*_async`` 작업을 동시에 실행하면 안 됩니다. 레포지터리는 이를 막거나
    감지하지 않으므로 이전 작업의 future 를 await 한 뒤 다음 작업을 실행하세요.
"""
from __future__ import annotations

import asyncio
from concurrent.futures import Executor
from functools import partial
from typing import Any, Callable, Iterable, Optional, TypeVar, overload

from sqlalchemy.orm import Session

from cqrepo.core import (
    AbstractRepository,
    Command,
    ProjectionQuery,
    Query,
    RepositoryInitError,
    Scalar,
)
from cqrepo.core._logging import get_logger
from cqrepo.core.models import P, S
from cqrepo.uow import SqlAlchemyUnitOfWork

T = TypeVar("T")

logger = get_logger("cqrepo.repo")


class SqlAlchemyRepository(AbstractRepository):
    """SqlAlchemy 세션을 저장소로 하는 :class:`AbstractRepository` 구현입니다.

    Example: ::

        repo = SqlAlchemyRepository(session)
        repo.execute(InsertWidget(Widget(1, "A")))
        repo.context.commit()

        widget = repo.find(FindWidgetById(1))
        widgets = await repo.find_async(AllWidgets())

    Args:
        session: 레포지터리가 사용할 세션. 레포지터리보다 오래 살아있어야 합니다.
        executor: ``*_async`` 작업을 실행할 executor. ``None`` 이면 이벤트 루프의
            기본 executor 를 사용합니다. 레포지터리가 종료시키지 않습니다.
    """

    def __init__(self, session: Session, executor: Optional[Executor] = None):
        if session is None:
            raise RepositoryInitError("session is required for repository")

        self._session = session
        self._context = SqlAlchemyUnitOfWork(session)
        self.executor = executor

    def __repr__(self) -> str:
        return f"SqlAlchemyRepository[{self._session!r}]"

    @property
    def context(self) -> SqlAlchemyUnitOfWork:
        return self._context

    def execute(self, command: Command) -> None:
        """미리 만들어진 :class:`Command` 를 실행합니다."""
        logger.debug("execute: %r", command)
        command.execute(self._session)

    @overload
    def find(self, query: Scalar[T]) -> T:
        ...

    @overload
    def find(self, query: Query[T]) -> Iterable[T]:
        ...

    @overload
    def find(self, query: ProjectionQuery[S, P]) -> Iterable[P]:
        ...

    def find(self, query):
        """미리 만들어진 쿼리 객체를 실행하고 결과를 그대로 리턴합니다.

        :class:`Scalar` 는 값 하나를, :class:`Query` 와 :class:`ProjectionQuery`
        는 쿼리가 만든 시퀀스를 리턴합니다.
        """
        logger.debug("find: %r", query)
        return query.execute(self._session)

    def execute_async(self, command: Command) -> asyncio.Future[None]:
        """:meth:`execute` 를 executor 에서 실행하고 future 를 바로 리턴합니다.

        커맨드에서 발생한 예외는 호출 시점이 아니라 future 를 await 할 때
        발생합니다.
        """
        return self._schedule(self.execute, command)

    @overload
    def find_async(self, query: Scalar[T]) -> asyncio.Future[T]:
        ...

    @overload
    def find_async(self, query: Query[T]) -> asyncio.Future[Iterable[T]]:
        ...

    @overload
    def find_async(self, query: ProjectionQuery[S, P]) -> asyncio.Future[Iterable[P]]:
        ...

    def find_async(self, query):
        """:meth:`find` 를 executor 에서 실행하고 future 를 바로 리턴합니다."""
        return self._schedule(self.find, query)

    def _schedule(self, func: Callable[..., Any], *args: Any) -> asyncio.Future:
        # 실행중인 이벤트 루프가 없으면 RuntimeError 가 발생합니다.
        loop = asyncio.get_running_loop()
        return loop.run_in_executor(self.executor, partial(func, *args))
