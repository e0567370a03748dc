from __future__ import annotations

import abc
import asyncio
from contextlib import AbstractContextManager
from typing import (
    TYPE_CHECKING,
    Any,
    Generic,
    Iterable,
    Protocol,
    Type,
    TypeVar,
    Union,
    overload,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class Entity(Protocol):
    """Entity 프로토콜 명세."""

    id: Any  # PK 컬럼으로 id 라는 필드를 제공해야 합니다.


T = TypeVar("T")
S = TypeVar("S", bound=Entity)
P = TypeVar("P")


class Command(abc.ABC):
    """Command 객체.

    영구 저장소의 상태를 변경하고 아무 값도 리턴하지 않는 작업입니다.
    레포지터리는 :meth:`execute` 만 호출할 뿐, 커맨드의 내부 상태는 들여다보지
    않습니다.

    We name commands with imperative mood verb phrases like
    “insert widget” or “delete order line.”
    """

    @abc.abstractmethod
    def execute(self, session: Session) -> None:
        """주어진 세션에 대해 커맨드를 실행합니다."""
        raise NotImplementedError


class Scalar(Generic[T], abc.ABC):
    """정확히 하나의 :class:`T` 값을 리턴하는 쿼리 객체.

    값을 찾지 못했을 때 ``None`` 을 리턴할지, 예외를 발생시킬지는 쿼리가
    결정합니다.
    """

    @abc.abstractmethod
    def execute(self, session: Session) -> T:
        raise NotImplementedError


class Query(Generic[T], abc.ABC):
    """0개 이상의 :class:`T` 값을 리턴하는 컬렉션 쿼리 객체."""

    @abc.abstractmethod
    def execute(self, session: Session) -> Iterable[T]:
        raise NotImplementedError


class ProjectionQuery(Generic[S, P], abc.ABC):
    """엔티티 :class:`S` 를 조회해서 :class:`P` 형태로 변환해 리턴하는 쿼리 객체."""

    selection: Type[S]
    """조회 대상 엔티티 클래스."""

    @abc.abstractmethod
    def execute(self, session: Session) -> Iterable[P]:
        raise NotImplementedError


Operation = Union[Command, Scalar, Query, ProjectionQuery]


class AbstractUnitOfWork(AbstractContextManager["AbstractUnitOfWork"]):
    """UnitOfWork 패턴의 추상 인터페이스입니다.

    하나의 논리적 트랜잭션 안에서 발생한 변경들을 커밋하거나 롤백합니다.
    """

    committed = False

    def __enter__(self) -> AbstractUnitOfWork:
        """``with`` 블록에 진입했을때 실행되는 메소드입니다."""
        return self

    def __exit__(self, *args: Any) -> None:
        """``with`` 블록에서 빠져나갈 때 실행되는 메소드입니다."""
        self.rollback()  # commit() 안되었을때 변경을 롤백합니다.
        # (이미 커밋 되었을 경우 rollback은 아무 효과도 없음)

    def commit(self) -> None:
        """세션을 커밋합니다."""
        self._commit()
        self.committed = True

    @abc.abstractmethod
    def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self) -> None:
        """세션을 롤백합니다."""
        raise NotImplementedError


class AbstractRepository(abc.ABC):
    """커맨드/쿼리 객체를 실행하는 Repository 패턴의 추상 인터페이스 입니다.

    동기 메소드는 호출한 스레드에서 바로 실행되고, ``*_async`` 메소드는 이미
    스케줄된 :class:`asyncio.Future` 를 즉시 리턴합니다.
    """

    @property
    @abc.abstractmethod
    def context(self) -> AbstractUnitOfWork:
        """레포지터리가 사용하는 세션을 감싼 UoW 객체."""
        raise NotImplementedError

    @abc.abstractmethod
    def execute(self, command: Command) -> None:
        raise NotImplementedError

    @overload
    def find(self, query: Scalar[T]) -> T:
        ...

    @overload
    def find(self, query: Query[T]) -> Iterable[T]:
        ...

    @overload
    def find(self, query: ProjectionQuery[S, P]) -> Iterable[P]:
        ...

    @abc.abstractmethod
    def find(self, query):
        raise NotImplementedError

    @abc.abstractmethod
    def execute_async(self, command: Command) -> asyncio.Future[None]:
        raise NotImplementedError

    @overload
    def find_async(self, query: Scalar[T]) -> asyncio.Future[T]:
        ...

    @overload
    def find_async(self, query: Query[T]) -> asyncio.Future[Iterable[T]]:
        ...

    @overload
    def find_async(self, query: ProjectionQuery[S, P]) -> asyncio.Future[Iterable[P]]:
        ...

    @abc.abstractmethod
    def find_async(self, query):
        raise NotImplementedError
