"""SqlAlchemy 구문을 실행하는 기본 커맨드/쿼리 객체들."""
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from cqrepo.core import Command, ProjectionQuery, Query, Scalar
from cqrepo.core.models import P, S

T = TypeVar("T")


class SelectScalar(Scalar[T]):
    """``SELECT`` 구문의 결과에서 값 하나를 리턴합니다.

    ``one=False`` 이면 결과가 없을 때 ``None`` 을 리턴하고, ``one=True`` 이면
    정확히 한 행이 아닐 때 :class:`~sqlalchemy.exc.NoResultFound` 또는
    :class:`~sqlalchemy.exc.MultipleResultsFound` 가 발생합니다.
    """

    def __init__(self, stmt: Select, one: bool = False):
        self.stmt = stmt
        self.one = one

    def execute(self, session: Session) -> T:
        if self.one:
            return session.scalars(self.stmt).one()
        return session.scalar(self.stmt)


class SelectQuery(Query[T]):
    """``SELECT`` 구문의 결과를 리스트로 리턴합니다."""

    def __init__(self, stmt: Select):
        self.stmt = stmt

    def execute(self, session: Session) -> Sequence[T]:
        return session.scalars(self.stmt).all()


class SelectProjection(ProjectionQuery[S, P]):
    """``selection`` 엔티티를 조회해서 ``project`` 함수로 변환한 리스트를 리턴합니다.

    Args:
        selection: 조회할 엔티티 클래스.
        project: 엔티티 하나를 결과 형태로 바꾸는 함수.
        where: ``WHERE`` 조건 목록.
        order_by: ``ORDER BY`` 컬럼 목록.
    """

    def __init__(
        self,
        selection: Type[S],
        project: Callable[[S], P],
        where: Sequence[Any] = (),
        order_by: Sequence[Any] = (),
    ):
        self.selection = selection
        self.project = project
        self.where = where
        self.order_by = order_by

    def execute(self, session: Session) -> list[P]:
        stmt = select(self.selection)
        if self.where:
            stmt = stmt.where(*self.where)
        if self.order_by:
            stmt = stmt.order_by(*self.order_by)
        return [self.project(it) for it in session.scalars(stmt)]


class GetById(Scalar[Optional[T]]):
    """기본키로 엔티티를 조회합니다. 못 찾을 경우 ``None`` 을 리턴합니다."""

    def __init__(self, entity_class: Type[T], id: Any):  # pylint: disable=redefined-builtin
        self.entity_class = entity_class
        self.id = id

    def __repr__(self) -> str:
        return f"GetById[{self.entity_class.__name__}, {self.id!r}]"

    def execute(self, session: Session) -> Optional[T]:
        return session.get(self.entity_class, self.id)


class Add(Command):
    """엔티티들을 세션에 추가하고 flush 합니다.

    flush 하므로 제약조건 위반(:class:`~sqlalchemy.exc.IntegrityError`)은 커밋
    시점이 아니라 커맨드 실행 중에 발생합니다.
    """

    def __init__(self, *items: Any):
        self.items = items

    def execute(self, session: Session) -> None:
        session.add_all(self.items)
        session.flush()


class Delete(Command):
    """엔티티들을 세션에서 삭제하고 flush 합니다."""

    def __init__(self, *items: Any):
        self.items = items

    def execute(self, session: Session) -> None:
        for item in self.items:
            session.delete(item)
        session.flush()
