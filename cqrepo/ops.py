"""함수를 커맨드/쿼리 객체로 만드는 데코레이터.

``session`` 을 첫번째 인자로 받는 평범한 함수를 데코레이트 하면, 나머지
인자를 받아 해당 종류의 작업 객체를 만드는 팩토리가 됩니다. ::

    @command
    def insert_widget(session: Session, widget: Widget) -> None:
        session.add(widget)

    @scalar
    def count_widgets(session: Session) -> int:
        return session.scalar(select(func.count()).select_from(Widget))

    repo.execute(insert_widget(Widget(1, "A")))
    assert repo.find(count_widgets()) == 1
"""
from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Iterable, Type

from sqlalchemy.orm import Session

from cqrepo.core import Command, ProjectionQuery, Query, Scalar

F = Callable[..., Any]


class _BoundCall:
    def __init__(self, func: F, args: tuple, kwargs: dict[str, Any]):
        self.func = func
        self.args = args
        self.kwargs = kwargs

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", repr(self.func))
        return f"{type(self).__name__}[{name}]"

    def __call__(self, session: Session) -> Any:
        return self.func(session, *self.args, **self.kwargs)


class FunctionCommand(_BoundCall, Command):
    def execute(self, session: Session) -> None:
        self(session)


class FunctionScalar(_BoundCall, Scalar):
    def execute(self, session: Session) -> Any:
        return self(session)


class FunctionQuery(_BoundCall, Query):
    def execute(self, session: Session) -> Iterable[Any]:
        return self(session)


class FunctionProjection(_BoundCall, ProjectionQuery):
    def __init__(
        self, selection: Type, func: F, args: tuple, kwargs: dict[str, Any]
    ):
        super().__init__(func, args, kwargs)
        self.selection = selection

    def execute(self, session: Session) -> Iterable[Any]:
        return self(session)


def command(func: F) -> Callable[..., FunctionCommand]:
    """함수를 :class:`Command` 팩토리로 만드는 데코레이터."""

    @wraps(func)
    def _wrapper(*args: Any, **kwargs: Any) -> FunctionCommand:
        return FunctionCommand(func, args, kwargs)

    return _wrapper


def scalar(func: F) -> Callable[..., FunctionScalar]:
    """함수를 :class:`Scalar` 팩토리로 만드는 데코레이터."""

    @wraps(func)
    def _wrapper(*args: Any, **kwargs: Any) -> FunctionScalar:
        return FunctionScalar(func, args, kwargs)

    return _wrapper


def query(func: F) -> Callable[..., FunctionQuery]:
    """함수를 :class:`Query` 팩토리로 만드는 데코레이터."""

    @wraps(func)
    def _wrapper(*args: Any, **kwargs: Any) -> FunctionQuery:
        return FunctionQuery(func, args, kwargs)

    return _wrapper


def projection(selection: Type) -> Callable[[F], Callable[..., FunctionProjection]]:
    """함수를 ``selection`` 엔티티에 대한 :class:`ProjectionQuery` 팩토리로 만듭니다.

    Example: ::

        @projection(Widget)
        def widget_names(session: Session) -> list[str]:
            return [w.name for w in session.scalars(select(Widget))]
    """

    def _decorator(func: F) -> Callable[..., FunctionProjection]:
        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> FunctionProjection:
            return FunctionProjection(selection, func, args, kwargs)

        return _wrapper

    return _decorator
