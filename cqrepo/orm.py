"""ORM 어댑터 모듈.

엔진과 세션 팩토리를 초기화합니다. 도메인 객체는 ``init_hooks`` 로 전달된
함수들이 :class:`~sqlalchemy.orm.registry` 에 imperative 방식으로 매핑합니다.
"""
from __future__ import annotations

from contextlib import AbstractContextManager, contextmanager
from typing import Any, Callable, Generator, Optional, Type, cast

from sqlalchemy import MetaData, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import clear_mappers as _clear_mappers
from sqlalchemy.orm import registry, sessionmaker
from sqlalchemy.orm.session import Session
from sqlalchemy.pool import Pool

from cqrepo.config import Config
from cqrepo.core._logging import get_logger

SessionMaker = Callable[[], Session]
"""Session 팩토리 타입."""
ScopedSession = AbstractContextManager[Session]
MapperHook = Callable[[registry], Any]
"""``registry`` 를 받아 도메인 객체를 매핑하는 함수 타입."""

mapper_registry: Optional[registry] = None

_get_session: Optional[SessionMaker] = None  # pylint: disable=invalid-name

logger = get_logger("cqrepo.orm")


def get_sessionmaker() -> SessionMaker:
    """기본 세션 팩토리를 리턴합니다.

    아직 초기화되지 않았다면 ``setup.cfg`` 설정으로 :func:`init_db` 를 호출합니다.
    """
    if not _get_session:
        return init_db(config=Config.load_from_config())
    return _get_session


def set_default_sessionmaker(get_session: Optional[SessionMaker]) -> None:
    """기본 세션 팩토리를 교체합니다. (테스트용)"""
    global _get_session
    _get_session = get_session


def init_db(
    db_url: Optional[str] = None,
    drop_all: bool = False,
    echo: bool = False,
    init_hooks: Optional[list[MapperHook]] = None,
    config: Optional[Config] = None,
) -> SessionMaker:
    """DB 엔진을 초기화하고 세션 팩토리를 리턴합니다.

    이미 초기화되었다면 기존 세션 팩토리를 그대로 리턴합니다.
    """
    global _get_session

    if _get_session:
        return _get_session

    config = config or Config()
    metadata = start_mappers(init_hooks=init_hooks).metadata

    engine = init_engine(
        metadata,
        db_url or config.get_db_url(),
        connect_args=config.get_db_connect_args(),
        poolclass=config.get_db_poolclass(),
        drop_all=drop_all,
        echo=echo or config.echo,
    )
    _get_session = cast(SessionMaker, sessionmaker(engine))
    return _get_session


def start_mappers(
    use_exist: bool = True, init_hooks: Optional[list[MapperHook]] = None
) -> registry:
    """도메인 객체들을 SqlAlchemy ORM 매퍼에 등록합니다."""
    global mapper_registry  # pylint: disable=global-statement,invalid-name
    if use_exist and mapper_registry:
        return mapper_registry

    mapper_registry = registry()

    # 사용자 매핑 함수 추가.
    if init_hooks:
        for hook in init_hooks:
            hook(mapper_registry)

    return mapper_registry


def clear_mappers() -> None:
    """ORM 매핑을 초기화 합니다."""
    global mapper_registry
    _clear_mappers()
    mapper_registry = None


def init_engine(
    meta: MetaData,
    url: str,
    connect_args: Optional[dict[str, Any]] = None,
    poolclass: Optional[Type[Pool]] = None,
    echo: bool = False,
    isolation_level: Optional[str] = None,
    drop_all: bool = False,
) -> Engine:
    """ORM Engine을 초기화 하고 매핑된 테이블을 생성합니다."""
    kwargs: dict[str, Any] = {}
    if poolclass:
        kwargs["poolclass"] = poolclass
    if isolation_level:
        kwargs["isolation_level"] = isolation_level

    engine = create_engine(url, connect_args=connect_args or {}, echo=echo, **kwargs)
    logger.info("engine created: %s", engine.url.render_as_string(hide_password=True))

    if drop_all:
        meta.drop_all(engine)

    meta.create_all(engine)

    return engine


def get_scoped_session(engine: Engine) -> Callable[[], ScopedSession]:
    """``with...`` 문으로 자동 리소스가 반환되는 세션을 리턴합니다.

    Example: ::

        with get_scoped_session(engine)() as session:
            repo = SqlAlchemyRepository(session)
            ...

    Args:
        engine: Engine.

    """
    session_factory = sessionmaker(engine)

    @contextmanager
    def scoped_session() -> Generator[Session, None, None]:
        session: Optional[Session] = None
        try:
            yield (session := session_factory())  # pylint: disable=superfluous-parens
        finally:
            if session:
                session.close()  # pylint: disable=no-member

    return scoped_session
