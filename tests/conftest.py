# pylint: disable=redefined-outer-name, protected-access
"""pytest 에서 사용될 전역 Fixture들을 정의합니다."""
from __future__ import annotations

from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cqrepo.orm import SessionMaker, clear_mappers, start_mappers
from cqrepo.repo import SqlAlchemyRepository
from cqrepo.test.unit import FakeSession
from tests.app.adapters.orm import init_mappers


def memory_sessionmaker() -> SessionMaker:
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    clear_mappers()
    metadata = start_mappers(use_exist=False, init_hooks=[init_mappers]).metadata
    metadata.create_all(engine)
    return sessionmaker(engine)


@pytest.fixture
def get_session() -> SessionMaker:
    """매번 새로운 인메모리 DB에 연결된 :class:`.Session` 팩토리를 리턴합니다.

    같은 팩토리에서 만든 세션들은 ``StaticPool`` 덕분에 같은 DB를 공유합니다.
    """
    return memory_sessionmaker()


@pytest.fixture
def session(get_session: SessionMaker) -> Generator[Session, None, None]:
    """테스트에 사용될 새로운 :class:`.Session` 픽스처를 리턴합니다.

    :rtype: :class:`~sqlalchemy.orm.Session`
    """
    session = get_session()
    yield session
    session.close()


@pytest.fixture
def repo(session: Session) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(session)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def fake_repo(fake_session: FakeSession) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(fake_session)  # type: ignore
