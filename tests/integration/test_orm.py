# pylint: disable=protected-access
from typing import Generator

import pytest
from sqlalchemy import inspect

from cqrepo import orm
from cqrepo.config import Config
from cqrepo.orm import clear_mappers, get_scoped_session, init_db, set_default_sessionmaker
from cqrepo.repo import SqlAlchemyRepository
from tests.app.adapters.orm import init_mappers
from tests.app.operations import CountWidgets, InsertWidget


@pytest.fixture
def reset_db() -> Generator[None, None, None]:
    clear_mappers()
    set_default_sessionmaker(None)
    yield
    set_default_sessionmaker(None)


def test_init_db_creates_mapped_tables(reset_db) -> None:
    get_session = init_db(init_hooks=[init_mappers], config=Config())

    with get_session() as session:
        assert "widget" in inspect(session.get_bind()).get_table_names()


def test_init_db_returns_cached_sessionmaker(reset_db) -> None:
    get_session = init_db(init_hooks=[init_mappers], config=Config())
    assert init_db() is get_session
    assert orm.get_sessionmaker() is get_session


def test_scoped_session_closes_session(reset_db) -> None:
    get_session = init_db(init_hooks=[init_mappers], config=Config())
    engine = get_session.kw["bind"]  # type: ignore

    with get_scoped_session(engine)() as session:
        repo = SqlAlchemyRepository(session)
        repo.execute(InsertWidget(1, "A"))
        repo.context.commit()

    assert not session.in_transaction()

    with get_scoped_session(engine)() as session:
        assert SqlAlchemyRepository(session).find(CountWidgets()) == 1
