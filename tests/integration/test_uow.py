from sqlalchemy import text

from cqrepo.orm import SessionMaker
from cqrepo.uow import SqlAlchemyUnitOfWork
from tests.app.domain.models import Widget


def count_widgets(get_session: SessionMaker) -> int:
    with get_session() as session:
        return session.execute(text("SELECT count(*) FROM widget")).scalar_one()


def test_commit_persists(get_session: SessionMaker) -> None:
    session = get_session()
    uow = SqlAlchemyUnitOfWork(session)
    with uow:
        session.add(Widget(1, "A"))
        assert [it.id for it in uow.pending.new] == [1]
        uow.commit()

    assert uow.committed
    assert count_widgets(get_session) == 1


def test_rolls_back_uncommitted_work_by_default(get_session: SessionMaker) -> None:
    session = get_session()
    with SqlAlchemyUnitOfWork(session) as uow:
        session.add(Widget(1, "A"))
        uow.flush()
        assert not uow.has_changes

    # Commit 을 안한 경우 실제 DB에 데이터가 반영되지 않습니다.
    assert count_widgets(get_session) == 0


def test_session_stays_open_after_exit(get_session: SessionMaker) -> None:
    session = get_session()
    with SqlAlchemyUnitOfWork(session):
        pass

    session.add(Widget(1, "A"))
    session.commit()
    assert count_widgets(get_session) == 1
