"""cqrepo - 커맨드/쿼리 객체를 실행하는 SqlAlchemy 레포지터리."""
from cqrepo.config import Config  # noqa
from cqrepo.core import (  # noqa
    AbstractRepository,
    AbstractUnitOfWork,
    Command,
    CqRepoError,
    Entity,
    ProjectionQuery,
    Query,
    RepositoryInitError,
    Scalar,
)
from cqrepo.ops import command, projection, query, scalar  # noqa
from cqrepo.repo import SqlAlchemyRepository  # noqa
from cqrepo.uow import PendingChanges, SqlAlchemyUnitOfWork  # noqa
