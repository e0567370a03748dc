from .errors import CqRepoError, RepositoryInitError  # noqa
from .models import (  # noqa
    AbstractRepository,
    AbstractUnitOfWork,
    Command,
    Entity,
    Operation,
    ProjectionQuery,
    Query,
    Scalar,
)
