class CqRepoError(Exception):
    """``cqrepo`` 와 관련된 모든 에러의 기본 클래스."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    ...


class RepositoryInitError(CqRepoError):
    """레포지터리(또는 UoW) 초기화 실패 에러."""

    ...
