"""Transaction boundary contract used by command use cases."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Commits or rolls back everything the repositories of one request wrote."""

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass
