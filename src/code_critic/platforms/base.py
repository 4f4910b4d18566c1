from abc import ABC, abstractmethod
from code_critic.models.code import PullRequestData, SourceFile


class CodeHost(ABC):
    @abstractmethod
    async def fetch_file(self, url: str) -> SourceFile:
        pass

    @abstractmethod
    async def fetch_pr(self, url: str) -> PullRequestData:
        pass
