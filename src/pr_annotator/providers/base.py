from __future__ import annotations

from abc import ABC, abstractmethod

from pr_annotator.models import ChangedFile


class PullRequestProvider(ABC):
    @abstractmethod
    def list_files(self, pull_request_number: int) -> list[ChangedFile]:
        raise NotImplementedError
