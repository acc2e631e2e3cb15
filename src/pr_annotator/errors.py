from __future__ import annotations


class AnnotationError(Exception):
    """Base class for failures that abort a correlation run."""


class PatchUnresolved(AnnotationError):
    def __init__(self, filename: str):
        super().__init__(f"The patch details could not be resolved for {filename}")
        self.filename = filename


class ReferenceUnresolved(AnnotationError):
    def __init__(self, filename: str, url: str):
        super().__init__(f"The sha details could not be resolved for {filename} from {url!r}")
        self.filename = filename
        self.url = url
