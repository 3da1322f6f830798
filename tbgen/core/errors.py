from __future__ import annotations


class TbgenError(Exception):
    """Base class for tbgen errors."""


class DatasetError(TbgenError):
    """Raised when the extension dataset cannot be parsed."""


class RevisionStateError(TbgenError):
    """Raised when the acknowledged revision state has an invalid shape."""


class UnknownRevisionError(TbgenError):
    """Raised when an acknowledged schema revision is not among the fetched ones."""

    def __init__(self, tree: str, revision: str) -> None:
        super().__init__(f"Unknown policy revision {revision} set for mozilla-{tree}")
        self.tree = tree
        self.revision = revision
