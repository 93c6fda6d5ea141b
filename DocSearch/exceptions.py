"""
Error types raised by the DocSearch engine.
Boundary code (the session facade and the CLI) catches these and reports them as messages.
"""


class DocSearchError(Exception):
    """Base class for all DocSearch errors."""


class CorpusLoadError(DocSearchError):
    """A file inside the corpus directory could not be read or decoded."""

    def __init__(self, path, message=None):
        self.path = path
        super().__init__(message or f"An error occurred while reading file {path}")


class EmptyQueryError(DocSearchError):
    """None of the query words belong to the vocabulary."""

    def __init__(self, message="Query words not found in vocabulary (maybe it contains only stopwords)."):
        super().__init__(message)


class NoActiveCorpusError(DocSearchError):
    """A query or lookup was attempted before anything was loaded."""


class ConfigError(DocSearchError):
    """The configuration file exists but cannot be parsed."""
