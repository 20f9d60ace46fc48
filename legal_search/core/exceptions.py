"""
Exceptions raised by the retrieval core.
"""


class RetrievalError(Exception):
    """Base class for errors raised while retrieving legal sections."""


class VectorSearchUnavailable(RetrievalError):
    """The document store has no usable vector similarity support."""


class EmbeddingError(RetrievalError):
    """The embedding provider could not produce a vector for the text."""
