import math
from typing import Sequence, Tuple


class Document:
    """
    Represents one indexed file of a loaded corpus.
    Created once during a directory load, after the corpus IDF vector is known,
    and read-only afterwards.
    """

    __slots__ = ("_key", "_path", "_terms", "_tf_idf_vector", "_vector_norm")
    
    def __init__(self, key: int, path: str, terms: Sequence[str], tf_idf_vector: Sequence[float]):
        """
        Initialize a document.
        
        Args:
            key: Stable integer key assigned in traversal order (0, 1, 2, ...)
            path: Absolute normalized path of the file
            terms: Preprocessed terms of the file content, duplicates retained
            tf_idf_vector: TF-IDF weights aligned to the corpus vocabulary
        """
        self._key = key
        self._path = path
        self._terms = tuple(terms)
        self._tf_idf_vector = tuple(tf_idf_vector)
        self._vector_norm = math.sqrt(sum(value * value for value in self._tf_idf_vector))

    @property
    def key(self) -> int:
        return self._key

    @property
    def path(self) -> str:
        return self._path

    @property
    def terms(self) -> Tuple[str, ...]:
        return self._terms

    @property
    def tf_idf_vector(self) -> Tuple[float, ...]:
        return self._tf_idf_vector

    @property
    def vector_norm(self) -> float:
        return self._vector_norm

    def __repr__(self):
        return f"Document(key={self.key}, path={self.path!r}, terms={len(self.terms)})"
