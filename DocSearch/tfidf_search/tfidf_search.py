"""
TF-IDF search module for information retrieval over a directory of text files.
Documents are ranked against a query by cosine similarity of their TF-IDF vectors.
"""
import math
import os
from collections import Counter
from typing import Iterable, List, NamedTuple, Sequence, Tuple

from ..config import load_config
from ..exceptions import CorpusLoadError, EmptyQueryError, NoActiveCorpusError
from ..preprocessing.preprocess import PreprocessingPipeline, create_pipeline
from ..preprocessing.document import Document

SIMILARITY_LIMIT = 5e-4
MAX_RESULTS = 10


def dot_product(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    if len(vec1) != len(vec2):
        raise ValueError("Vectors must be of same length")
    return sum(a * b for a, b in zip(vec1, vec2))


def vector_norm(vec: Sequence[float]) -> float:
    return math.sqrt(sum(value * value for value in vec))


def compute_cosine_similarity(vec1: Sequence[float], vec2: Sequence[float],
                              magnitude1: float = None, magnitude2: float = None) -> float:
    """
    Compute cosine similarity between two vocabulary-aligned vectors.

    Args:
        vec1: First vector
        vec2: Second vector
        magnitude1: Precomputed norm of vec1 (computed when not given)
        magnitude2: Precomputed norm of vec2 (computed when not given)

    Returns:
        Cosine similarity score, 0.0 when either vector has zero length
    """
    if magnitude1 is None:
        magnitude1 = vector_norm(vec1)
    if magnitude2 is None:
        magnitude2 = vector_norm(vec2)

    # Avoid division by zero
    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0
    
    return dot_product(vec1, vec2) / (magnitude1 * magnitude2)


def list_regular_files(directory: str) -> List[str]:
    """
    Enumerate every regular file below a directory.
    Directory entries are visited in sorted order so keys are stable between loads.
    
    Args:
        directory: Root directory
        
    Returns:
        Absolute normalized file paths in traversal order
    """
    files = []
    for root, dirs, filenames in os.walk(directory):
        dirs.sort()
        for name in sorted(filenames):
            path = os.path.join(root, name)
            if os.path.isfile(path):
                files.append(os.path.normpath(os.path.abspath(path)))
    return files


def read_terms(path: str, pipeline: PreprocessingPipeline, encoding: str = "utf-8") -> List[str]:
    """
    Read a file and return its terms.
    
    Raises:
        CorpusLoadError: The file cannot be read or decoded
    """
    try:
        with open(path, "r", encoding=encoding) as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusLoadError(path, f"An error occurred while reading file {path}: {e}") from e
    return pipeline.terms(text)


def build_vocabulary(term_lists: Iterable[Sequence[str]]) -> Tuple[Tuple[str, ...], List[frozenset]]:
    """
    Build the corpus vocabulary.
    
    Args:
        term_lists: Terms of every document, in document key order
        
    Returns:
        Tuple of (vocabulary ordered by first appearance, distinct term set of each document)
    """
    vocabulary = {}
    membership = []
    for terms in term_lists:
        for term in terms:
            vocabulary.setdefault(term, len(vocabulary))
        membership.append(frozenset(terms))
    return tuple(vocabulary), membership


def compute_idf(vocabulary: Sequence[str], membership: Sequence[frozenset], document_count: int) -> Tuple[float, ...]:
    """
    Compute the inverse document frequency of every vocabulary term.
    IDF(t) = ln(N / DF(t))
    
    Document frequency is counted over each document's distinct terms,
    never over its raw token list.
    """
    document_frequency = Counter()
    for term_set in membership:
        document_frequency.update(term_set)
    
    # Every vocabulary term occurs in at least one document
    return tuple(math.log(document_count / document_frequency[term]) for term in vocabulary)


class CorpusIndex:
    """
    Immutable index of one loaded directory.
    Owns the vocabulary, the IDF vector and every document with its TF-IDF vector.
    """

    def __init__(self, directory: str, files: Sequence[Tuple[str, Sequence[str]]]):
        """
        Build the index from already tokenized files.
        
        Args:
            directory: The directory the files were loaded from
            files: (path, terms) pairs in traversal order
        """
        self.directory = directory
        files = [(path, tuple(terms)) for path, terms in files]

        self.vocabulary, membership = build_vocabulary(terms for _, terms in files)
        self._vocabulary_set = frozenset(self.vocabulary)
        self.idf = compute_idf(self.vocabulary, membership, len(files))

        self.documents = tuple(
            Document(key, path, terms, self.generate_vector(terms))
            for key, (path, terms) in enumerate(files)
        )

    @classmethod
    def load(cls, directory: str, pipeline: PreprocessingPipeline, encoding: str = "utf-8") -> "CorpusIndex":
        """
        Load and index every regular file below a directory.

        Args:
            directory: Directory to load
            pipeline: Preprocessing pipeline, built once from the configuration
            encoding: Encoding of the text files
            
        Returns:
            Fully built CorpusIndex
            
        Raises:
            NotADirectoryError: The path is not an existing directory
            CorpusLoadError: A file could not be read; nothing is indexed
        """
        if not directory or not os.path.isdir(directory):
            raise NotADirectoryError(f"Directory {directory} not found.")

        directory = os.path.normpath(os.path.abspath(directory))

        files = [(path, read_terms(path, pipeline, encoding)) for path in list_regular_files(directory)]
        return cls(directory, files)

    @property
    def document_count(self) -> int:
        return len(self.documents)

    @property
    def vocabulary_size(self) -> int:
        return len(self.vocabulary)

    def get_document(self, key: int) -> Document:
        return self.documents[key]

    def generate_vector(self, terms: Sequence[str]) -> Tuple[float, ...]:
        """
        Compute a TF-IDF vector aligned to the vocabulary.
        TF is the raw count of the term in the given list.
        Terms outside the vocabulary are ignored.
        
        Args:
            terms: Any list of terms, e.g. a document or a query
            
        Returns:
            Vector with one component per vocabulary term
        """
        frequencies = Counter(terms)
        return tuple(frequencies.get(term, 0) * idf for term, idf in zip(self.vocabulary, self.idf))

    def vocabulary_contains(self, terms: Sequence[str]) -> List[str]:
        """Keep only the terms present in the vocabulary, in their original order."""
        return [term for term in terms if term in self._vocabulary_set]


class QueryResult(NamedTuple):
    similarity: float
    path: str


class QueryScorer:
    """Ranks the documents of a corpus against query terms by cosine similarity."""

    def __init__(self, similarity_limit: float = SIMILARITY_LIMIT, max_results: int = MAX_RESULTS):
        """
        Args:
            similarity_limit: Minimal similarity for a document to be returned
            max_results: Number of top results kept after sorting
        """
        self.similarity_limit = similarity_limit
        self.max_results = max_results

    def score(self, corpus: CorpusIndex, query_terms: Sequence[str]) -> List[QueryResult]:
        """
        Score all documents against the query.
        
        Args:
            corpus: The index to search
            query_terms: Query terms, already narrowed to the vocabulary
            
        Returns:
            At most max_results results sorted by descending similarity
            
        Raises:
            EmptyQueryError: No query term belongs to the vocabulary
        """
        query_terms = corpus.vocabulary_contains(query_terms)
        if not query_terms:
            raise EmptyQueryError()

        query_vector = corpus.generate_vector(query_terms)
        query_norm = vector_norm(query_vector)

        results = []
        for document in corpus.documents:
            similarity = compute_cosine_similarity(
                query_vector, document.tf_idf_vector, query_norm, document.vector_norm
            )
            if similarity >= self.similarity_limit:
                results.append(QueryResult(similarity, document.path))

        results.sort(key=lambda result: -result.similarity)
        return results[:self.max_results]


def load_corpus(directory: str, pipeline: PreprocessingPipeline, encoding: str = "utf-8") -> CorpusIndex:
    return CorpusIndex.load(directory, pipeline, encoding)


def query(corpus: CorpusIndex, raw_query_text: str, pipeline: PreprocessingPipeline,
          scorer: QueryScorer = None) -> List[QueryResult]:
    """
    Tokenize a raw query, narrow it to the corpus vocabulary and rank the corpus.
    The pipeline must be the one the corpus was loaded with.

    Raises:
        EmptyQueryError: No query word belongs to the vocabulary
    """
    scorer = scorer or QueryScorer()
    return scorer.score(corpus, corpus.vocabulary_contains(pipeline.terms(raw_query_text)))


class TFIDFSearchEngine:
    """TF-IDF search engine over the most recently loaded directory"""
    
    def __init__(self, config=None, stop_words=None):
        """
        Initialize the TF-IDF search engine.
        
        Args:
            config: Configuration dictionary (loaded from config.json if not provided)
            stop_words: Stop word set (loaded from the bundled lists if not provided)
        """
        self.config = config or load_config()
        self.pipeline = create_pipeline(self.config, stop_words)
        
        search_config = self.config.get("search", {})
        self.scorer = QueryScorer(
            similarity_limit=search_config.get("similarity_limit", SIMILARITY_LIMIT),
            max_results=search_config.get("max_results", MAX_RESULTS)
        )
        self.encoding = self.config.get("input", {}).get("encoding", "utf-8")
        self.corpus = None
    
    def load(self, directory: str) -> CorpusIndex:
        """
        Load a directory and make it the active corpus.
        The previous corpus stays active if loading fails.
        """
        corpus = CorpusIndex.load(directory, self.pipeline, self.encoding)
        self.corpus = corpus
        return corpus

    def _require_corpus(self) -> CorpusIndex:
        if self.corpus is None:
            raise NoActiveCorpusError("No directory loaded. Set a path before querying.")
        return self.corpus

    def query_terms(self, query: str) -> List[str]:
        """Preprocess a query and narrow it to the active vocabulary."""
        corpus = self._require_corpus()
        return corpus.vocabulary_contains(self.pipeline.terms(query))
    
    def search(self, query: str) -> List[QueryResult]:
        """
        Search for documents matching the query.
        
        Args:
            query: Query string
            
        Returns:
            List of QueryResult tuples, best match first
        """
        # One snapshot per query
        corpus = self._require_corpus()
        terms = corpus.vocabulary_contains(self.pipeline.terms(query))
        return self.scorer.score(corpus, terms)
