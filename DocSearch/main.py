import argparse
import sys
from typing import List, Optional

from DocSearch.config import load_config
from DocSearch.exceptions import DocSearchError, NoActiveCorpusError
from DocSearch.tfidf_search.tfidf_search import QueryResult, TFIDFSearchEngine


class DocSearch:
    """
    Search session over one loaded directory.
    Keeps the engine and the results of the last query for later lookup.
    """
    def __init__(self, config=None, stop_words=None):
        self.config = config or load_config()
        self.engine = TFIDFSearchEngine(config=self.config, stop_words=stop_words)
        self.results: Optional[List[QueryResult]] = None
    
    @property
    def corpus(self):
        return self.engine.corpus

    def set_path(self, directory: str):
        """
        Load a directory of text files, replacing the current corpus.
        
        Args:
            directory: Path to the directory
            
        Returns:
            The new CorpusIndex
            
        Raises:
            NotADirectoryError: The path is not a directory
            CorpusLoadError: A file could not be read
        """
        corpus = self.engine.load(directory)
        self.results = None
        return corpus
    
    def query(self, query: str) -> List[QueryResult]:
        """
        Run a free-text query and remember its results.
        
        Args:
            query: Free-text query string
            
        Returns:
            List of QueryResult tuples, best match first
        """
        self.results = self.engine.search(query)
        return self.results

    def get_results(self) -> List[QueryResult]:
        if self.results is None:
            raise NoActiveCorpusError("Query search must be executed before using this command!")
        return self.results

    def get_result(self, index: int) -> QueryResult:
        results = self.get_results()
        if index < 0 or index >= len(results):
            raise IndexError(f"Index is out of bounds. Valid indexes are in range [0,{len(results) - 1}]")
        return results[index]

    def read_result(self, index: int) -> List[str]:
        """Return the lines of the document behind a stored result."""
        result = self.get_result(index)
        encoding = self.config.get("input", {}).get("encoding", "utf-8")
        with open(result.path, "r", encoding=encoding) as f:
            return f.read().splitlines()


def format_result(rank: int, result: QueryResult) -> str:
    return f"[{rank}] ({result.similarity:.4f}) {result.path}"


def display_results(results):
    """Display search results in a formatted way"""
    if not results:
        print("No documents are similar enough to the query.")
        return

    print("Top results are:")
    for i, result in enumerate(results):
        print(format_result(i, result))


def main():
    # Parse command-line arguments
    parser = argparse.ArgumentParser(
        description='DocSearch - TF-IDF search over a directory of text files'
    )
    parser.add_argument('--path', required=True, help='Directory with text files')
    parser.add_argument('--query', help='Query string to search for')
    parser.add_argument('--config', help='Path to configuration file')
    args = parser.parse_args()
    
    try:
        search = DocSearch(config=load_config(args.config))
        print(f"Loading documents from: {args.path}")
        corpus = search.set_path(args.path)
    except (DocSearchError, NotADirectoryError) as e:
        print(f"Error occurred while loading from {args.path}: {e}")
        sys.exit(1)

    print(f"Dictionary size: {corpus.vocabulary_size}")
    print(f"Number of loaded documents: {corpus.document_count}")

    if args.query:
        try:
            display_results(search.query(args.query))
        except DocSearchError as e:
            print(e)


if __name__ == "__main__":
    main()
