from abc import ABC, abstractmethod
from typing import Dict, Iterable
from .tokenizer import LetterTokenizer, Token, Tokenizer
import json
import os

STOP_WORDS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


class TokenPreprocessor(ABC):
    @abstractmethod
    def preprocess(self, token: Token, document: str) -> Token:
        raise NotImplementedError()

    def preprocess_all(self, tokens: list[Token], document: str) -> list[Token]:
        return [self.preprocess(token, document) for token in tokens]


class LowercasePreprocessor(TokenPreprocessor):
    def preprocess(self, token: Token, document: str) -> Token:
        token.processed_form = token.processed_form.lower().strip()
        return token


def load_stop_words(language: str = "both", stop_words_dir: str = STOP_WORDS_DIR) -> frozenset:
    """
    Load stop words from the bundled JSON word lists.
    
    Args:
        language: Can be 'en', 'hr' or 'both' to determine which stop words to use
        stop_words_dir: Directory containing stopwords-<language>.json files
        
    Returns:
        Frozen set of lowercase stop words
    """
    languages = ["en", "hr"] if language == "both" else [language]

    stop_words = set()
    for lang in languages:
        path = os.path.join(stop_words_dir, f"stopwords-{lang}.json")
        if not os.path.exists(path):
            print(f"Warning: Stop words file {path} not found")
            continue
        with open(path, 'r', encoding='utf-8') as f:
            stop_words.update(word.strip().lower() for word in json.load(f))

    return frozenset(stop_words)


class StopWordsPreprocessor(TokenPreprocessor):
    """Preprocessor for removing stop words."""
    
    def __init__(self, stop_words: Iterable[str] = frozenset()):
        """
        Initialize preprocessor for removing stop words.
        
        Args:
            stop_words: The stop word set, built once at startup and shared read-only
        """
        self.stop_words = frozenset(stop_words)
    
    def preprocess(self, token: Token, document: str) -> Token:
        """
        If token is a stop word, replace its processed_form with empty string.
        
        Args:
            token: Token to process
            document: Original document

        Returns:
            Processed token
        """
        if token.processed_form in self.stop_words:
            token.processed_form = ""
        return token


class PreprocessingPipeline:
    """Tokenizer followed by a chain of token preprocessors."""
    
    def __init__(self, preprocessors, tokenizer: Tokenizer = None, name="Default Pipeline"):
        """
        Initialize a preprocessing pipeline.
        
        Args:
            preprocessors: List of preprocessor objects
            tokenizer: Tokenizer used by terms() (defaults to LetterTokenizer)
            name: Name of the pipeline
        """
        self.preprocessors = preprocessors
        self.tokenizer = tokenizer or LetterTokenizer()
        self.name = name
        
    def preprocess(self, tokens: list[Token], document: str) -> list[Token]:
        """
        Apply all preprocessors to the tokens.
        
        Args:
            tokens: List of tokens to preprocess
            document: Original document text

        Returns:
            List of preprocessed tokens
        """
        for preprocessor in self.preprocessors:
            preprocessor.preprocess_all(tokens, document)
            
        return tokens

    def terms(self, document: str) -> list[str]:
        """
        Tokenize and preprocess a text, keeping the surviving terms in document order.
        Duplicates are kept since they carry the term frequency.
        """
        tokens = self.preprocess(self.tokenizer.tokenize(document), document)
        return [token.processed_form for token in tokens if token.processed_form]


def create_pipeline(config: Dict, stop_words: Iterable[str] = None) -> PreprocessingPipeline:
    """
    Create a preprocessing pipeline based on configuration.
    
    Args:
        config: Configuration dictionary
        stop_words: Stop word set; loaded from the bundled lists when not given
    
    Returns:
        PreprocessingPipeline object
    """
    preprocessors = []
    pipeline_name = []
    preproc_config = config.get("preprocessing", {})

    if preproc_config.get("lowercase", True):
        preprocessors.append(LowercasePreprocessor())
        pipeline_name.append("Lowercase")

    stop_words_config = preproc_config.get("stop_words", {})
    if stop_words_config.get("use", True):
        language = stop_words_config.get("language", "both")
        if stop_words is None:
            stop_words = load_stop_words(language)
        preprocessors.append(StopWordsPreprocessor(stop_words))
        pipeline_name.append(f"StopWords({language})")

    return PreprocessingPipeline(preprocessors, name="+".join(pipeline_name))


def tokenize(text: str, stop_words: Iterable[str]) -> list[str]:
    """
    Turn raw text into lowercase, letters-only terms, dropping stop words.
    
    Args:
        text: Raw text
        stop_words: Stop words to filter out
        
    Returns:
        Terms in document order, duplicates included
    """
    pipeline = PreprocessingPipeline([LowercasePreprocessor(), StopWordsPreprocessor(stop_words)])
    return pipeline.terms(text)
