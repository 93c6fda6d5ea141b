"""
Preprocessing module for turning raw document text into index terms.
Includes letter tokenization, lowercase conversion and stop word filtering.
"""
from .tokenizer import Tokenizer, LetterTokenizer, Token
from .preprocess import PreprocessingPipeline, create_pipeline, load_stop_words, tokenize
