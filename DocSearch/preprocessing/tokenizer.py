from abc import ABC, abstractmethod


class Token:
    """A single candidate term cut out of a document."""

    def __init__(self, original_form: str, position: int):
        self.original_form = original_form
        self.processed_form = original_form
        self.position = position

    def __repr__(self):
        return f"Token({self.original_form!r}, {self.processed_form!r}, {self.position})"


class Tokenizer(ABC):
    @abstractmethod
    def tokenize(self, document: str) -> list[Token]:
        raise NotImplementedError()


class LetterTokenizer(Tokenizer):
    """
    Splits text into runs of letters.
    Any character that is not a Unicode letter (digits, punctuation, whitespace,
    symbols) ends the current run, so no token ever contains a non-letter.
    """

    def tokenize(self, document: str) -> list[Token]:
        tokens = []
        current = []
        start = 0

        # Trailing delimiter closes the last run
        for i, char in enumerate(document + " "):
            if char.isalpha():
                if not current:
                    start = i
                current.append(char)
                continue

            word = "".join(current).strip()
            if word:
                tokens.append(Token(word, start))
            current = []

        return tokens
