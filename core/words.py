import random
from typing import Iterable, Optional, Tuple
from config import Config

class WordSource:
    """Fixed vocabulary with uniform random picks"""

    def __init__(self, words: Iterable[str] = Config.WORDS, rng: Optional[random.Random] = None):
        self.words: Tuple[str, ...] = self._validate(words)
        self.rng = rng or random.Random()

    @staticmethod
    def _validate(words: Iterable[str]) -> Tuple[str, ...]:
        vocabulary = tuple(words)
        if not vocabulary:
            raise ValueError("Word list cannot be empty")
        for index, word in enumerate(vocabulary):
            if not word or not word.isalpha():
                raise ValueError(f"Word at index {index} '{word}' is not alphabetic")
            if not word.isupper():
                raise ValueError(f"Word at index {index} '{word}' is not in uppercase format")
        return vocabulary

    def pick_word(self) -> str:
        return self.rng.choice(self.words)

    def __len__(self) -> int:
        return len(self.words)
