import random
from typing import Optional
from utils.logger import logger

class Scrambler:
    """
    Letter shuffler for the puzzle board.
    The random source is injected so games can be replayed from a seed.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def scramble(self, word: str) -> str:
        """Uniform permutation of the letters (Fisher-Yates)"""
        letters = list(word)
        self.rng.shuffle(letters)
        return "".join(letters)

    def scramble_distinct(self, word: str) -> str:
        """
        Scramble until the result differs from the word.
        Words with no distinct arrangement ("A", "ZZZ") come back unchanged.
        """
        if len(word) <= 1 or len(set(word)) == 1:
            logger.debug(f"No distinct scramble for '{word}', showing as-is")
            return word

        scrambled = self.scramble(word)
        while scrambled == word:
            scrambled = self.scramble(word)
        return scrambled
