from typing import Optional

class GuessParser:
    """
    Normalizes raw player input before judging.
    Blank means empty after trimming, so whitespace-only input is blank too.
    """

    @classmethod
    def normalize(cls, raw: Optional[str]) -> Optional[str]:
        """Trimmed, uppercased guess, or None when there is nothing to judge"""
        if raw is None:
            return None
        value = raw.strip()
        if not value:
            return None
        return value.upper()

    @classmethod
    def is_blank(cls, raw: Optional[str]) -> bool:
        return cls.normalize(raw) is None
