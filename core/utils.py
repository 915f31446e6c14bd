import hashlib
import logging
from decimal import Decimal, ROUND_HALF_UP

logger = logging.getLogger(__name__)


def round_half_up(value, ndigits: int = 0):
    """Round with .5 always going away from zero.

    Python's built-in round() uses banker's rounding (round(28.5) == 28),
    which would make scores disagree with the published scoring formulas.
    Pass a Decimal to round an exact value; floats go through their shortest
    repr.

    Args:
        value: Value to round (int, float or Decimal)
        ndigits: Decimal places to keep

    Returns:
        int when ndigits is 0, otherwise float
    """
    quantum = Decimal(1).scaleb(-ndigits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if ndigits == 0 else float(rounded)


def clamp_score(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp a score into [low, high], logging when clipping was needed."""
    if not (low <= value <= high):
        logger.error(f"Score out of range: {value}, clipping to [{low}, {high}]")
        return max(low, min(high, value))
    return value


class DocumentFingerprinter:
    """
    Pure logic for creating deterministic fingerprints of raw documents.
    """

    @staticmethod
    def calculate(content: bytes) -> str:
        """Formula: SHA256(content)."""
        return hashlib.sha256(content).hexdigest()

    @staticmethod
    def normalize_key(text: str) -> str:
        """
        Normalize free text for de-duplication keys.
        Lowercases, drops punctuation and collapses whitespace.
        """
        cleaned = ''.join(ch if ch.isalnum() else ' ' for ch in (text or '').lower())
        return ' '.join(cleaned.split())
