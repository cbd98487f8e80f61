"""
Phrase selection strategies for seller replies.

WHAT: Pick one rendered reply variant out of several
WHY: Avoid the seller repeating itself verbatim within one conversation,
     while letting tests pin the exact output
HOW: Strategy objects sharing a choose(options, used) method; a factory
     returns the configured singleton
"""

import random
from typing import Collection, Protocol, Sequence

from ..core.config import settings
from ..utils.logger import get_logger

logger = get_logger(__name__)


class PhraseSelector(Protocol):
    """Interface every selection strategy implements."""

    def choose(self, options: Sequence[str], used: Collection[str]) -> str:
        """Return one of ``options``, preferring entries not in ``used``."""
        ...


def _unused(options: Sequence[str], used: Collection[str]) -> list[str]:
    return [option for option in options if option not in used]


class RandomPhraseSelector:
    """Uniform choice among unused variants, falling back to all variants."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def choose(self, options: Sequence[str], used: Collection[str]) -> str:
        if not options:
            raise ValueError("No phrase options to choose from")
        available = _unused(options, used)
        return self._rng.choice(available or list(options))


class RoundRobinPhraseSelector:
    """
    Deterministic choice: the first variant not yet used.

    Once every variant has been used it cycles by how many of them have
    appeared, so repeated calls keep walking the list in order.
    """

    def choose(self, options: Sequence[str], used: Collection[str]) -> str:
        if not options:
            raise ValueError("No phrase options to choose from")
        available = _unused(options, used)
        if available:
            return available[0]
        used_count = sum(1 for option in options if option in used)
        return options[used_count % len(options)]


class FixedPhraseSelector:
    """Always the variant at ``index`` (clamped). Ignores history."""

    def __init__(self, index: int = 0):
        self.index = index

    def choose(self, options: Sequence[str], used: Collection[str]) -> str:
        if not options:
            raise ValueError("No phrase options to choose from")
        return options[min(self.index, len(options) - 1)]


# Singleton instance
_selector_instance: PhraseSelector | None = None


def get_phrase_selector() -> PhraseSelector:
    """
    Get the configured phrase selector singleton.

    Returns:
        Selector based on settings.PHRASE_SELECTION

    Raises:
        ValueError: If the strategy name is unknown
    """
    global _selector_instance

    if _selector_instance is None:
        strategy = settings.PHRASE_SELECTION
        if strategy == "random":
            _selector_instance = RandomPhraseSelector(seed=settings.PHRASE_SEED)
        elif strategy == "round_robin":
            _selector_instance = RoundRobinPhraseSelector()
        else:
            raise ValueError(f"Unknown phrase selection strategy: {strategy}")
        logger.info(f"Phrase selector initialized: {strategy}")

    return _selector_instance


def reset_phrase_selector() -> None:
    """Reset the selector singleton (useful for testing)."""
    global _selector_instance
    _selector_instance = None
