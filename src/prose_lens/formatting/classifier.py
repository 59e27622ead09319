"""Rule-based classification of single lines of prose.

Lines are matched against an ordered cascade of small predicates. The
first predicate that matches decides the category; anything left over
is narration. Only surface features are used: opening and closing
punctuation, letter case, repetition and length.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from prose_lens.config import get_settings
from prose_lens.formatting.ir import LineCategory


# Characters that open a line of dialogue
DIALOGUE_OPENERS = frozenset('"«»“”')

# Characters that wrap a quoted thought
THOUGHT_QUOTES = frozenset("'‘’")

# Punctuation allowed in an all-caps sound effect line
SFX_CAPS_SYMBOLS = r"!?~*─—"

# Characters that make up a bare symbol reaction line
SYMBOL_LINE_CHARS = r".…!?─—"

SFX_MAX_LENGTH = 40
SFX_EXCLAMATION_MAX_LENGTH = 25
INTERJECTION_MAX_LENGTH = 12
SYMBOL_LINE_MAX_LENGTH = 15
QUESTION_THOUGHT_MAX_LENGTH = 100


@dataclass(frozen=True)
class LetterRanges:
    """Non-ASCII letters accepted by the classifier's character classes.

    Both values are inserted verbatim into regex character classes, so
    they may use ranges like ``À-Ú``. ASCII A-Z / a-z are always included.

    Attributes:
        upper: Extra uppercase letters (default covers French accents)
        lower: Extra lowercase letters
    """

    upper: str = "À-ÚÉÈ"
    lower: str = "à-ú"

    @classmethod
    def from_settings(cls) -> "LetterRanges":
        settings = get_settings()
        return cls(upper=settings.upper_letters, lower=settings.lower_letters)


class LineClassifier:
    """Classify a line of prose into a LineCategory.

    Rules, in priority order:
    1. [Bracketed] lines are game/system badges
    2. Lines opening with a double quote or guillemet are dialogue
    3. Lines wrapped in single quotes are thoughts
    4. Short punchy lines (repeated words, all caps, exclamations,
       ellipses, dashes) are sound effects
    5. Very short interjections like "Tsk." are sound effects
    6. Short lines made only of punctuation are sound effects
    7. Short questions that are not dialogue are thoughts
    8. Everything else is narration
    """

    def __init__(self, letters: Optional[LetterRanges] = None) -> None:
        self.letters = letters or LetterRanges()
        upper = f"A-Z{self.letters.upper}"
        lower = f"a-z{self.letters.lower}"

        self._repeated_word = re.compile(
            rf"(?:[{upper}{lower}][{lower}]*[.!]\s*){{2,}}"
        )
        self._shouted = re.compile(rf"[{upper}\s{SFX_CAPS_SYMBOLS}]+")
        self._ellipsis = re.compile(r"\.{3,}")
        self._dash = re.compile(r"─+\s*!?")
        self._interjection = re.compile(rf"[{upper}{lower}]+[.!]+")
        self._symbols = re.compile(rf"[{SYMBOL_LINE_CHARS}]+")
        self._badge = re.compile(r"\[.+\]")

        self.rules: tuple[tuple[LineCategory, Callable[[str], bool]], ...] = (
            (LineCategory.GAME_BADGE, self.is_game_badge),
            (LineCategory.DIALOGUE, self.is_dialogue),
            (LineCategory.THOUGHT, self.is_quoted_thought),
            (LineCategory.SFX, self.is_sound_effect),
            (LineCategory.SFX, self.is_interjection),
            (LineCategory.SFX, self.is_symbol_line),
            (LineCategory.THOUGHT, self.is_question_thought),
        )

    def classify(self, line: str) -> LineCategory:
        """Return the category of a line. Never raises."""
        trimmed = line.strip()
        if not trimmed:
            return LineCategory.EMPTY

        for category, matches in self.rules:
            if matches(trimmed):
                return category
        return LineCategory.NARRATION

    # The predicates below expect text that is already trimmed and non-empty.

    def is_game_badge(self, text: str) -> bool:
        return self._badge.fullmatch(text) is not None

    def is_dialogue(self, text: str) -> bool:
        return text[0] in DIALOGUE_OPENERS

    def is_quoted_thought(self, text: str) -> bool:
        return text[0] in THOUGHT_QUOTES and text[-1] in THOUGHT_QUOTES

    def is_sound_effect(self, text: str) -> bool:
        """Match onomatopoeia such as "Huff. Huff.", "BOOM", "Boom!" or "...".

        Only lines shorter than SFX_MAX_LENGTH qualify.
        """
        if len(text) >= SFX_MAX_LENGTH:
            return False
        return (
            self._repeated_word.fullmatch(text) is not None
            or self._shouted.fullmatch(text) is not None
            or (text.endswith("!") and len(text) < SFX_EXCLAMATION_MAX_LENGTH)
            or self._ellipsis.fullmatch(text) is not None
            or self._dash.fullmatch(text) is not None
        )

    def is_interjection(self, text: str) -> bool:
        """Match short interjections like "Tsk.", "Hmm!" or "Ohh."."""
        return (
            len(text) < INTERJECTION_MAX_LENGTH
            and self._interjection.fullmatch(text) is not None
        )

    def is_symbol_line(self, text: str) -> bool:
        return (
            len(text) < SYMBOL_LINE_MAX_LENGTH
            and self._symbols.fullmatch(text) is not None
        )

    def is_question_thought(self, text: str) -> bool:
        return (
            len(text) < QUESTION_THOUGHT_MAX_LENGTH
            and text.endswith("?")
            and text[0] not in DIALOGUE_OPENERS
        )


_default_classifier: Optional[LineClassifier] = None


def get_classifier() -> LineClassifier:
    """Get the shared classifier built from the configured letter ranges.

    The classifier is rebuilt whenever the current settings name
    different ranges, e.g. after load_settings().
    """
    global _default_classifier
    letters = LetterRanges.from_settings()
    if _default_classifier is None or _default_classifier.letters != letters:
        _default_classifier = LineClassifier(letters)
    return _default_classifier


def classify_line(line: str) -> LineCategory:
    """Classify a line with the shared classifier."""
    return get_classifier().classify(line)
