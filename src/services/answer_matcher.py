"""
Answer Matcher for the Emoji Guesser Game

Normalizes free-text guesses and compares them to the target phrase,
tolerating small typos.
"""

import logging
import re

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r'[^\w\s]')
_WHITESPACE = re.compile(r'\s+')


class AnswerMatcher:
    """Fuzzy comparison of a guess against an answer."""

    SHORT_ANSWER_LENGTH = 5
    SHORT_ANSWER_MAX_DISTANCE = 1
    LONG_ANSWER_MAX_DISTANCE = 2

    @staticmethod
    def normalize(text: str) -> str:
        """Lowercase, drop punctuation, collapse whitespace and trim."""
        text = _NON_WORD.sub('', text.lower())
        return _WHITESPACE.sub(' ', text).strip()

    @staticmethod
    def levenshtein_distance(a: str, b: str) -> int:
        """Edit distance with unit-cost insertion, deletion and substitution."""
        if a == b:
            return 0
        if len(a) < len(b):
            a, b = b, a
        if not b:
            return len(a)

        previous = list(range(len(b) + 1))
        for i, char_a in enumerate(a, start=1):
            current = [i]
            for j, char_b in enumerate(b, start=1):
                current.append(min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                ))
            previous = current
        return previous[-1]

    def max_distance_for(self, normalized_answer: str) -> int:
        if len(normalized_answer) > self.SHORT_ANSWER_LENGTH:
            return self.LONG_ANSWER_MAX_DISTANCE
        return self.SHORT_ANSWER_MAX_DISTANCE

    def is_acceptable(self, guess: str, answer: str) -> bool:
        """
        Decide whether a guess should count as the answer.

        Both strings are normalized first. Identical forms always match;
        otherwise the edit distance and the length difference must both stay
        within the tolerance for the answer's length.
        """
        normalized_guess = self.normalize(guess)
        normalized_answer = self.normalize(answer)

        if normalized_guess == normalized_answer:
            return True

        max_distance = self.max_distance_for(normalized_answer)
        if abs(len(normalized_guess) - len(normalized_answer)) > max_distance:
            return False

        distance = self.levenshtein_distance(normalized_guess, normalized_answer)
        logger.debug(f"Guess {normalized_guess!r} is {distance} edits from answer (max {max_distance})")
        return distance <= max_distance
