"""
Phrase Catalog for the Emoji Guesser Game

Handles loading and validation of the YAML file containing the emoji
phrases, and samples unused phrases for new rounds.
"""

import yaml
import random
from typing import Any, Collection, Dict, List, Optional
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 3


@dataclass(frozen=True)
class PhraseRecord:
    """An emoji sequence and the phrase it stands for."""
    emojis: str
    answer: str
    difficulty: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'emojis': self.emojis,
            'answer': self.answer,
            'difficulty': self.difficulty
        }


class ContentValidationError(Exception):
    """Raised when YAML content validation fails."""
    pass


class PhraseCatalog:
    """Read-only collection of phrases with unused-phrase sampling."""

    def __init__(self, yaml_file_path: str = "phrases.yaml", rng: Optional[random.Random] = None):
        """
        Initialize PhraseCatalog with path to YAML file.

        Args:
            yaml_file_path: Path to the YAML file containing phrases
            rng: Random source used for sampling; defaults to the module RNG
        """
        self.yaml_file_path = yaml_file_path
        self.phrases: List[PhraseRecord] = []
        self._rng = rng or random.Random()
        self._loaded = False

    def load_phrases_from_yaml(self) -> None:
        """
        Load phrases from the YAML file.

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ContentValidationError: If YAML structure is invalid
            yaml.YAMLError: If YAML parsing fails
        """
        try:
            with open(self.yaml_file_path, 'r', encoding='utf-8') as file:
                data = yaml.safe_load(file)

            self.validate_yaml_structure(data)
            self.load_phrases(self._parse_phrases(data))
            logger.info(f"Successfully loaded {len(self.phrases)} phrases from {self.yaml_file_path}")

        except FileNotFoundError:
            logger.error(f"YAML file not found: {self.yaml_file_path}")
            raise
        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}")
            raise
        except ContentValidationError as e:
            logger.error(f"Content validation error: {e}")
            raise

    def load_phrases(self, phrases: List[PhraseRecord]) -> None:
        """Replace the catalog contents with an in-memory list of phrases."""
        self.phrases = list(phrases)
        self._loaded = True

    def validate_yaml_structure(self, data: Any) -> None:
        """
        Validate the structure of loaded YAML data.

        Raises:
            ContentValidationError: If structure is invalid
        """
        if not isinstance(data, dict):
            raise ContentValidationError("YAML root must be a dictionary")

        if 'phrases' not in data:
            raise ContentValidationError("YAML must contain 'phrases' key")

        phrases = data['phrases']
        if not isinstance(phrases, list):
            raise ContentValidationError("'phrases' must be a list")

        if len(phrases) == 0:
            raise ContentValidationError("'phrases' list cannot be empty")

        required_fields = {'emojis', 'answer', 'difficulty'}

        for i, item in enumerate(phrases):
            if not isinstance(item, dict):
                raise ContentValidationError(f"Phrase item {i} must be a dictionary")

            missing_fields = required_fields - set(item.keys())
            if missing_fields:
                raise ContentValidationError(
                    f"Phrase item {i} missing required fields: {missing_fields}"
                )

            for field in ['emojis', 'answer']:
                if not isinstance(item[field], str):
                    raise ContentValidationError(
                        f"Phrase item {i} field '{field}' must be a string"
                    )
                if not item[field].strip():
                    raise ContentValidationError(
                        f"Phrase item {i} field '{field}' cannot be empty"
                    )

            difficulty = item['difficulty']
            # bool is an int subclass; reject it explicitly
            if isinstance(difficulty, bool) or not isinstance(difficulty, int):
                raise ContentValidationError(
                    f"Phrase item {i} 'difficulty' must be an integer"
                )
            if not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY:
                raise ContentValidationError(
                    f"Phrase item {i} 'difficulty' must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}"
                )

        answers = [item['answer'].strip().lower() for item in phrases]
        if len(answers) != len(set(answers)):
            raise ContentValidationError("Duplicate phrase answers found")

    def _parse_phrases(self, data: Dict[str, Any]) -> List[PhraseRecord]:
        return [
            PhraseRecord(
                emojis=item['emojis'].strip(),
                answer=item['answer'].strip(),
                difficulty=item['difficulty']
            )
            for item in data['phrases']
        ]

    def sample(self, excluding: Collection[PhraseRecord] = ()) -> Optional[PhraseRecord]:
        """
        Pick a phrase uniformly at random among those not in ``excluding``.

        Returns:
            A PhraseRecord, or None when every phrase has been used
        """
        available = [phrase for phrase in self.phrases if phrase not in excluding]
        if not available:
            return None
        return self._rng.choice(available)

    def has_unused(self, excluding: Collection[PhraseRecord] = ()) -> bool:
        """Check whether at least one phrase is not in ``excluding``."""
        return any(phrase not in excluding for phrase in self.phrases)

    def is_loaded(self) -> bool:
        """Check if phrases have been loaded."""
        return self._loaded

    def get_phrase_count(self) -> int:
        """Get the number of loaded phrases."""
        return len(self.phrases) if self.is_loaded() else 0
