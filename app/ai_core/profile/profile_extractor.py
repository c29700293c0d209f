"""
Profile Extraction Module

Runs every category FieldExtractor over a message and assembles the partial
profile. A category that produced nothing is left out of the result entirely:
absence means "no new information", never "clear existing information".
"""

import logging
from typing import Iterable, Optional

from app.ai_core.profile.field_extractors import DEFAULT_FIELD_EXTRACTORS, FieldExtractor
from app.models.profile import PartialProfile

logger = logging.getLogger(__name__)


class ProfileFieldExtractor:
    """
    Extracts structured profile fragments from free-text messages.

    Extractors are pluggable so a category can be swapped for a different
    implementation (e.g. an NLP model) without touching the merge logic.
    """

    def __init__(self, extractors: Optional[Iterable[FieldExtractor]] = None):
        self.extractors = tuple(
            DEFAULT_FIELD_EXTRACTORS if extractors is None else extractors
        )

    def extract(self, message: str) -> PartialProfile:
        """
        Extract profile fragments from a message.

        Args:
            message: Raw user message (not lower-cased)

        Returns:
            Mapping of category -> sub-field values; {} when nothing matched
        """
        if not isinstance(message, str) or not message.strip():
            return {}

        partial: PartialProfile = {}
        for extractor in self.extractors:
            values = extractor.extract(message)
            if values:
                partial[extractor.category] = values

        if partial:
            logger.debug(f"Extracted profile categories: {list(partial.keys())}")
        return partial


_default_extractor = ProfileFieldExtractor()


def extract(message: str) -> PartialProfile:
    """Extract profile fragments with the default category extractors."""
    return _default_extractor.extract(message)
