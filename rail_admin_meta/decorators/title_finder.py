"""
Title field discovery.

Picks the general field that best names a record of a model, for use as its
display title.
"""

import logging
from typing import Optional

from ..config_proxy import get_setting
from .types import FieldMap

logger = logging.getLogger(__name__)

_SHORT_TEXT_TYPES = ("string", "citext")


class TitleFieldFinder:
    """
    Find the field that looks like a name or title of a record.

    Only general fields whose type is one of ``title_field_types`` are
    candidates, in field order. The first rule that matches wins:

    1. a candidate named exactly like one of ``title_field_names``, checked
       in the order of that setting;
    2. the first candidate whose name contains one of those words;
    3. the first short-text candidate, then the first text candidate;
    4. nothing: ``find()`` returns ``None``.
    """

    def __init__(self, general_fields: FieldMap, model_label: str = ""):
        self.general_fields = general_fields
        self.model_label = model_label
        self._found = False
        self._title_field: Optional[str] = None

    def find(self) -> Optional[str]:
        if not self._found:
            self._title_field = self._find()
            self._found = True
            logger.debug(f"Title field for {self.model_label}: {self._title_field}")
        return self._title_field

    def _find(self) -> Optional[str]:
        types = set(get_setting("title_field_types") or ())
        words = [str(word).lower() for word in get_setting("title_field_names") or ()]
        candidates = [
            name
            for name, metadata in self.general_fields.items()
            if metadata.type in types
        ]
        if not candidates:
            return None

        lowered = {name.lower(): name for name in candidates}
        for word in words:
            if word in lowered:
                return lowered[word]

        for name in candidates:
            if any(word in name.lower() for word in words):
                return name

        for name in candidates:
            if self.general_fields[name].type in _SHORT_TEXT_TYPES:
                return name
        return candidates[0]


__all__ = ["TitleFieldFinder"]
