"""Database-specific data type classification."""

import re
from abc import ABC, abstractmethod
from typing import Optional


class TypeClassifier(ABC):
    """Abstract base class for classifying raw catalog type names."""

    @abstractmethod
    def is_string_family(self, data_type: Optional[str]) -> bool:
        """Whether the type takes a character length, e.g. ``varchar(n)``."""
        pass

    @abstractmethod
    def is_numeric_family(self, data_type: Optional[str]) -> bool:
        """Whether the type takes precision and scale, e.g. ``decimal(p,s)``."""
        pass


class MySqlTypeClassifier(TypeClassifier):
    """Type classifier for MySQL / MariaDB ``DATA_TYPE`` values."""

    STRING_PATTERN = re.compile(r"char|binary", re.IGNORECASE)
    NUMERIC_PATTERN = re.compile(r"numeric|decimal", re.IGNORECASE)

    def is_string_family(self, data_type: Optional[str]) -> bool:
        return bool(data_type) and bool(self.STRING_PATTERN.search(data_type))

    def is_numeric_family(self, data_type: Optional[str]) -> bool:
        return bool(data_type) and bool(self.NUMERIC_PATTERN.search(data_type))
