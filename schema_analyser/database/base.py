"""Abstract seams for schema analysis.

The analyser is composed from two collaborators instead of being subclassed
per engine:

* a ``CatalogConnection`` that executes SQL and returns rows as mappings;
* an ``AnalyserDialect`` that supplies the engine's catalog query templates,
  its type classifier and the DDL text synthesised for views and routines.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .queries import CatalogQuery
from .type_mappers import TypeClassifier


class CatalogConnection(ABC):
    """Abstract database session used to run catalog queries.

    Queries are issued one at a time; each result set is returned fully
    buffered.
    """

    @abstractmethod
    async def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """Execute a query and return its rows.

        Args:
            sql: SQL text
            params: Optional positional parameters bound by the driver

        Returns:
            List of rows, each a mapping from column alias to value
        """
        pass

    @abstractmethod
    async def close(self):
        """Close the session."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class AnalyserDialect(ABC):
    """Engine strategy consumed by SchemaAnalyser."""

    name: str = "generic"

    @property
    @abstractmethod
    def queries(self) -> Mapping[str, CatalogQuery]:
        """Catalog query templates keyed by name."""
        pass

    @property
    @abstractmethod
    def type_classifier(self) -> TypeClassifier:
        """Classifier used when composing full column data types."""
        pass

    @abstractmethod
    def view_create_sql(self, view_name: str, definition: str) -> str:
        """Wrap a view definition into a CREATE VIEW statement."""
        pass

    @abstractmethod
    def procedure_create_sql(self, procedure_name: str, body: Optional[str]) -> str:
        """Build the CREATE PROCEDURE statement of a stored procedure."""
        pass

    @abstractmethod
    def function_create_sql(
        self,
        function_name: str,
        return_data_type: Optional[str],
        is_deterministic: bool,
        body: Optional[str],
    ) -> str:
        """Build the CREATE FUNCTION statement of a stored function."""
        pass
