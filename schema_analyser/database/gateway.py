"""Query gateway: runs named catalog queries and validates their rows."""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import ValidationError

from ..errors import AnalyserError, QueryError, RowValidationError, UnknownQueryError
from .base import CatalogConnection
from .models import ObjectKind
from .progress import NullProgressSink, ProgressSink
from .queries import DATABASE_MARKER, OBJECT_ID_CONDITION, CatalogQuery
from .rows import CatalogRow

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=CatalogRow)


@dataclass(frozen=True)
class ObjectFilter:
    """Restricts a run to the single object ``pure_name`` of ``kind``."""
    kind: ObjectKind
    pure_name: str


class QueryGateway:
    """Issues catalog queries against one connection.

    ``query`` is strict and raises QueryError when the server fails.
    ``safe_query`` is tolerant: a server failure is logged and replaced by an
    empty result, so unsupported features degrade to empty model sections.
    """

    def __init__(
        self,
        connection: CatalogConnection,
        queries: Mapping[str, CatalogQuery],
        database_name: str,
        progress: Optional[ProgressSink] = None,
        object_filter: Optional[ObjectFilter] = None,
    ):
        self.connection = connection
        self.queries = queries
        self.database_name = database_name
        self.progress = progress or NullProgressSink()
        self.object_filter = object_filter

    def feedback(self, message: Optional[str]):
        """Send a stage message to the progress sink."""
        self.progress.notify(message)

    def create_query(self, name: str) -> Optional[Tuple[str, Optional[Tuple[Any, ...]]]]:
        """Render a template into SQL text and bind parameters.

        Returns:
            ``(sql, params)``, or None when an object filter is active and the
            template does not describe the filtered kind
        """
        template = self.queries.get(name)
        if template is None:
            raise UnknownQueryError(name)

        sql = template.sql.replace(DATABASE_MARKER, self.database_name)
        if self.object_filter is None:
            return sql.replace(OBJECT_ID_CONDITION, "is not null"), None

        if self.object_filter.kind not in template.kinds:
            return None
        count = sql.count(OBJECT_ID_CONDITION)
        sql = sql.replace(OBJECT_ID_CONDITION, "= %s")
        params = (self.object_filter.pure_name,) * count
        return sql, params or None

    async def query(self, name: str, row_type: Type[RowT], message: Optional[str] = None) -> List[RowT]:
        """Run a query that must succeed."""
        return await self._run(name, row_type, message, tolerant=False)

    async def safe_query(self, name: str, row_type: Type[RowT], message: Optional[str] = None) -> List[RowT]:
        """Run a query whose failure yields an empty result."""
        return await self._run(name, row_type, message, tolerant=True)

    async def _run(
        self,
        name: str,
        row_type: Type[RowT],
        message: Optional[str],
        tolerant: bool,
    ) -> List[RowT]:
        if message is not None:
            self.feedback(message)

        rendered = self.create_query(name)
        if rendered is None:
            logger.debug("Skipping catalog query '%s' for %s filter", name, self.object_filter.kind.value)
            return []
        sql, params = rendered

        logger.debug("Running catalog query '%s'", name)
        try:
            rows = await self.connection.query(sql, params)
        except Exception as e:
            if tolerant:
                logger.warning("Catalog query '%s' failed, using empty result: %s", name, e)
                return []
            if isinstance(e, AnalyserError):
                raise
            raise QueryError(name, f"Catalog query '{name}' failed: {e}") from e

        return self._validate(name, row_type, rows)

    @staticmethod
    def _validate(name: str, row_type: Type[RowT], rows: Sequence[Mapping[str, Any]]) -> List[RowT]:
        try:
            return [row_type.model_validate(row) for row in rows]
        except ValidationError as e:
            raise RowValidationError(
                name,
                f"Unexpected row shape from catalog query '{name}'",
                errors=e.errors(include_url=False),
            ) from e
