"""MySQL / MariaDB connection and analyser dialect."""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..errors import ConnectionError
from .base import AnalyserDialect, CatalogConnection
from .queries import MYSQL_QUERIES, CatalogQuery
from .type_mappers import MySqlTypeClassifier, TypeClassifier

logger = logging.getLogger(__name__)


class MySqlConnection(CatalogConnection):
    """Async MySQL session backed by aiomysql."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 3306,
        user: str = "root",
        password: Optional[str] = None,
        database: Optional[str] = None,
        connect_timeout: int = 10,
    ):
        """Initialize the connection settings; nothing is opened yet.

        Args:
            host: Server host
            port: Server port
            user: User name
            password: Password (empty when not set)
            database: Default database of the session
            connect_timeout: Connect timeout in seconds
        """
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.connect_timeout = connect_timeout
        self._connection = None
        self._cursor_class = None

    async def connect(self):
        """Open the session if it is not open yet."""
        if self._connection is not None:
            return self._connection

        try:
            import aiomysql
        except ImportError:
            raise ConnectionError(
                "aiomysql is required. "
                "Install it with: pip install aiomysql"
            )

        logger.debug("Connecting to MySQL at %s:%s", self.host, self.port)
        try:
            self._connection = await aiomysql.connect(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password or "",
                db=self.database,
                connect_timeout=self.connect_timeout,
                autocommit=True,
            )
        except Exception as e:
            raise ConnectionError(
                f"Cannot connect to MySQL at {self.host}:{self.port}: {e}",
                details={"host": self.host, "port": self.port, "user": self.user},
            ) from e
        self._cursor_class = aiomysql.DictCursor
        return self._connection

    async def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        connection = await self.connect()
        async with connection.cursor(self._cursor_class) as cursor:
            await cursor.execute(sql, params)
            return list(await cursor.fetchall())

    async def close(self):
        if self._connection is not None:
            await self._connection.ensure_closed()
            self._connection = None


class MySqlDialect(AnalyserDialect):
    """Catalog shape and DDL conventions of MySQL / MariaDB."""

    name = "mysql"

    def __init__(self):
        self._type_classifier = MySqlTypeClassifier()

    @property
    def queries(self) -> Mapping[str, CatalogQuery]:
        return MYSQL_QUERIES

    @property
    def type_classifier(self) -> TypeClassifier:
        return self._type_classifier

    @staticmethod
    def quote_identifier(name: str) -> str:
        return "`" + name.replace("`", "``") + "`"

    def view_create_sql(self, view_name: str, definition: str) -> str:
        return f"CREATE VIEW {self.quote_identifier(view_name)} AS {definition}"

    def procedure_create_sql(self, procedure_name: str, body: Optional[str]) -> str:
        return (
            "DELIMITER //\n\n"
            f"CREATE PROCEDURE {self.quote_identifier(procedure_name)}()\n"
            f"{body}\n\n"
            "DELIMITER ;\n"
        )

    def function_create_sql(
        self,
        function_name: str,
        return_data_type: Optional[str],
        is_deterministic: bool,
        body: Optional[str],
    ) -> str:
        determinism = "DETERMINISTIC" if is_deterministic else "NOT DETERMINISTIC"
        return (
            f"CREATE FUNCTION {self.quote_identifier(function_name)}()\n"
            f"RETURNS {return_data_type} {determinism}\n"
            f"{body}"
        )
