"""
RedRock Query

Structured builder for the service's SQL-like query sublanguage and the
"exactly one row" lookup policy shared by every resource type.

The remote service is expected to keep names unique within the predicates
used for lookups; a lookup that matches zero or several rows is an error,
never a partial success.
"""

import logging
import re
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..protocols import NotFoundError, TooManyResultsError, TransportProtocol
from ..restapi import GenericMapResponse

logger = logging.getLogger(__name__)

QUERY_API = "/RedRock/query"

# Default paging/caching hints sent with every query
DEFAULT_QUERY_ARGS: Mapping[str, Any] = MappingProxyType({"Caching": -1})

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def quote(value: Any) -> str:
    """Render a literal: booleans bare, everything else single-quoted with quotes doubled"""
    if isinstance(value, bool):
        return "true" if value else "false"
    return "'" + str(value).replace("'", "''") + "'"


class QueryBuilder:
    """
    Equality predicates ANDed together.

    Example:
        >>> QueryBuilder("DataVault").equals("SecretName", "db").build()
        "SELECT * FROM DataVault WHERE 1=1 AND SecretName='db'"
    """

    def __init__(self, table: str):
        self.table = self._check_identifier(table)
        self.predicates: List[Tuple[str, Any]] = []

    @staticmethod
    def _check_identifier(name: str) -> str:
        if not _IDENTIFIER.match(name or ""):
            raise ValueError(f"Invalid query identifier: {name!r}")
        return name

    def equals(self, column: str, value: Any) -> "QueryBuilder":
        """Add ``column=value``"""
        self.predicates.append((self._check_identifier(column), value))
        return self

    def equals_if(self, column: str, value: Any) -> "QueryBuilder":
        """Add ``column=value`` only when value is non-empty"""
        if value not in (None, ""):
            self.equals(column, value)
        return self

    def build(self) -> str:
        script = f"SELECT * FROM {self.table} WHERE 1=1"
        for column, value in self.predicates:
            script += f" AND {column}={quote(value)}"
        return script

    def __str__(self) -> str:
        return self.build()


def redrock_query(
    client: TransportProtocol,
    query: str,
    args: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """
    Submit a query script.

    Args:
        client: Transport
        query: Query script
        args: Paging/caching hints, defaults to DEFAULT_QUERY_ARGS

    Returns:
        The raw ``Results`` list
    """
    query_arg = {
        "Script": query,
        "Args": dict(DEFAULT_QUERY_ARGS) if args is None else args,
    }
    logger.debug(f"Query arguments: {query_arg}")

    resp = client.call(QUERY_API, query_arg, GenericMapResponse)
    if not resp.success:
        logger.error(f"Query failed: {resp.message}")
    resp.raise_for_failure()

    return resp.result.get("Results") or []


def query_vault_object(client: TransportProtocol, query: str) -> Dict[str, Any]:
    """
    Run a query that must match exactly one row and return that row.

    Raises:
        NotFoundError: no rows
        TooManyResultsError: more than one row
    """
    results = redrock_query(client, query)

    if len(results) == 0:
        logger.error(f"Query returns 0 object: {query}")
        raise NotFoundError()
    if len(results) > 1:
        logger.error(f"Query returns too many objects (found {len(results)}, expected 1): {query}")
        raise TooManyResultsError(len(results))

    return results[0].get("Row") or {}


__all__ = [
    "QUERY_API",
    "DEFAULT_QUERY_ARGS",
    "QueryBuilder",
    "quote",
    "redrock_query",
    "query_vault_object",
]
