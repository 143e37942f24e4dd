"""Client facade.

The Client owns a Session and routes statements through the mappers.
Positional ``*values`` are bound as statement parameters.
"""

from __future__ import annotations

import logging
from typing import Any

from row_scan.adapters.protocol import Session
from row_scan.core.connection import DEFAULT_PREFIX, ConfigSource, ConnectionConfig, open_session
from row_scan.core.exceptions import RowScanError, UnexpectedDestinationKind
from row_scan.core.logger import Logger
from row_scan.core.params import values_to_params
from row_scan.mapping.conditional import ConditionalMapper
from row_scan.mapping.destination import DestinationKind, resolve_destination
from row_scan.mapping.result import ResultMapper, execute

_logger = logging.getLogger(__name__)


class Client:
    """Synchronous mapping client over a Session."""

    def __init__(self, session: Session, logger: Logger | None = None) -> None:
        self._session = session
        self._logger = logger or _logger
        self._mapper = ResultMapper(session, self._logger)
        self._conditional = ConditionalMapper(session, self._logger)

    @classmethod
    def from_config(cls, config: ConnectionConfig, logger: Logger | None = None) -> Client:
        """Open a session for *config* and wrap it.

        Args:
            config: ConnectionConfig instance
            logger: Optional logger

        Returns:
            Client instance
        """
        log = logger or _logger
        try:
            session = open_session(config)
        except RowScanError as e:
            log.error("error connecting to %s: %s", config.driver, e)
            raise
        log.info("connected to %s (database=%s)", config.driver, config.database)
        return cls(session, log)

    @classmethod
    def from_source(
        cls,
        source: ConfigSource,
        prefix: str = DEFAULT_PREFIX,
        logger: Logger | None = None,
    ) -> Client:
        """Build a Client from a ``get(key)`` configuration source."""
        return cls.from_config(ConnectionConfig.from_source(source, prefix), logger)

    @property
    def session(self) -> Session:
        return self._session

    def query(self, result: Any, statement: str, *values: Any, into: type | None = None) -> int:
        """Map all rows of *statement* into *result* (record or list)."""
        return self._mapper.map(result, statement, values_to_params(values), into=into)

    def query_row(self, result: Any, statement: str, *values: Any) -> int:
        """Map the first row of *statement* into the record *result*.

        Returns 0 and leaves *result* untouched when no row matches.
        """
        if resolve_destination(result).kind is not DestinationKind.RECORD:
            raise UnexpectedDestinationKind(type(result).__name__)
        return self._mapper.map(result, statement, values_to_params(values))

    def query_cas(self, result: Any, statement: str, *values: Any) -> bool:
        """Run a conditional write and reconcile *result* with the stored row."""
        return self._conditional.map_conditional(result, statement, values_to_params(values))

    def exec(self, statement: str, *values: Any) -> None:
        """Execute a statement, discarding any rows."""
        rows = execute(self._session, statement, values_to_params(values))
        rows.close()

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
