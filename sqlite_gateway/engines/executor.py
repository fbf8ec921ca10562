"""
QueryExecutor: run one ExecutionItem end to end.

Checks configuration, opens an ExecutionSession, reconciles parameters,
resolves the query type, dispatches to the SELECT / mutation / generic path
and shapes the outcome into output items. The handle is closed before
returning or raising.
"""

import logging

from sqlite_gateway.core.driver import DriverSelection, resolve_driver
from sqlite_gateway.core.errors import ConfigurationError
from sqlite_gateway.core.params import reconcile_params
from sqlite_gateway.core.result_transform import normalize_result
from sqlite_gateway.engines.session import ExecutionSession
from sqlite_gateway.engines.sql import classify, run_mutation, run_script, run_select
from sqlite_gateway.models import (
    MUTATION_QUERY_TYPES,
    DriverOptions,
    ExecutionItem,
    OutputItem,
    QueryTypeEnum,
)

_log = logging.getLogger(__name__)


def normalize_placeholders(query: str) -> str:
    """Rewrite every '$' to '@' so $name and @name bind the same way."""
    return query.replace("$", "@")


class QueryExecutor:
    """
    execute(item, options) -> list[OutputItem]
    """

    def resolve(self, options: DriverOptions | None) -> DriverSelection:
        opts = options or DriverOptions()
        return resolve_driver(
            use_default_driver=opts.use_default_driver,
            custom_driver_path=opts.custom_driver_path,
        )

    def execute(
        self,
        item: ExecutionItem,
        options: DriverOptions | None = None,
    ) -> list[OutputItem]:
        """
        Run item against its database file.

        Raises ConfigurationError (before any handle is opened) for an empty
        db_path/query or a missing custom driver; driver errors propagate as is.
        """
        if not item.db_path:
            raise ConfigurationError("No database path provided.")
        if not item.query:
            raise ConfigurationError("No query provided.")
        sql = normalize_placeholders(item.query)
        selection = self.resolve(options)

        with ExecutionSession(item.db_path, driver=selection) as session:
            params = reconcile_params(item.variables, item.args)
            query_type = classify(item.query, item.query_type)
            _log.debug(
                "Executing %s statement on %s with params %s",
                query_type.value,
                item.db_path,
                sorted(params),
            )

            is_batch = False
            if query_type == QueryTypeEnum.SELECT:
                result, is_batch = run_select(
                    session.conn, sql, params, share_safe=session.share_safe
                )
            elif query_type in MUTATION_QUERY_TYPES:
                result = run_mutation(session.conn, sql, params)
            else:
                result = run_script(session.conn, sql, params)

        return normalize_result(
            result,
            query_type,
            is_batch=is_batch,
            array_field_name=item.array_field_name,
        )
