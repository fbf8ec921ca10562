"""
Item runner: execute input items one after another and collect output items.

Each item is fully finished (handle closed) before the next starts. Failures
are either raised tagged with the item index, or, with continue_on_fail,
emitted as {"error": message} items. Configuration errors are always raised.
"""

import logging
from collections.abc import Sequence

from sqlite_gateway.core.errors import ConfigurationError, tag_error
from sqlite_gateway.engines import QueryExecutor
from sqlite_gateway.models import DriverOptions, ExecutionItem, OutputItem

logger = logging.getLogger(__name__)


def run(
    items: Sequence[ExecutionItem],
    *,
    options: DriverOptions | None = None,
    continue_on_fail: bool = False,
    executor: QueryExecutor | None = None,
) -> list[OutputItem]:
    """Run every item with QueryExecutor; return the concatenated output items."""
    qe = executor or QueryExecutor()
    output: list[OutputItem] = []

    for item_index, item in enumerate(items):
        try:
            output.extend(qe.execute(item, options))
        except ConfigurationError as e:
            logger.warning("Item %d rejected: %s", item_index, e)
            tag_error(e, item_index)
            raise
        except Exception as e:
            if continue_on_fail:
                logger.warning("Item %d failed, continuing: %s", item_index, e)
                output.append(
                    OutputItem(
                        json={"error": str(e) or "Unknown error"},
                        paired_item=item_index,
                    )
                )
                continue
            logger.error("Item %d failed: %s", item_index, e, exc_info=True)
            tagged = tag_error(e, item_index)
            if tagged is e:
                raise
            raise tagged from e

    return output
