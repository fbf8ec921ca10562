"""
Gateway models.

Enums: QueryTypeEnum, DriverStrategyEnum.
Request schemas: QueryVariable, ExecutionItem, DriverOptions, ExecuteRequest.
Output: OutputItem.
"""

from enum import Enum
from typing import Any, NamedTuple

from pydantic import Field
from sqlmodel import SQLModel

from sqlite_gateway.core.config import settings

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class QueryTypeEnum(str, Enum):
    """Execution mode of a statement. AUTO is resolved by the classifier."""

    AUTO = "AUTO"
    CREATE = "CREATE"
    DELETE = "DELETE"
    INSERT = "INSERT"
    SELECT = "SELECT"
    UPDATE = "UPDATE"


MUTATION_QUERY_TYPES = frozenset(
    {QueryTypeEnum.INSERT, QueryTypeEnum.UPDATE, QueryTypeEnum.DELETE}
)


class DriverStrategyEnum(str, Enum):
    """How the SQLite driver module is selected (custom > default > bundled)."""

    CUSTOM = "custom"
    DEFAULT = "default"
    BUNDLED = "bundled"


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class QueryVariable(SQLModel):
    """One form variable. name may carry a leading @ or $."""

    name: str = ""
    value: str = ""


class ExecutionItem(SQLModel):
    """
    One input unit: database file, statement, mode, parameters, output shaping.

    db_path and query are not validated here; empty values are reported as
    ConfigurationError tagged with the item index at execution time.
    """

    db_path: str = ""
    query: str = ""
    query_type: QueryTypeEnum = QueryTypeEnum.AUTO
    variables: list[QueryVariable] = Field(default_factory=list)
    args: str | dict[str, Any] = Field(
        default="{}",
        description="JSON object (or its text) merged over variables; invalid JSON is ignored.",
    )
    array_field_name: str = Field(
        default="",
        description="If set, SELECT results are returned as one item with this field holding all rows.",
    )


class DriverOptions(SQLModel):
    """Driver selection shared by every item of a request."""

    use_default_driver: bool = Field(
        default_factory=lambda: settings.SQLITE_USE_DEFAULT_DRIVER,
        description="Use the standard library sqlite3 driver instead of the bundled one.",
    )
    custom_driver_path: str | None = Field(
        default=None,
        description="Path to a DB-API 2 SQLite driver module file; must exist.",
    )


class ExecuteRequest(SQLModel):
    """Body for POST /execute/."""

    items: list[ExecutionItem] = Field(default_factory=list)
    options: DriverOptions = Field(default_factory=DriverOptions)
    continue_on_fail: bool = Field(
        default=False,
        description="Emit failed items as {'error': message} instead of aborting the request.",
    )


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class OutputItem(NamedTuple):
    json: dict[str, Any]
    paired_item: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"json": self.json, "paired_item": self.paired_item}
