from typing import Annotated

from fastapi import Depends

from sqlite_gateway.engines import QueryExecutor


def get_executor() -> QueryExecutor:
    return QueryExecutor()


ExecutorDep = Annotated[QueryExecutor, Depends(get_executor)]
