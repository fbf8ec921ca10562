"""
POST /execute/: run a batch of ExecutionItems and return output items.

runner.run is sync/blocking (SQLite driver calls); it runs in a worker thread
so the event loop keeps accepting requests.
"""

import asyncio
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from sqlite_gateway.api.deps import ExecutorDep
from sqlite_gateway.core import runner
from sqlite_gateway.core.errors import ConfigurationError, GatewayError
from sqlite_gateway.core.response import format_error, format_response
from sqlite_gateway.models import ExecuteRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/execute", tags=["execute"])


@router.post("/", response_model=None)
async def execute_items(body: ExecuteRequest, executor: ExecutorDep) -> JSONResponse:
    """
    Execute every item in order against its SQLite file.

    200: { success: true, message: null, data: [{json, paired_item}, ...] }
    400: configuration error; 500: execution error. Both carry item_index.
    """
    try:
        items = await asyncio.to_thread(
            runner.run,
            body.items,
            options=body.options,
            continue_on_fail=body.continue_on_fail,
            executor=executor,
        )
    except ConfigurationError as e:
        return JSONResponse(status_code=400, content=format_error(e))
    except GatewayError as e:
        return JSONResponse(status_code=500, content=format_error(e))
    return JSONResponse(content=format_response(items))
