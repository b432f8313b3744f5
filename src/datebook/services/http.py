from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from hypercorn.asyncio import serve
from hypercorn.config import Config
from pydantic import BaseModel, Field, ValidationError

from ..api import ApiFunction, call_api, get_api_functions
from ..domain import (
    DatebookError,
    InvalidRangeError,
    MissingRequiredFieldError,
    StoreError,
    TemporalParseError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Datebook API", version="0.1.0")


class ApiCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


def _serialize_api_function(api_function: ApiFunction) -> dict:
    return {
        "name": api_function.name,
        "description": api_function.description,
        "category": api_function.category,
        "tags": list(api_function.tags),
        "parameters": api_function.parameter_schema,
    }


def _status_for(exc: DatebookError) -> int:
    if isinstance(exc, UnauthorizedError):
        return 403
    if isinstance(exc, StoreError):
        return 502
    if isinstance(exc, (TemporalParseError, InvalidRangeError, MissingRequiredFieldError)):
        return 400
    return 500


@app.get("/api/functions")
async def list_api_functions() -> JSONResponse:
    functions = [_serialize_api_function(func) for func in get_api_functions()]
    return JSONResponse({"functions": functions})


@app.post("/api/functions/{function_name}")
def invoke_api_function(function_name: str, request: ApiCallRequest) -> JSONResponse:
    try:
        result = call_api(function_name, **request.arguments)
    except KeyError as exc:
        logger.warning("API function not found: %s", function_name)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except DatebookError as exc:
        logger.warning("API function %s failed: %s", function_name, exc)
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc
    except (TypeError, ValidationError) as exc:
        logger.warning("API function %s rejected its arguments: %s", function_name, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    logger.debug("API function %s executed successfully", function_name)
    return JSONResponse({"name": function_name, "result": result})


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    config = Config()
    config.bind = [f"{host}:{port}"]
    asyncio.run(serve(app, config))
