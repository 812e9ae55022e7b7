"""
POST /query: run one parameterized statement with the configured Oracle login.

Response envelope: { success, message, data } where data holds one entry per
row, or a single entry with the full result when includeMetadata is set.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from oraquery.core.config import settings
from oraquery.core.param_type import ParameterBindingError
from oraquery.core.response import error_envelope, success_envelope
from oraquery.engines import QueryRunner
from oraquery.engines.sql import QueryExecutionError
from oraquery.models import QueryRequest

router = APIRouter(prefix="/query", tags=["query"])

_log = logging.getLogger(__name__)


@router.post("", response_model=None)
def run_query(body: QueryRequest) -> dict | JSONResponse:
    """
    Compile binds, run the statement, return the output items.

    400 for invalid parameters, 502 when the database rejects the statement
    or cannot be reached.
    """
    try:
        items = QueryRunner().run(
            body.query,
            body.params,
            body.options,
            credentials=settings.oracle_credentials,
        )
    except ParameterBindingError as e:
        _log.warning("Rejected query parameters: %s", e)
        return JSONResponse(status_code=400, content=error_envelope(str(e)))
    except QueryExecutionError as e:
        return JSONResponse(
            status_code=502, content=error_envelope(str(e), code=e.code)
        )
    return success_envelope(items)
