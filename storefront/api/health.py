from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel, Field
import logging

from storefront import __version__
from storefront.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str = Field(..., description="`healthy` or `degraded`", example="healthy")
    service: str = Field(..., description="Service name", example="storefront-api")
    version: str = Field(..., description="Service version", example="1.0.0")
    database: str = Field(..., description="`ok` or `unavailable`", example="ok")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="""
    Pings the database with `SELECT 1`.

    Answers 200 when the store is reachable and 503 when it is not, so load
    balancers can take the instance out of rotation.
    """,
    responses={
        503: {"description": "Database unreachable"}
    }
)
def health(request: Request, response: Response):
    database = "ok"
    try:
        request.app.state.db.ping()
    except Exception as e:
        logger.warning(f"Health check: database ping failed: {e}")
        database = "unavailable"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        service=settings.app_name,
        version=__version__,
        database=database,
    )
