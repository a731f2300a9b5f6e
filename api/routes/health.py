import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.dependencies import get_database
from api.schemas import HealthResponse
from infrastructure.persistence.database import Database

logger = logging.getLogger(__name__)

router = APIRouter(tags=['health'])


@router.get('/health', response_model=HealthResponse, summary='Liveness and database check')
async def health_check(db: Annotated[Database, Depends(get_database)]):
	try:
		await db.health_check()
	except (SQLAlchemyError, OSError) as e:
		logger.error(f'Database health check failed: {e}')
		return JSONResponse(
			status_code=503, content={'status': 'unhealthy', 'database': 'unreachable'}
		)
	return HealthResponse(status='healthy', database='ok')
