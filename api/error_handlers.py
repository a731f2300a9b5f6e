import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import (
	CurrencyNotFoundError,
	PersistenceError,
	UserAlreadyExistsError,
	ValidationError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(ValidationError)
	async def validation_error_handler(request: Request, exc: ValidationError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(CurrencyNotFoundError)
	async def currency_not_found_handler(request: Request, exc: CurrencyNotFoundError):
		return JSONResponse(status_code=404, content={'detail': str(exc)})

	@app.exception_handler(UserAlreadyExistsError)
	async def user_exists_handler(request: Request, exc: UserAlreadyExistsError):
		return JSONResponse(status_code=409, content={'detail': str(exc)})

	@app.exception_handler(PersistenceError)
	async def persistence_error_handler(request: Request, exc: PersistenceError):
		logger.error(f'Persistence error: {exc}')
		return JSONResponse(status_code=503, content={'detail': 'Storage temporarily unavailable'})
