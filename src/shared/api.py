"""FastAPI wiring shared by every Stockroom router."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers

from shared.errors import StockroomError


async def _stockroom_error_handler(request: Request, exc: StockroomError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Render domain errors as structured 4xx responses.

    Protean's own ValidationError / ObjectNotFoundError keep the handlers
    shipped with ``protean.integrations.fastapi``.
    """
    register_protean_handlers(app)
    app.add_exception_handler(StockroomError, _stockroom_error_handler)
