# app/api/__init__.py
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    #brak lub bledne body -> 400 zamiast domyslnego 422
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})
