from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from reclamos.api.alerts import router as alerts_router
from reclamos.api.calendar import router as calendar_router
from reclamos.api.cases import router as cases_router
from reclamos.api.reports import router as reports_router
from reclamos.core.config import settings
from reclamos.core.database import init_db
from reclamos.core.exceptions import ReclamosException, http_status_for
from reclamos.core.logger import get_logger


# =========================================================
# CARGA DE ENTORNO
# =========================================================

load_dotenv()

logger = get_logger()


# =========================================================
# FASTAPI APP (ENTRYPOINT ASGI)
# =========================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    tables = init_db()
    logger.info("Base de datos inicializada", action="startup", tables=tables)
    yield


app = FastAPI(
    title=settings.app_name,
    description="API para la gestión de reclamos de consumidores: casos, alertas y reportes",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(cases_router)
app.include_router(alerts_router)
app.include_router(reports_router)
app.include_router(calendar_router)


# =========================================================
# ERRORES DE DOMINIO → JSON
# =========================================================


@app.exception_handler(ReclamosException)
async def reclamos_exception_handler(request: Request, exc: ReclamosException):
    status_code = http_status_for(exc)
    if status_code >= 500:
        logger.error(
            exc.message,
            action="api_error",
            error=exc,
            path=request.url.path,
            error_code=exc.code,
        )
    else:
        logger.warning(exc.message, action="api_error", path=request.url.path, error_code=exc.code)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# =========================================================
# ENDPOINTS DE SERVICIO
# =========================================================


@app.get("/")
async def root():
    """Endpoint raíz."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "status": "operational",
        "endpoints": [
            "GET/POST /cases",
            "GET/PUT/DELETE /cases/{case_id}",
            "POST /cases/{case_id}/seguimiento",
            "GET /cases/export/csv",
            "GET /alerts",
            "GET /reports",
            "GET /calendar/events",
        ],
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
