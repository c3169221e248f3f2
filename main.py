from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from config import Settings, settings
from database.connection import ensure_indexes, init_db
from routes.user_routes import router as user_router
import logging
import uvicorn

# =====================================================
# * Configuración de Logging global
# =====================================================
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
)
logger = logging.getLogger("main")

# =====================================================
# * Errores -> {"error": mensaje}
# =====================================================
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    logger.warning(f"⚠️ Solicitud inválida en {request.url.path}: {messages}")
    return JSONResponse(status_code=400, content={"error": "; ".join(messages)})

async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Error no controlado en {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Error interno del servidor."})

# =====================================================
# * Inicialización de la aplicación
# =====================================================
def create_app(database=None, config: Settings = settings) -> FastAPI:
    """
    Construye la app. Si no se inyecta `database`, la conexión se abre al
    arrancar (lifespan) y un fallo termina el proceso.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "db", None) is None:
            app.state.db = init_db(config)
        else:
            ensure_indexes(app.state.db)
        logger.info(f"🌍 {config.PROJECT_NAME} backend iniciado en modo '{config.ENV}'.")
        yield

    app = FastAPI(
        title=f"{config.PROJECT_NAME} Backend",
        version=config.VERSION,
        debug=config.DEBUG,
        lifespan=lifespan,
    )
    app.state.db = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # =====================================================
    # * Registro de Rutas
    # =====================================================
    app.include_router(user_router, prefix="/users", tags=["Users"])
    logger.debug(" - /users -> UserRouter")

    @app.get("/", response_class=PlainTextResponse, summary="Ruta raíz del backend")
    def root():
        return f"Hello from {config.PROJECT_NAME}"

    return app

app = create_app()

# =====================================================
# * Arranque: conectar primero, luego escuchar
# =====================================================
def run():
    """
    Lanzador soportado (`users-api`): si MongoDB no responde, el proceso
    termina con código 1 antes de abrir el puerto. Con `uvicorn main:app`
    el fallo aborta el arranque pero el código de salida lo decide uvicorn.
    """
    db = init_db(settings)
    uvicorn.run(
        create_app(database=db),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )

if __name__ == "__main__":
    run()
