import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from naijacalc.config import Settings, get_settings
from naijacalc.api import bmi, tax, inflation, history
from naijacalc.core.calculators import BMICalculator, InflationCalculator, PAYECalculator
from naijacalc.core.history import HistoryStore, InMemoryHistoryStore, JSONFileHistoryStore
from naijacalc.core.reference_data import NIGERIA_CPI, get_tax_rules

logger = logging.getLogger(__name__)


def build_history_store(settings: Settings) -> HistoryStore:
    if settings.HISTORY_BACKEND == "file":
        return JSONFileHistoryStore(settings.HISTORY_FILE, max_records=settings.HISTORY_MAX_RECORDS)
    if settings.HISTORY_BACKEND == "memory":
        return InMemoryHistoryStore(max_records=settings.HISTORY_MAX_RECORDS)
    raise ValueError(f"Unknown history backend: {settings.HISTORY_BACKEND}")


def create_app(settings: Settings | None = None, history_store: HistoryStore | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.basicConfig(level=settings.LOG_LEVEL)
        logger.info("Starting %s %s (tax year %s)", settings.APP_NAME, settings.APP_VERSION, settings.TAX_YEAR)
        yield
        logger.info("Shutting down...")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.history_store = history_store or build_history_store(settings)
    app.state.bmi_calculator = BMICalculator()
    app.state.paye_calculator = PAYECalculator(get_tax_rules(settings.TAX_YEAR))
    app.state.inflation_calculator = InflationCalculator(NIGERIA_CPI)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=86400,
    )

    app.include_router(bmi.router, prefix="/api/v1/bmi", tags=["bmi"])
    app.include_router(tax.router, prefix="/api/v1/tax", tags=["tax"])
    app.include_router(inflation.router, prefix="/api/v1/inflation", tags=["inflation"])
    app.include_router(history.router, prefix="/api/v1/history", tags=["history"])

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": settings.APP_VERSION}

    return app


app = create_app()
