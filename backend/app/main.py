from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import health
from app.core.monitoring import configure_error_monitoring
from app.domains.holidays.router import router as holidays_router
from app.domains.payslips.router import router as payslips_router
from payslip.config import get_settings
from payslip.errors import PayrollValidationError, PayrollValidationErrors
from payslip.logging import configure_logging, get_logger

settings = get_settings()
configure_logging(settings.log_level, settings.log_format)
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(payslips_router)
app.include_router(holidays_router)


@app.exception_handler(PayrollValidationError)
def payroll_validation_handler(request: Request, exc: PayrollValidationError) -> JSONResponse:
    details = exc.as_details() if isinstance(exc, PayrollValidationErrors) else [exc.as_detail()]
    logger.info("payslip_rejected", path=request.url.path, problems=len(details))
    return JSONResponse(status_code=422, content={"detail": details})


@app.on_event("startup")
def startup_event() -> None:
    logger.info("startup_complete", env=settings.env, holiday_region=settings.holiday_region)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Payslip API running", "environment": settings.env}
