import sentry_sdk

from payslip.config import get_settings


def configure_error_monitoring() -> None:
    settings = get_settings()
    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.env, traces_sample_rate=0.2)
