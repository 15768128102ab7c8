import logging
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pythonjsonlogger import jsonlogger

from .attendance import AttendanceNotificationService
from .attendance.router import router as attendance_router
from .config import settings
from .database import create_supabase_client
from .errors import NotifierError
from .firebase import FirebaseCredentialProvider
from .notifications import FcmClient
from .notifications.router import router as notifications_router
from .students import StudentDirectory


def setup_logging():
    """Configure structured logging for the application."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    class CustomJsonFormatter(jsonlogger.JsonFormatter):
        def add_fields(self, log_record, record, message_dict):
            super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)
            log_record['service'] = settings.service_name
            log_record['environment'] = settings.environment
            log_record['timestamp'] = time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime(record.created))

    handler = logging.StreamHandler()
    handler.setFormatter(CustomJsonFormatter('%(timestamp)s %(levelname)s %(service)s %(environment)s %(name)s %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicates
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)

    root_logger.addHandler(handler)

    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)


setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(title="SGE Notification Backend", version="1.0.0")

app.include_router(attendance_router)
app.include_router(notifications_router)


@app.on_event("startup")
async def startup_event():
    """
    Build the data-store client, credential cache and FCM client once per process
    """
    supabase_client = create_supabase_client(settings)
    credential_provider = FirebaseCredentialProvider(settings.firebase_credentials_base64)
    push_dispatcher = FcmClient(
        project_id=settings.firebase_project_id,
        credential_provider=credential_provider,
        base_url=settings.fcm_base_url,
        channel_id=settings.fcm_android_channel_id,
        timeout_seconds=settings.fcm_timeout_seconds
    )

    app.state.push_dispatcher = push_dispatcher
    app.state.notification_service = AttendanceNotificationService(
        directory=StudentDirectory(supabase_client),
        dispatcher=push_dispatcher
    )
    logger.info(f"Server ready for project {settings.firebase_project_id} in {settings.environment} environment")


def error_response(status_code: int, message: str) -> JSONResponse:
    if status_code >= 500 and not settings.expose_error_details:
        message = "Internal server error"
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(NotifierError)
async def notifier_error_handler(request: Request, exc: NotifierError):
    if exc.status_code >= 500:
        logger.error(f"Error processing {request.url.path}: {exc.message}")
    else:
        logger.warning(f"Rejected request to {request.url.path}: {exc.message}")
    return error_response(exc.status_code, exc.message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error processing {request.url.path}: {str(exc)}", exc_info=True)
    return error_response(500, str(exc))


@app.get("/", response_class=PlainTextResponse, tags=["Health"])
async def health():
    return "SGE Notification Backend is Running 🚀"


@app.get("/wake-up", response_class=PlainTextResponse, tags=["Health"])
async def wake_up():
    logger.info("I am awake!")
    return "Awake"


def run():
    """Console entry point: serve the app with uvicorn."""
    logger.info(f"Server listening on port {settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
