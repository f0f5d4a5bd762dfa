"""
FastAPI Web Application - TimeCheck API
========================================

HTTP surface of the tracker: registration, direct activity logging, daily
activity listing, on-demand reminders and the Twilio inbound SMS webhook.

The lifespan builds the services from settings, initializes the database and
starts the reminder scheduler. Tests pass prebuilt services instead.
"""

import json
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, Form, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..application import ReminderScheduler, Services, build_services
from ..domain.errors import NotFoundError, StoreError, TransportError, ValidationError
from ..infrastructure.config import Settings, get_settings

logger = logging.getLogger(__name__)


# ── Request Bodies ─────────────────────────────────────────────────

class RegisterRequest(BaseModel):
    phone_number: Optional[str] = None


class ActivityRequest(BaseModel):
    phone_number: Optional[str] = None
    date: Optional[str] = None
    time_slot: Optional[str] = None
    activity_text: Optional[str] = None


class ReminderRequest(BaseModel):
    phone_number: Optional[str] = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _services(request: Request) -> Services:
    return request.app.state.services


def _describe(errors) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in errors
    )


_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _payload(model: type[BaseModel]):
    """Dependency that reads a JSON or form-encoded body into the model."""

    async def parse(request: Request) -> BaseModel:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(_FORM_TYPES):
            data = dict(await request.form())
        else:
            raw = await request.body()
            try:
                data = json.loads(raw) if raw.strip() else {}
            except ValueError as e:
                raise ValidationError(f"Malformed JSON body: {e}") from e

        if not isinstance(data, dict):
            raise ValidationError("Request body must be an object")
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(_describe(e.errors())) from e

    return parse


# ── App Factory ────────────────────────────────────────────────────

def create_app(
    services: Optional[Services] = None,
    settings: Optional[Settings] = None,
    start_scheduler: Optional[bool] = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        services: Prebuilt services; built from settings at startup when omitted.
        settings: Defaults to get_settings().
        start_scheduler: Defaults to settings.schedule.enabled when services are
            built here, and to False when services are injected.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg = settings or get_settings()
        for issue in cfg.validate():
            logger.warning(issue)

        owns_services = services is None
        app.state.services = services or build_services(cfg)
        logger.info("Database ready")

        run_scheduler = start_scheduler
        if run_scheduler is None:
            run_scheduler = owns_services and cfg.schedule.enabled

        scheduler = None
        if run_scheduler:
            scheduler = ReminderScheduler(app.state.services.broadcaster, cfg.schedule)
            scheduler.start()
        app.state.scheduler = scheduler

        try:
            yield
        finally:
            if scheduler:
                scheduler.shutdown()
            if owns_services:
                app.state.services.close()

    app = FastAPI(
        title="TimeCheck",
        description="SMS time-use tracker with quarter-hour check-ins",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list((settings or get_settings()).server.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def invalid_body(request: Request, exc: ValidationError):
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return _error(400, _describe(exc.errors()))

    # ── Users ──────────────────────────────────────────────────

    @app.post("/api/register")
    def register(request: Request, body: RegisterRequest = Depends(_payload(RegisterRequest))):
        try:
            user = _services(request).tracker.register(body.phone_number)
        except ValidationError:
            return _error(400, "Phone number is required")
        except StoreError as e:
            logger.error(f"Error registering user: {e}")
            return _error(500, "Failed to register user")
        return {"success": True, "user": user.to_dict()}

    @app.get("/api/users")
    def list_users(request: Request):
        try:
            users = _services(request).tracker.active_users()
        except StoreError as e:
            logger.error(f"Error fetching users: {e}")
            return _error(500, "Failed to fetch users")
        return {"users": [{"phone_number": u.phone_number} for u in users]}

    # ── Activities ─────────────────────────────────────────────

    @app.get("/api/activities/{phone}/{day}")
    def list_activities(request: Request, phone: str, day: str):
        try:
            entries = _services(request).tracker.activities_for(phone, day)
        except ValidationError as e:
            return _error(400, str(e))
        except StoreError as e:
            logger.error(f"Error fetching activities: {e}")
            return _error(500, "Failed to fetch activities")
        return {
            "activities": [
                {
                    "time_slot": str(entry.slot),
                    "activity_text": entry.text,
                    "updated_at": entry.updated_at.isoformat(),
                }
                for entry in entries
            ]
        }

    @app.post("/api/activity")
    def log_activity(request: Request, body: ActivityRequest = Depends(_payload(ActivityRequest))):
        if not all([body.phone_number, body.date, body.time_slot, body.activity_text]):
            return _error(400, "All fields are required")
        try:
            entry = _services(request).tracker.log_activity(
                body.phone_number, body.date, body.time_slot, body.activity_text
            )
        except ValidationError as e:
            return _error(400, str(e))
        except NotFoundError:
            return _error(404, "User not found")
        except StoreError as e:
            logger.error(f"Error logging activity: {e}")
            return _error(500, "Failed to log activity")
        return {"success": True, "activity": entry.to_dict()}

    # ── SMS ────────────────────────────────────────────────────

    @app.post("/api/send-reminder")
    def send_reminder(request: Request, body: ReminderRequest = Depends(_payload(ReminderRequest))):
        try:
            result = _services(request).tracker.send_reminder(body.phone_number)
        except ValidationError:
            return _error(400, "Phone number is required")
        except TransportError as e:
            logger.error(f"Error sending SMS: {e}")
            return _error(500, "Failed to send SMS")
        return {"success": True, "messageSid": result.message_sid}

    @app.post("/api/sms-webhook")
    def sms_webhook(
        request: Request,
        from_number: Optional[str] = Form(None, alias="From"),
        body: Optional[str] = Form(None, alias="Body"),
    ):
        if not from_number or body is None:
            logger.warning("SMS webhook called without From/Body")
            return PlainTextResponse("Missing From or Body", status_code=400)

        outcome = _services(request).correlator.handle_reply(from_number, body)
        if not outcome.success:
            logger.error(f"Error processing SMS webhook: {outcome.error}")
            return PlainTextResponse("Error", status_code=500)
        return PlainTextResponse("OK", status_code=200)

    # ── Health ─────────────────────────────────────────────────

    @app.get("/health")
    async def health():
        return {"status": "OK", "timestamp": datetime.now().isoformat()}

    return app


app = create_app()
