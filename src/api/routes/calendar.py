"""Calendar rendering, rescheduling, agenda, settings and export endpoints."""

import time
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import Response

from api.dependencies import get_client_ip, verify_api_key
from api.logging import RequestLog, log_request
from api.models.requests import (
    AgendaRequest,
    DropRequest,
    EventIn,
    ExportRequest,
    RenderRequest,
    SettingsIn,
)
from api.models.responses import (
    AgendaItemOut,
    AgendaResponse,
    DetailPanelOut,
    DropResponse,
    ErrorCodes,
    LegendItem,
    MonthViewOut,
    RenderResponse,
    SettingsResponse,
    WeekViewOut,
)
from core.config import MAX_EVENTS_PER_REQUEST
from models.events import Granularity, ScheduledEvent, ViewState
from services.dragdrop import DragDropController
from services.event_index import filter_events, local_start, resolve_timezone
from services.renderer import (
    render_detail_panel,
    render_month,
    render_week,
    status_color,
    status_label,
    status_legend,
)
from services.reports import agenda_summary, export_csv, export_excel_bytes, export_filename
from services.settings import CalendarSettings, sqlite_store

router = APIRouter(prefix="/v1/calendar", dependencies=[Depends(verify_api_key)])


def _to_events(events_in: list[EventIn]) -> list[ScheduledEvent]:
    """Convert payload events, refusing oversized batches."""
    if len(events_in) > MAX_EVENTS_PER_REQUEST:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail={
                "error": f"Too many events (maximum {MAX_EVENTS_PER_REQUEST})",
                "code": ErrorCodes.TOO_MANY_EVENTS,
                "details": [f"Received: {len(events_in)}"],
            },
        )
    return [e.to_event() for e in events_in]


def _load_settings() -> CalendarSettings:
    try:
        return sqlite_store().load()
    except ValueError:
        # Stored preferences no longer valid, fall back to defaults
        return CalendarSettings()


def _record_error(request_log: RequestLog, e: HTTPException) -> None:
    request_log.status_code = e.status_code
    if isinstance(e.detail, dict):
        request_log.error_code = e.detail.get("code")
        request_log.error_message = e.detail.get("error")
        for detail in e.detail.get("details", []):
            request_log.details.append(("validation_error", detail))
    else:
        request_log.error_message = str(e.detail)


def _finish_log(request_log: RequestLog, start_time: float) -> None:
    request_log.processing_time_ms = int((time.time() - start_time) * 1000)
    try:
        log_request(request_log)
    except Exception:
        # Don't fail the request if logging fails
        pass


def _agenda_item(event: ScheduledEvent, tz) -> AgendaItemOut:
    return AgendaItemOut(
        event_id=event.id,
        title=event.title,
        start=local_start(event, tz),
        status_label=status_label(event.status),
        color=status_color(event.status),
        client_name=event.client.display_name if event.client else None,
        technician_name=event.technician_name,
        address=event.address,
    )


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "Internal server error",
            "code": ErrorCodes.INTERNAL_ERROR,
            "details": [],
        },
    )


@router.post("/render", response_model=RenderResponse)
async def render_calendar(request: Request, body: RenderRequest):
    """
    Render the month or week grid plus the detail panel.

    Events whose start is missing or malformed are not drawn; their ids are
    reported in `unscheduled_event_ids`.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/calendar/render",
        method="POST",
        client_ip=get_client_ip(request),
        granularity=body.view.granularity,
        anchor_date=body.view.anchor_date.isoformat(),
        events_received=len(body.events),
    )

    try:
        events = _to_events(body.events)
        unscheduled = [e.id for e in events if e.start is None]
        request_log.events_unscheduled = len(unscheduled)
        for event_id in unscheduled:
            request_log.details.append(("warning", f"Event {event_id} has no valid start"))

        settings = _load_settings()
        tz = resolve_timezone(settings.timezone)
        state = ViewState(**body.view.model_dump())

        now = body.now or datetime.now(tz)
        month_out = None
        week_out = None
        if state.granularity == Granularity.WEEK:
            week = render_week(state, events, now, settings, body.droppable)
            week_out = WeekViewOut.model_validate(week)
        else:
            today = now.astimezone(tz).date() if now.tzinfo else now.date()
            month = render_month(state, events, today, settings, body.droppable)
            month_out = MonthViewOut.model_validate(month)

        panel = render_detail_panel(state, events, settings)

        request_log.status_code = 200
        return RenderResponse(
            granularity=state.granularity,
            month=month_out,
            week=week_out,
            detail_panel=DetailPanelOut.model_validate(panel),
            legend=[LegendItem(label=label, color=color) for label, color in status_legend()],
            unscheduled_event_ids=unscheduled,
        )

    except HTTPException as e:
        _record_error(request_log, e)
        raise

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        raise _internal_error()

    finally:
        _finish_log(request_log, start_time)


@router.post("/drop", response_model=DropResponse)
async def drop_event(request: Request, body: DropRequest):
    """
    Compute the new start of an intervention dropped on a cell.

    Month cells (no hour) keep the original time of day; week cells use the
    hour with minutes zeroed. Persisting the change is up to the caller.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/calendar/drop",
        method="POST",
        client_ip=get_client_ip(request),
        granularity=Granularity.MONTH if body.hour is None else Granularity.WEEK,
        anchor_date=body.target_date.isoformat(),
        events_received=1,
    )

    try:
        settings = _load_settings()
        proposals: list[DropResponse] = []
        controller = DragDropController(
            on_drop=lambda event_id, new_start: proposals.append(
                DropResponse(event_id=event_id, new_start=new_start)
            ),
            tz=resolve_timezone(settings.timezone),
        )

        payload = controller.start_drag(body.event.to_event())
        controller.drop(payload, body.target_date, body.hour)

        request_log.status_code = 200
        return proposals[0]

    except HTTPException as e:
        _record_error(request_log, e)
        raise

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        raise _internal_error()

    finally:
        _finish_log(request_log, start_time)


@router.post("/agenda", response_model=AgendaResponse)
async def agenda(request: Request, body: AgendaRequest):
    """
    Dashboard summary: the first few interventions of the day (with the full
    count) and the first few of the Monday-to-Sunday week.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/calendar/agenda",
        method="POST",
        client_ip=get_client_ip(request),
        anchor_date=body.today.isoformat() if body.today else None,
        events_received=len(body.events),
    )

    try:
        events = _to_events(body.events)
        request_log.events_unscheduled = sum(1 for e in events if e.start is None)
        tz = resolve_timezone(_load_settings().timezone)
        today = body.today or datetime.now(tz).date()
        summary = agenda_summary(events, today, tz)

        request_log.status_code = 200
        return AgendaResponse(
            date=today,
            today=[_agenda_item(e, tz) for e in summary.today],
            today_count=summary.today_count,
            week=[_agenda_item(e, tz) for e in summary.week],
        )

    except HTTPException as e:
        _record_error(request_log, e)
        raise

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        raise _internal_error()

    finally:
        _finish_log(request_log, start_time)


@router.get("/settings", response_model=SettingsResponse)
async def get_settings():
    """Current calendar widget preferences (defaults if never saved)."""
    return SettingsResponse(**_load_settings().to_dict())


@router.put("/settings", response_model=SettingsResponse)
async def put_settings(body: SettingsIn):
    """Validate and store calendar widget preferences."""
    try:
        settings = CalendarSettings.from_dict(body.model_dump())
        resolve_timezone(settings.timezone)
    except ValueError as e:
        details = [d.strip() for d in str(e).split("\n") if d.strip()]
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Invalid calendar settings",
                "code": ErrorCodes.VALIDATION_ERROR,
                "details": details,
            },
        )

    sqlite_store().save(settings)
    return SettingsResponse(**settings.to_dict())


@router.post("/export")
async def export_calendar(
    request: Request,
    body: ExportRequest,
    format: str = Query("xlsx", pattern="^(csv|xlsx)$"),
):
    """Download interventions as a semicolon CSV or an Excel workbook."""
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/calendar/export",
        method="POST",
        client_ip=get_client_ip(request),
        anchor_date=body.anchor_date.isoformat() if body.anchor_date else None,
        events_received=len(body.events),
    )

    try:
        events = filter_events(
            _to_events(body.events),
            technician_id=body.technician_id,
            status=body.status,
        )
        tz = resolve_timezone(_load_settings().timezone)
        filename = export_filename(body.anchor_date or date.today(), format)

        if format == "csv":
            content = export_csv(events, tz).encode("utf-8")
            media_type = "text/csv; charset=utf-8"
        else:
            content = export_excel_bytes(events, tz)
            media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

        request_log.status_code = 200
        return Response(
            content=content,
            media_type=media_type,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    except HTTPException as e:
        _record_error(request_log, e)
        raise

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        raise _internal_error()

    finally:
        _finish_log(request_log, start_time)
