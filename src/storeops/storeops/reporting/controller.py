from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..container import Container
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def bad(status: int, message: str, detail=None):
    return jsonify({"error": message, "detail": detail}), status


def register(app: Flask, container: Container) -> None:
    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return bad(400, str(e))
            except Exception as e:
                logger.exception("Unhandled error in %s", request.path)
                return bad(500, "Unhandled exception", {"message": str(e)})

        return wrapper

    def required_arg(name: str) -> str:
        value = (request.args.get(name) or "").strip()
        if not value:
            raise ValidationError(f"Missing {name}")
        return value

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/admin/attendances-range", methods=["GET"], endpoint="attendances_range")
    @json_errors
    def attendances_range():
        tz = container.report_tz
        start = parse_iso_datetime(required_arg("from"), default_tz=tz)
        end = parse_iso_datetime(required_arg("to"), default_tz=tz)
        return jsonify(container.attendance_calendar_service.shifts_in_range(start=start, end=end))

    @app.route("/api/admin/attendance-calendar", methods=["GET"], endpoint="attendance_calendar")
    @json_errors
    def attendance_calendar():
        return jsonify(container.attendance_calendar_service.month_view(required_arg("month")))

    @app.route("/api/admin/sales-calendar", methods=["GET"], endpoint="sales_calendar")
    @json_errors
    def sales_calendar():
        return jsonify(container.sales_calendar_service.month_view(required_arg("month")))

    @app.route("/api/admin/payroll", methods=["GET"], endpoint="payroll_report")
    @json_errors
    def payroll_report():
        start = parse_iso_date(required_arg("from"))
        end = parse_iso_date(required_arg("to"))
        user_email = (request.args.get("user") or "").strip() or None

        report = container.payroll_report_service.build_report(start=start, end=end, user_email=user_email)
        return jsonify({"rows": report.rows, "summary": report.summary, "anomalies": report.anomalies})
