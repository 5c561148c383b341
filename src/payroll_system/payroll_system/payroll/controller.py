from __future__ import annotations

from flask import Flask, jsonify, request, send_file, session

from ..common.datetime_utils import as_date
from ..common.money import to_decimal
from ..common.validators import require_int
from ..common.web import current_role, error_response, int_arg, json_body, login_required, roles_required
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..container import Container
from .export import payroll_export_csv
from .model import AttendanceCounts, SalaryComponents
from .service import NewPayroll

_PAYROLL_ROLES = (Role.ADMIN, Role.HR)


def _new_payroll(data: dict, *, currency: str) -> NewPayroll:
    attendance = None
    if data.get("days_worked") not in (None, ""):
        attendance = AttendanceCounts(
            days_worked=require_int(data.get("days_worked"), "Days worked"),
            days_absent=require_int(data.get("days_absent") or 0, "Days absent"),
        )
    payment_date = data.get("payment_date")
    return NewPayroll(
        employee_id=str(data.get("employee_id") or ""),
        month=require_int(data.get("month"), "Month"),
        year=require_int(data.get("year"), "Year"),
        components=SalaryComponents.from_mapping(data, currency=currency),
        attendance=attendance,
        exchange_rate=to_decimal(data.get("exchange_rate"), "Exchange rate"),
        payment_date=as_date(payment_date, "Payment date") if payment_date else None,
        payment_method=data.get("payment_method"),
        notes=data.get("notes"),
    )


def register(app: Flask, container: Container) -> None:
    currency = container.settings.anchor_currency

    @app.route("/api/payroll/calculate", methods=["POST"], endpoint="api_payroll_calculate")
    @roles_required(_PAYROLL_ROLES)
    def calculate():
        try:
            components = SalaryComponents.from_mapping(json_body(), currency=currency)
            breakdown = container.payroll_service.calculate(components)
            return jsonify({"success": True, **breakdown.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/api/payroll", methods=["POST"], endpoint="api_payroll_create")
    @roles_required(_PAYROLL_ROLES)
    def create():
        data = json_body()
        try:
            record = container.payroll_service.create_record(
                _new_payroll(data, currency=currency),
                allow_negative_net=bool(data.get("allow_negative_net", False)),
            )
            return jsonify({"success": True, "payroll": record.to_dict()}), 201
        except Exception as e:
            return error_response(e)

    @app.route("/api/payroll/<int:payroll_id>", methods=["GET"], endpoint="api_payroll_get")
    @login_required
    def get(payroll_id: int):
        try:
            record = container.payroll_service.get(payroll_id)
            if record.employee_id != str(session.get("user_id")) and current_role() not in _PAYROLL_ROLES:
                raise AuthorizationError("You can only view your own payroll")
            return jsonify({"success": True, "payroll": record.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/api/payroll/<int:payroll_id>/process", methods=["POST"], endpoint="api_payroll_process")
    @roles_required(_PAYROLL_ROLES)
    def process(payroll_id: int):
        try:
            record = container.payroll_service.mark_processed(payroll_id)
            return jsonify({"success": True, "payroll": record.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/api/payroll/<int:payroll_id>/pay", methods=["POST"], endpoint="api_payroll_pay")
    @roles_required(_PAYROLL_ROLES)
    def pay(payroll_id: int):
        data = json_body()
        try:
            payment_date = data.get("payment_date")
            record = container.payroll_service.mark_paid(
                payroll_id,
                payment_date=as_date(payment_date, "Payment date") if payment_date else None,
                payment_method=data.get("payment_method"),
            )
            return jsonify({"success": True, "payroll": record.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/api/payroll/attendance-suggestion", methods=["GET"], endpoint="api_payroll_attendance")
    @roles_required(_PAYROLL_ROLES)
    def attendance_suggestion():
        try:
            suggestion = container.payroll_service.suggest_attendance(
                employee_id=request.args.get("employee_id") or "",
                month=int_arg("month"),
                year=int_arg("year"),
            )
            return jsonify({"success": True, **suggestion.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/api/payroll", methods=["GET"], endpoint="api_payroll_list")
    @roles_required(_PAYROLL_ROLES)
    def list_period():
        try:
            month, year = int_arg("month"), int_arg("year")
            records = container.payroll_service.list_for_period(month=month, year=year)
            summary = container.payroll_service.summarize_period(month=month, year=year)
            return jsonify(
                {
                    "success": True,
                    "payrolls": [r.to_dict() for r in records],
                    "summary": summary.to_dict(),
                }
            )
        except Exception as e:
            return error_response(e)

    @app.route("/api/payroll/export", methods=["GET"], endpoint="api_payroll_export")
    @roles_required(_PAYROLL_ROLES)
    def export_period():
        try:
            month, year = int_arg("month"), int_arg("year")
            records = container.payroll_service.list_for_period(month=month, year=year)
            out = payroll_export_csv(
                records,
                container.employee_repo,
                anchor_currency=container.settings.anchor_currency,
                local_currency=container.settings.local_currency,
            )
            return send_file(
                out,
                mimetype="text/csv",
                as_attachment=True,
                download_name=f"payroll-{year}-{month:02d}.csv",
            )
        except Exception as e:
            return error_response(e)
