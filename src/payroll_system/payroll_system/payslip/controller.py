from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import current_role, error_response, int_arg, json_body, login_required, roles_required
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..container import Container

_PAYROLL_ROLES = (Role.ADMIN, Role.HR)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/<int:payroll_id>/payslip", methods=["GET"], endpoint="api_payslip")
    @login_required
    def payslip(payroll_id: int):
        try:
            record = container.payroll_service.get(payroll_id)
            if record.employee_id != str(session.get("user_id")) and current_role() not in _PAYROLL_ROLES:
                raise AuthorizationError("You can only view your own payslip")
            slip = container.payslip_service.generate_for_record(record)
            return jsonify({"success": True, "payslip": slip.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/api/payslips/bulk", methods=["POST"], endpoint="api_payslips_bulk")
    @roles_required(_PAYROLL_ROLES)
    def bulk():
        data = json_body()
        try:
            result = container.payslip_service.generate_bulk(
                month=int_arg("month", data.get("month")),
                year=int_arg("year", data.get("year")),
            )
            return jsonify(
                {
                    "success": True,
                    "payslips": [p.to_dict() for p in result.payslips],
                    "errors": result.errors,
                }
            )
        except Exception as e:
            return error_response(e)
