from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.web import current_role, error_response, int_arg, json_body, login_required, roles_required
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container
from .model import LeaveRequestDraft

_APPROVER_ROLES = (Role.ADMIN, Role.HR, Role.MANAGER)


def register(app: Flask, container: Container) -> None:
    def _own_or_approver(employee_id: str) -> None:
        if str(employee_id) != str(session.get("user_id")) and current_role() not in _APPROVER_ROLES:
            raise AuthorizationError("You can only view your own leave")

    @app.route("/api/leave/requests", methods=["POST"], endpoint="api_submit_leave")
    @login_required
    def submit_leave():
        data = json_body()
        data.setdefault("employee_id", session.get("user_id"))
        try:
            _own_or_approver(data["employee_id"])
            request_id = container.leave_request_service.submit(LeaveRequestDraft.from_mapping(data))
            return jsonify({"success": True, "request_id": request_id}), 201
        except Exception as e:
            return error_response(e)

    @app.route("/api/leave/requests", methods=["GET"], endpoint="api_list_leave")
    @login_required
    def list_leave():
        employee_id = request.args.get("employee_id") or str(session.get("user_id"))
        try:
            _own_or_approver(employee_id)
            raw_status = request.args.get("status")
            try:
                status = LeaveStatus(raw_status) if raw_status else None
            except ValueError as exc:
                raise ValidationError("Status must be one of: pending, approved, rejected") from exc
            rows = container.leave_request_service.list_for_employee(employee_id=employee_id, status=status)
            return jsonify({"success": True, "requests": [r.to_dict() for r in rows]})
        except Exception as e:
            return error_response(e)

    @app.route("/api/leave/requests/<int:request_id>/approve", methods=["POST"], endpoint="api_approve_leave")
    @roles_required(_APPROVER_ROLES)
    def approve_leave(request_id: int):
        try:
            container.leave_request_service.approve(
                current_role=current_role(),
                approver_id=str(session["user_id"]),
                request_id=request_id,
                comments=json_body().get("comments", ""),
            )
            return jsonify({"success": True, "status": LeaveStatus.APPROVED.value})
        except Exception as e:
            return error_response(e)

    @app.route("/api/leave/requests/<int:request_id>/reject", methods=["POST"], endpoint="api_reject_leave")
    @roles_required(_APPROVER_ROLES)
    def reject_leave(request_id: int):
        try:
            container.leave_request_service.reject(
                current_role=current_role(),
                approver_id=str(session["user_id"]),
                request_id=request_id,
                comments=json_body().get("comments", ""),
            )
            return jsonify({"success": True, "status": LeaveStatus.REJECTED.value})
        except Exception as e:
            return error_response(e)

    @app.route("/api/leave/requests/<int:request_id>", methods=["DELETE"], endpoint="api_delete_leave")
    @roles_required(_APPROVER_ROLES)
    def delete_leave(request_id: int):
        try:
            container.leave_request_service.delete(current_role=current_role(), request_id=request_id)
            return jsonify({"success": True})
        except Exception as e:
            return error_response(e)

    @app.route("/api/employees/<employee_id>/leave-summary", methods=["GET"], endpoint="api_leave_summary")
    @login_required
    def leave_summary(employee_id: str):
        try:
            _own_or_approver(employee_id)
            today = now_local()
            month = int_arg("month", request.args.get("month", today.month))
            year = int_arg("year", request.args.get("year", today.year))
            summary = container.leave_aggregator.get_employee_leave_data_or_default(employee_id, month, year)
            return jsonify({"success": True, "employee_id": employee_id, "month": month, "year": year, **summary.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/api/employees/<employee_id>/leave-balance", methods=["GET"], endpoint="api_leave_balance")
    @login_required
    def leave_balance(employee_id: str):
        try:
            _own_or_approver(employee_id)
            year = int_arg("year", request.args.get("year", now_local().year))
            balance = container.leave_balance_tracker.get_employee_leave_balance_or_default(employee_id, year)
            return jsonify({"success": True, "employee_id": employee_id, **balance.to_dict()})
        except Exception as e:
            return error_response(e)
