from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveCategory, LeaveStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .calculator import calculate_leave_days, validate_leave_request
from .model import LeaveRequest, LeaveRequestDraft
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_APPROVERS = {Role.ADMIN, Role.HR, Role.MANAGER}


class LeaveRequestService:
    """Use case: submit, resolve and remove leave requests."""

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def submit(self, draft: LeaveRequestDraft) -> int:
        result = validate_leave_request(draft)
        if not result.valid:
            raise ValidationError("; ".join(result.errors), errors=result.errors)

        start = parse_iso_date(draft.start_date.strip())
        end = parse_iso_date(draft.end_date.strip())
        request_id = self._leaves.create(
            employee_id=draft.employee_id.strip(),
            leave_type=LeaveCategory(draft.leave_type.strip()),
            start_date=start,
            end_date=end,
            total_days=calculate_leave_days(start, end),
            reason=optional_text(draft.reason),
        )
        logger.info("Leave request %s submitted for employee=%s", request_id, draft.employee_id)
        return request_id

    def _get(self, request_id: int) -> LeaveRequest:
        req = self._leaves.get_by_id(request_id=int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        return req

    def _decide(
        self,
        *,
        current_role: Role,
        approver_id: str,
        request_id: int,
        status: LeaveStatus,
        comments: str,
    ) -> None:
        if current_role not in _APPROVERS:
            raise AuthorizationError("You are not allowed to resolve leave requests")

        req = self._get(request_id)
        if req.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request has already been processed")

        ok = self._leaves.decide(
            request_id=int(request_id),
            status=status,
            approved_by=str(approver_id),
            comments=optional_text(comments),
        )
        if not ok:
            raise ValidationError("Leave request has already been processed")
        logger.info("Leave request %s %s by %s", request_id, status.value, approver_id)

    def approve(self, *, current_role: Role, approver_id: str, request_id: int, comments: str = "") -> None:
        self._decide(
            current_role=current_role,
            approver_id=approver_id,
            request_id=request_id,
            status=LeaveStatus.APPROVED,
            comments=comments,
        )

    def reject(self, *, current_role: Role, approver_id: str, request_id: int, comments: str = "") -> None:
        self._decide(
            current_role=current_role,
            approver_id=approver_id,
            request_id=request_id,
            status=LeaveStatus.REJECTED,
            comments=comments,
        )

    def delete(self, *, current_role: Role, request_id: int) -> None:
        req = self._get(request_id)
        if req.status != LeaveStatus.PENDING and current_role != Role.ADMIN:
            raise AuthorizationError("Only an administrator can delete a resolved leave request")

        if not self._leaves.delete(request_id=int(request_id)):
            raise ValidationError("Deleting the leave request failed")

    def list_for_employee(
        self,
        *,
        employee_id: str,
        status: Optional[LeaveStatus] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        return self._leaves.list_for_employee(employee_id=str(employee_id), status=status, limit=int(limit))
