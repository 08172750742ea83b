from app.repositories.leave.leave_request_repository import LeaveRequestRepository
from app.repositories.leave.leave_type_repository import LeaveTypeRepository

__all__ = ["LeaveRequestRepository", "LeaveTypeRepository"]
