from enum import Enum


class AssetCategory(str, Enum):

    laptop = "Laptop"
    desktop = "Desktop"
    monitor = "Monitor"
    phone = "Phone"
    server = "Server"
    other = "Other"


class AssetStatus(str, Enum):

    available = "available"
    in_use = "in-use"
    maintenance = "maintenance"
    retired = "retired"


class RequestStatus(str, Enum):

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class MaintenancePriority(str, Enum):

    low = "low"
    medium = "medium"
    high = "high"


class MaintenanceStatus(str, Enum):

    scheduled = "scheduled"
    in_progress = "in-progress"
    completed = "completed"
    cancelled = "cancelled"


# Allowed maintenance status transitions; completed and cancelled are terminal
MAINTENANCE_TRANSITIONS = {
    MaintenanceStatus.scheduled: {
        MaintenanceStatus.in_progress,
        MaintenanceStatus.completed,
        MaintenanceStatus.cancelled,
    },
    MaintenanceStatus.in_progress: {
        MaintenanceStatus.completed,
        MaintenanceStatus.cancelled,
    },
    MaintenanceStatus.completed: set(),
    MaintenanceStatus.cancelled: set(),
}

OPEN_MAINTENANCE_STATUSES = (
    MaintenanceStatus.scheduled.value,
    MaintenanceStatus.in_progress.value,
)


class AuditAction(str, Enum):

    check_in = "Check-In"
    check_out = "Check-Out"
    audit = "Audit"
    verification = "Verification"


class AuditStatus(str, Enum):

    verified = "Verified"
    pending = "Pending"
    missing = "Missing"
    concern = "Concern"
