from shared.models.users import Users
from .assets import Asset
from .asset_requests import AssetRequest
from .maintenance_records import MaintenanceRecord
from .audit_logs import AuditLog
