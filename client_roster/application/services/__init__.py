from .notification_bus import NotificationBus
from .client_service import ClientService
from .dashboard_service import DashboardService
from . import roster_metrics
from .export_service import (
    ExportArtifact,
    export_to_csv,
    export_to_excel,
    export_to_pdf,
)

__all__ = [
    "NotificationBus",
    "ClientService",
    "DashboardService",
    "roster_metrics",
    "ExportArtifact",
    "export_to_csv",
    "export_to_excel",
    "export_to_pdf",
]
