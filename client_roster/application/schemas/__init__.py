from .client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientCreatedResponse,
    MessageResponse,
)
from .pull_history import PullHistoryCreate, PullHistoryResponse
from .analytics import CountEntry, RosterAnalyticsResponse
from .notifications import NotificationResponse, NotificationListResponse
from .dashboard_settings import DashboardSettings, DashboardSettingsUpdate
