from app.client.api_client import ApiClient, ApiError
from app.client.stores import AuthStore, ClientStores, PlayersStore, ResultsStore, TestsStore
from app.client.analytics import DashboardSummary, average_scores_by_age_group, summarize_dashboard

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthStore",
    "ClientStores",
    "PlayersStore",
    "ResultsStore",
    "TestsStore",
    "DashboardSummary",
    "average_scores_by_age_group",
    "summarize_dashboard",
]
