"""
Services applicatifs
"""

from application.services.daily_cap_validator import DailyCapValidator
from application.services.billing_aggregator import BillingAggregator
from application.services.summary_cache import SummaryCache
from application.services.time_log_service import TimeLogService
from application.services.project_service import ProjectService
from application.services.user_service import UserService

__all__ = [
    "DailyCapValidator",
    "BillingAggregator",
    "SummaryCache",
    "TimeLogService",
    "ProjectService",
    "UserService"
]
