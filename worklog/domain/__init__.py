"""Domain layer - Pure business entities and logic"""

from .models import Account, LogEntry, AccountSettings, MonthlySummary, ResourceKey
from .duration import calculate_duration

__all__ = ["Account", "LogEntry", "AccountSettings", "MonthlySummary", "ResourceKey",
           "calculate_duration"]
