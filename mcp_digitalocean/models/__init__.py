from .requests import (
    AlertNotifications,
    DatabaseFirewallRule,
    FirewallRule,
    OnlineMigrationSource,
    SlackDetails,
)

__all__ = [
    "AlertNotifications",
    "DatabaseFirewallRule",
    "FirewallRule",
    "OnlineMigrationSource",
    "SlackDetails",
]
