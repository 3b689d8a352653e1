"""
Panel module - operator session and notification feed.
"""

from silence_manager.panel.notifications import NotificationFeed
from silence_manager.panel.panel import SilencePanel, label_title

__all__ = [
    "SilencePanel",
    "NotificationFeed",
    "label_title",
]
