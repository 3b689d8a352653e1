"""
Core module - configuration, constants, exceptions, logging and protocols.
"""

from silence_manager.core.config import (
    AlertmanagerConfig,
    AppConfig,
    LabelConfig,
    PanelConfig,
    PrometheusConfig,
    SearchConfig,
    ServerConfig,
    get_config,
    parse_label_selector,
    reset_config,
    set_config,
)
from silence_manager.core.constants import (
    CORS_HINT,
    DEFAULT_LABEL_SELECTOR,
    DEFAULT_LABELS,
    DURATION_UNITS,
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_WEEK,
    NO_MATCHERS_PREVIEW,
    NotificationSeverity,
    PrometheusStatus,
    SilenceState,
)
from silence_manager.core.exceptions import (
    ConfigFetchError,
    ConfigurationError,
    EmptyCommentError,
    EmptyCreatorError,
    InvalidDurationError,
    LabelError,
    LabelFetchError,
    NoMatchersError,
    SilenceManagerError,
    SubmissionError,
    UnknownLabelError,
    UnknownLabelValueError,
    ValidationError,
)
from silence_manager.core.logging import (
    EventType,
    configure_logging,
    get_logger,
    log_event,
)
from silence_manager.core.protocols import (
    ConfigSource,
    LabelValuesSource,
    NotificationSink,
    SilenceSubmitter,
)

__all__ = [
    # Config
    "AppConfig",
    "ServerConfig",
    "PrometheusConfig",
    "AlertmanagerConfig",
    "LabelConfig",
    "SearchConfig",
    "PanelConfig",
    "get_config",
    "set_config",
    "reset_config",
    "parse_label_selector",
    # Constants
    "CORS_HINT",
    "DEFAULT_LABELS",
    "DEFAULT_LABEL_SELECTOR",
    "DURATION_UNITS",
    "MS_PER_HOUR",
    "MS_PER_DAY",
    "MS_PER_WEEK",
    "NO_MATCHERS_PREVIEW",
    "NotificationSeverity",
    "PrometheusStatus",
    "SilenceState",
    # Exceptions
    "SilenceManagerError",
    "ConfigurationError",
    "ConfigFetchError",
    "LabelError",
    "UnknownLabelError",
    "LabelFetchError",
    "ValidationError",
    "NoMatchersError",
    "EmptyCommentError",
    "EmptyCreatorError",
    "InvalidDurationError",
    "UnknownLabelValueError",
    "SubmissionError",
    # Logging
    "EventType",
    "configure_logging",
    "get_logger",
    "log_event",
    # Protocols
    "ConfigSource",
    "LabelValuesSource",
    "NotificationSink",
    "SilenceSubmitter",
]
