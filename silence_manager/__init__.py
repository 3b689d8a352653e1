"""
Silence Manager.

Build and submit Alertmanager silences from label values discovered in
Prometheus, with per-label fuzzy search over large value sets.

Package Structure:
    - core: Configuration, constants, exceptions, logging, protocols
    - labels: Label registry, fuzzy index, selection and matcher building
    - silences: Duration parsing and silence composition
    - backends: Prometheus, Alertmanager and configuration-source clients
    - panel: Operator session and notification feed
    - api: Data models and the FastAPI panel server

Example usage:
    from silence_manager import get_config
    from silence_manager.panel import SilencePanel

    panel = SilencePanel.from_config(get_config())
    await panel.start()
    panel.select("job", "api")
    silence_id, record = await panel.submit("2h", "maintenance", "alice")
"""

__version__ = "1.0.0"

from silence_manager.core.config import AppConfig, get_config
from silence_manager.core.exceptions import SilenceManagerError
from silence_manager.core.logging import configure_logging, get_logger

__all__ = [
    # Version
    "__version__",
    # Config
    "get_config",
    "AppConfig",
    # Exceptions
    "SilenceManagerError",
    # Logging
    "get_logger",
    "configure_logging",
]
