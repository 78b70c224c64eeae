"""
Application Configuration Model
Represents a validated configuration state
"""

from typing import Optional


class AppConfig:
    """
    Immutable configuration object for the Channel Catalog Pipeline.

    Represents a VALID configuration state only.
    All validation must be performed before instantiation.
    """

    def __init__(
        self,
        catalog_path: str = "channels.json",
        lock_timeout: float = 10.0,
        log_level: str = "INFO",
        log_dir: Optional[str] = "logs",
        default_country: str = "US",
        default_language: str = "English",
        playlist_name_source: str = "display"
    ):
        """
        Initialize AppConfig with validated values.

        Args:
            catalog_path: Canonical JSON catalog file (non-empty)
            lock_timeout: Seconds to wait for the catalog lock (> 0)
            log_level: Logging level name (DEBUG, INFO, WARNING, ERROR)
            log_dir: Directory for the log file, or None to log to the console only
            default_country: Country applied by `add` when none is given
            default_language: Language applied by `add` when none is given
            playlist_name_source: 'display' or 'tvg-name'
        """
        self._catalog_path = catalog_path
        self._lock_timeout = lock_timeout
        self._log_level = log_level
        self._log_dir = log_dir
        self._default_country = default_country
        self._default_language = default_language
        self._playlist_name_source = playlist_name_source

    @property
    def catalog_path(self) -> str:
        """Canonical JSON catalog file."""
        return self._catalog_path

    @property
    def lock_timeout(self) -> float:
        """Seconds to wait for the catalog lock."""
        return self._lock_timeout

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def log_dir(self) -> Optional[str]:
        """Log directory (None = console only)."""
        return self._log_dir

    @property
    def default_country(self) -> str:
        return self._default_country

    @property
    def default_language(self) -> str:
        return self._default_language

    @property
    def playlist_name_source(self) -> str:
        """Where the playlist decoder reads channel names from."""
        return self._playlist_name_source

    def with_catalog_path(self, catalog_path: str) -> "AppConfig":
        """Return a copy pointing at another catalog file."""
        return AppConfig(
            catalog_path=catalog_path,
            lock_timeout=self._lock_timeout,
            log_level=self._log_level,
            log_dir=self._log_dir,
            default_country=self._default_country,
            default_language=self._default_language,
            playlist_name_source=self._playlist_name_source
        )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"AppConfig(catalog_path={self.catalog_path!r}, "
            f"lock_timeout={self.lock_timeout}, "
            f"log_level={self.log_level!r}, "
            f"playlist_name_source={self.playlist_name_source!r})"
        )
