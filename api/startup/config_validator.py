"""
Configuration validator for startup checks.

Validates configuration settings early to provide clear error messages
before the application attempts to use invalid paths or settings.
"""
import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


class ConfigValidationError(Exception):
    """Configuration validation failed"""
    pass


class ConfigValidator:
    """Validates configuration settings on startup"""

    def __init__(self, config):
        self.config = config
        self.errors: List[str] = []

    def validate(self) -> None:
        """Validate all configuration settings

        Raises:
            ConfigValidationError: If validation fails
        """
        self._validate_repositories()
        self._validate_store_path()
        self._validate_indexing()
        self._validate_retrieval()

        if self.errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(
                f"  - {error}" for error in self.errors
            )
            raise ConfigValidationError(error_msg)

    def _validate_repositories(self) -> None:
        if not self.config.source.repositories:
            self.errors.append(
                "No source repositories configured\n"
                "    Set GITHUB_REPOSITORIES=owner/name[@branch],... in .env"
            )

    def _validate_store_path(self) -> None:
        """Create the store directory if it doesn't exist"""
        if self.config.database.path == IN_MEMORY:
            return
        store_dir = Path(self.config.database.path).expanduser().parent
        if store_dir.exists():
            return
        try:
            store_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created store directory: {store_dir}")
        except PermissionError:
            self.errors.append(
                f"Cannot create store directory (permission denied): {store_dir}\n"
                f"    Fix with: sudo mkdir -p {store_dir} && sudo chown $USER {store_dir}"
            )
        except OSError as e:
            self.errors.append(
                f"Cannot create store directory: {store_dir}\n"
                f"    Error: {e}"
            )

    def _validate_indexing(self) -> None:
        indexing = self.config.indexing
        if indexing.batch_size <= 0:
            self.errors.append(f"Indexing batch size must be positive, got {indexing.batch_size}")
        if indexing.schedule_seconds <= 0:
            self.errors.append(
                f"Indexing schedule period must be positive, got {indexing.schedule_seconds}"
            )

    def _validate_retrieval(self) -> None:
        retrieval = self.config.retrieval
        for name in ('fast_threshold', 'deep_threshold'):
            value = getattr(retrieval, name)
            if not 0.0 <= value <= 1.0:
                self.errors.append(f"Retrieval {name} must be within [0, 1], got {value}")
