"""JSON snapshot store for folio."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from folio.models import PortfolioState

logger = logging.getLogger(__name__)


class PortfolioStoreError(Exception):
    """Raised when a snapshot file cannot be read."""
    pass


class PortfolioStore:
    """Stores a portfolio as one JSON document `{positions, ledger}`."""

    def __init__(self, path: Path):
        """Initialize the store.

        Args:
            path: Path to the JSON snapshot file.
        """
        self.path = path
        self._ensure_dir()

    def _ensure_dir(self) -> None:
        """Ensure the snapshot directory exists."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Optional[PortfolioState]:
        """Load the saved state.

        Returns:
            The saved state, or None if nothing was saved yet.

        Raises:
            PortfolioStoreError: If the file is not a valid snapshot.
        """
        if not self.path.exists():
            return None
        try:
            return PortfolioState.model_validate_json(self.path.read_text())
        except (OSError, ValidationError) as exc:
            raise PortfolioStoreError(f"Cannot read portfolio from {self.path}: {exc}") from exc

    def save(self, state: PortfolioState) -> None:
        """Write the state, replacing any previous snapshot."""
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(state.model_dump(mode="json"), indent=2))
        tmp_path.replace(self.path)
        logger.debug(
            "Saved %d positions and %d records to %s",
            len(state.positions),
            len(state.ledger),
            self.path,
        )

    def delete(self) -> None:
        """Remove the snapshot file if present."""
        if self.path.exists():
            self.path.unlink()
