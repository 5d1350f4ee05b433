"""Storage repository for narration resources."""

import json
from pathlib import Path
from typing import Any, Optional

from small_tales.core.config import Settings
from small_tales.models.schemas import NarrationResource


class NarrationRepository:
    """Stores one JSON document per narration."""

    def __init__(self, settings: Settings, logger: Any):
        """
        Initialize the repository.

        Args:
            settings: Application settings
            logger: Logger instance
        """
        self.settings = settings
        self.logger = logger
        self.storage_path = Path(settings.storage_path)
        self.storage_path.mkdir(parents=True, exist_ok=True)

    def _path_for(self, narration_id: str) -> Path:
        # Narration IDs become file names; reject anything that could escape storage_path.
        if not narration_id or Path(narration_id).name != narration_id or narration_id.startswith("."):
            raise ValueError(f"Invalid narration id: {narration_id!r}")
        return self.storage_path / f"{narration_id}.json"

    def save_narration(self, narration: NarrationResource) -> Path:
        """
        Save a narration to storage.

        Args:
            narration: Narration resource to save

        Returns:
            Path of the written file
        """
        file_path = self._path_for(narration.id)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(narration.model_dump(mode="json", by_alias=True), f, indent=2, ensure_ascii=False)

        self.logger.info(f"Narration saved to: {file_path}")
        return file_path

    def load_narration(self, narration_id: str) -> Optional[NarrationResource]:
        """
        Load a narration from storage.

        Args:
            narration_id: Narration identifier

        Returns:
            Narration resource if found, None otherwise
        """
        try:
            file_path = self._path_for(narration_id)
        except ValueError:
            self.logger.warning(f"Rejected narration id: {narration_id!r}")
            return None

        if not file_path.exists():
            self.logger.warning(f"Narration not found: {narration_id}")
            return None

        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return NarrationResource.model_validate(data)

    def list_narrations(self) -> list[str]:
        """
        List all narration IDs.

        Returns:
            Sorted list of narration IDs
        """
        narration_ids = sorted(f.stem for f in self.storage_path.glob("*.json"))
        self.logger.info(f"Found {len(narration_ids)} narrations")
        return narration_ids
