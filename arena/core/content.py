import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Optional

from catchery import log_warning
from character.main import Character
from combat.dungeon import DungeonTemplate, EnemyTemplate
from pydantic import BaseModel

from core.error_handling import ReferenceNotFoundError
from core.logging import get_logger

logger = get_logger(__name__)


class ContentRepository:
    """
    Read-only registry of the enemies, dungeons and characters a combat needs.

    Lookups of unknown ids raise ``ReferenceNotFoundError``; nothing is ever
    defaulted.
    """

    enemies: dict[str, EnemyTemplate]
    dungeons: dict[str, DungeonTemplate]
    characters: dict[str, Character]

    def __init__(
        self,
        enemies: Iterable[EnemyTemplate] = (),
        dungeons: Iterable[DungeonTemplate] = (),
        characters: Iterable[Character] = (),
    ) -> None:
        self.enemies = {enemy.id: enemy for enemy in enemies}
        self.dungeons = {dungeon.id: dungeon for dungeon in dungeons}
        self.characters = {character.id: character for character in characters}

    @classmethod
    def from_directory(cls, root: Path) -> "ContentRepository":
        """
        Loads ``enemies.json`` and ``dungeons.json`` (and ``characters.json``
        when present) from a directory.

        Args:
            root (Path):
                The directory containing the data files.

        Returns:
            ContentRepository: The loaded repository.

        """
        repository = cls(
            enemies=_load_json_file(root / "enemies.json", EnemyTemplate, "enemies"),
            dungeons=_load_json_file(root / "dungeons.json", DungeonTemplate, "dungeons"),
        )
        characters_file = root / "characters.json"
        if characters_file.exists():
            for character in _load_json_file(characters_file, Character, "characters"):
                repository.characters[character.id] = character
        return repository

    @classmethod
    def from_mappings(
        cls,
        enemies: Iterable[dict[str, Any]] = (),
        dungeons: Iterable[dict[str, Any]] = (),
        characters: Iterable[dict[str, Any]] = (),
    ) -> "ContentRepository":
        """Builds a repository from plain records, e.g. rows of a data store."""
        return cls(
            enemies=[EnemyTemplate.model_validate(record) for record in enemies],
            dungeons=[DungeonTemplate.model_validate(record) for record in dungeons],
            characters=[Character.model_validate(record) for record in characters],
        )

    def _get_from_collection(self, collection_name: str, kind: str, reference: str) -> Any:
        collection: dict[str, Any] = getattr(self, collection_name)
        entry = collection.get(reference)
        if entry is None:
            log_warning(
                f"{kind.capitalize()} '{reference}' not found in ContentRepository.",
                {"collection_name": collection_name, "reference": reference},
            )
            raise ReferenceNotFoundError(kind, reference)
        return entry

    def get_enemy(self, enemy_id: str) -> EnemyTemplate:
        return self._get_from_collection("enemies", "enemy", enemy_id)

    def get_dungeon(self, dungeon_id: str) -> DungeonTemplate:
        return self._get_from_collection("dungeons", "dungeon", dungeon_id)

    def get_character(self, character_id: str) -> Character:
        return self._get_from_collection("characters", "character", character_id)

    def find_dungeon_by_code(self, code: str) -> Optional[DungeonTemplate]:
        """Get a dungeon by its code, or None if not found."""
        return next(
            (dungeon for dungeon in self.dungeons.values() if dungeon.code == code),
            None,
        )


def _load_json_file(
    filepath: Path,
    model: type[BaseModel],
    description: str,
) -> list[Any]:
    """Helper to load and validate JSON files"""
    logger.debug("Loading %s from %s", description, filepath)
    try:
        if not filepath.is_file():
            raise FileNotFoundError(f"File not found: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        return [model.model_validate(record) for record in data]
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}") from e
