"""
Command Registry
----------------
Loads the command catalogue from YAML and answers lookups by id and
category. Ranking lives in commands.search; this module only knows the
catalogue.

Catalogue format:

    commands:
      - id: infra:start
        label: Start Infrastructure Service
        category: Infrastructure
        keywords: [docker, service]
        aliases: [boot docker]
        params:                # optional static parameter list
          - {id: redis, label: Redis}
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import yaml

from core.errors import CatalogueError, ErrorCategory
from infra.logging import get_logger

from .models import Command
from .search import coerce_commands


DEFAULT_CATALOGUE = Path(__file__).parent / "command_map.yaml"


class CommandRegistry:
    """
    Ordered catalogue of command definitions.

    Catalogue order is significant: it is the order an empty search shows
    and the order categories are grouped in.
    """

    def __init__(self, registry_path: Optional[Union[str, Path]] = None):
        self._commands: Dict[str, Command] = {}
        self._logger = get_logger("commands.registry")

        if registry_path:
            self.load(registry_path)

    @classmethod
    def default(cls) -> "CommandRegistry":
        """Registry loaded from the bundled catalogue."""
        return cls(DEFAULT_CATALOGUE)

    @classmethod
    def from_commands(cls, commands: Sequence) -> "CommandRegistry":
        registry = cls()
        registry.extend(commands)
        return registry

    def load(self, registry_path: Union[str, Path]) -> None:
        """Load command definitions from a YAML file."""
        path = Path(registry_path)

        if not path.exists():
            raise CatalogueError(
                f"Command catalogue not found: {registry_path}",
                category=ErrorCategory.CATALOGUE_MISSING,
                details={"path": str(path)},
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CatalogueError(
                f"Cannot parse {path}: {e}",
                details={"path": str(path)},
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("commands"), list):
            raise CatalogueError(
                f"{path} must contain a 'commands' list",
                details={"path": str(path)},
            )

        self.extend(data["commands"])
        self._logger.info(f"Loaded {len(data['commands'])} commands from {path}")

    def extend(self, records: Sequence) -> None:
        """
        Add records after the existing ones; ids must stay unique.

        The batch is all-or-nothing: on any invalid record or duplicate id
        the registry is left as it was.
        """
        batch = coerce_commands(records)
        seen = set(self._commands)
        for cmd in batch:
            if cmd.id in seen:
                raise CatalogueError(
                    f"Duplicate command id: {cmd.id}",
                    details={"id": cmd.id},
                )
            seen.add(cmd.id)
        for cmd in batch:
            self._commands[cmd.id] = cmd

    def get_command(self, command_id: str) -> Optional[Command]:
        """Get a command definition by ID."""
        return self._commands.get(command_id)

    def list_commands(self) -> List[Command]:
        """All commands in catalogue order."""
        return list(self._commands.values())

    def list_commands_by_category(self, category: str) -> List[Command]:
        return [cmd for cmd in self._commands.values() if cmd.category == category]

    def categories(self) -> List[str]:
        """Distinct categories in first-seen order."""
        seen: Dict[str, None] = {}
        for cmd in self._commands.values():
            seen.setdefault(cmd.category, None)
        return list(seen)

    def group_by_category(self, commands: Sequence[Command]) -> List[Tuple[str, List[Command]]]:
        """
        Group a ranked command list for display.

        Groups follow catalogue category order; commands keep their rank
        order inside a group. Empty groups are omitted.
        """
        buckets: Dict[str, List[Command]] = {}
        for cmd in commands:
            buckets.setdefault(cmd.category, []).append(cmd)

        order = self.categories()
        order.extend(c for c in buckets if c not in order)
        return [(category, buckets[category]) for category in order if category in buckets]

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, command_id: str) -> bool:
        return command_id in self._commands

    def __iter__(self):
        return iter(self._commands.values())
