"""
Configuration settings for LogParse.

ParseConfig holds what the configuration file defines (defaults and groups);
ParseOptions is the resolved, read-only set of parameters for one run.
"""

import os
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from logparse.exceptions import ConfigurationError
from logparse.parser.matcher import EVERYONE, Group

from .loader import ConfigLoader

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".txt"


@dataclass(frozen=True)
class ParseOptions:
    """Resolved parameters for one batch run."""

    dry_run: bool = False
    force_replace: bool = False
    include_emotes: bool = False
    group: Group = EVERYONE
    files: Tuple[Path, ...] = ()
    output_dir: Optional[Path] = None
    extension: str = DEFAULT_EXTENSION

    def copy(self, **changes) -> "ParseOptions":
        """Return a copy with the given fields replaced; files are normalized to Paths."""
        if "files" in changes:
            changes["files"] = tuple(Path(f) for f in changes["files"])
        if changes.get("output_dir") is not None:
            changes["output_dir"] = Path(changes["output_dir"])
        return replace(self, **changes)

    def validate(self):
        """Validate the options before any file is processed."""
        errors = []

        if not isinstance(self.group, Group):
            errors.append(f"No valid group selected: {self.group!r}")

        if not _valid_extension(self.extension):
            errors.append(f"Invalid transcript extension: {self.extension!r}")

        if self.output_dir is not None and self.output_dir.exists() and not self.output_dir.is_dir():
            errors.append(f"Output directory is not a directory: {self.output_dir}")

        if errors:
            raise ConfigurationError(f"Invalid options: {'; '.join(errors)}")

    def __str__(self) -> str:
        return (
            f"ParseOptions(dry_run={self.dry_run}, force_replace={self.force_replace}, "
            f"include_emotes={self.include_emotes}, group={self.group.label}, "
            f"files={len(self.files)}, output_dir={self.output_dir}, extension={self.extension})"
        )


@dataclass
class ParseConfig:
    """Settings read from the configuration file."""

    dry_run: bool = False
    replace_if_exists: bool = False
    include_emotes: bool = False
    default_group: str = EVERYONE.short_name
    output_dir: Optional[str] = None
    extension: str = DEFAULT_EXTENSION
    groups: Dict[str, Group] = field(default_factory=lambda: {EVERYONE.short_name: EVERYONE})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParseConfig":
        """
        Build the configuration from a parsed YAML document.

        Args:
            data: Mapping as returned by the config loader

        Raises:
            ConfigurationError: listing every malformed entry
        """
        errors: List[str] = []
        defaults = cls()

        def flag(key: str, default: bool) -> bool:
            value = data.get(key, default)
            if not isinstance(value, bool):
                errors.append(f"'{key}' must be true or false, got {value!r}")
                return default
            return value

        def text(key: str, default: Optional[str]) -> Optional[str]:
            value = data.get(key, default)
            if value is not None and not isinstance(value, str):
                errors.append(f"'{key}' must be a string, got {value!r}")
                return default
            return value

        groups = cls._parse_groups(data.get("groups") or {}, errors)

        config = cls(
            dry_run=flag("dry_run", defaults.dry_run),
            replace_if_exists=flag("replace_if_exists", defaults.replace_if_exists),
            include_emotes=flag("include_emotes", defaults.include_emotes),
            default_group=text("default_group", defaults.default_group) or EVERYONE.short_name,
            output_dir=text("output_dir", defaults.output_dir),
            extension=text("extension", defaults.extension) or DEFAULT_EXTENSION,
            groups=groups,
        )

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

        return config

    @staticmethod
    def _parse_groups(raw: Any, errors: List[str]) -> Dict[str, Group]:
        groups = {EVERYONE.short_name: EVERYONE}

        if not isinstance(raw, dict):
            errors.append("'groups' must be a mapping of short name to group")
            return groups

        for short_name, definition in raw.items():
            key = str(short_name).strip().lower()
            if not key:
                errors.append("Group short names must not be empty")
                continue
            if key == EVERYONE.short_name:
                errors.append(f"Group name '{EVERYONE.short_name}' is reserved")
                continue
            if key in groups:
                errors.append(f"Duplicate group '{key}'")
                continue

            if isinstance(definition, list):
                # Shorthand: a bare list of members, labelled by its short name
                definition = {"members": definition}
            if not isinstance(definition, dict):
                errors.append(f"Group '{key}' must be a mapping or a list of names")
                continue

            label = definition.get("label", str(short_name).title())
            members = definition.get("members") or []
            if not isinstance(label, str) or not label.strip():
                errors.append(f"Group '{key}' needs a non-empty label")
                continue
            if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
                errors.append(f"Group '{key}' members must be a list of names")
                continue

            groups[key] = Group.of(key, label.strip(), members)
            if not groups[key].members:
                logger.warning(f"Group '{key}' has no members and will match nothing")

        return groups

    @classmethod
    def read(cls, config_path: Optional[str] = None) -> "ParseConfig":
        """Load the configuration file (or defaults when none is found)."""
        config_path = config_path or os.getenv("LOGPARSE_CONFIG")
        return cls.from_dict(ConfigLoader.load_config(config_path))

    def resolve_group(self, name: str) -> Group:
        """
        Look up a group by short name, case-insensitively.

        Raises:
            ConfigurationError: if no such group is configured
        """
        group = self.groups.get(name.strip().lower())
        if group is None:
            known = ", ".join(sorted(self.groups))
            raise ConfigurationError(f"Unknown group '{name}' (known groups: {known})")
        return group

    def validate(self):
        """Validate configuration settings."""
        errors = []

        if self.default_group.strip().lower() not in self.groups:
            errors.append(f"Default group '{self.default_group}' is not defined")

        if not _valid_extension(self.extension):
            errors.append(f"Invalid transcript extension: {self.extension!r}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def as_options(self) -> ParseOptions:
        """Default options for a run, before command line overrides."""
        return ParseOptions(
            dry_run=self.dry_run,
            force_replace=self.replace_if_exists,
            include_emotes=self.include_emotes,
            group=self.resolve_group(self.default_group),
            output_dir=Path(self.output_dir).expanduser() if self.output_dir else None,
            extension=self.extension,
        )

    def log_configuration(self):
        """Log current configuration."""
        logger.debug("=== LogParse Configuration ===")
        logger.debug(f"Dry run: {self.dry_run}")
        logger.debug(f"Replace if exists: {self.replace_if_exists}")
        logger.debug(f"Include emotes: {self.include_emotes}")
        logger.debug(f"Default group: {self.default_group}")
        logger.debug(f"Output directory: {self.output_dir or '(beside input)'}")
        for group in self.groups.values():
            logger.debug(f"Group: {group.short_name} ({group.label}) {sorted(group.members)}")
        logger.debug("=== End Configuration ===")


def _valid_extension(extension: str) -> bool:
    return (
        isinstance(extension, str)
        and len(extension) > 1
        and extension.startswith(".")
        and not any(sep in extension for sep in ("/", "\\"))
    )
