"""
Base settings infrastructure.

Provides BaseSettings with an immutable update pattern
and dictionary serialization for the package's settings dataclasses.

Features:
    - Immutable update pattern (prevents shared mutable state bugs)
    - Dictionary serialization (to_dict/from_dict)
    - Field name validation (prevents typos)
    - Pretty printing for inspection
"""

from dataclasses import asdict, fields
from typing import Dict, Any, Iterable
from abc import ABC


def _check_known_fields(cls_name: str, valid_fields: set, names: Iterable[str]):
    unknown = set(names) - valid_fields
    if unknown:
        allowed = ', '.join(sorted(valid_fields))
        unknown_str = ', '.join(f"'{k}'" for k in sorted(unknown))
        raise ValueError(
            f"Unknown setting(s) {unknown_str} for {cls_name}. "
            f"Allowed settings: {allowed}"
        )


class BaseSettings(ABC):
    """
    Base class for settings dataclasses.

    Usage:
        # Create settings
        settings = AccessSettings()

        # Update (returns new instance)
        new_settings = settings.update(read_buffer_size=4096)

        # Convert to dict
        settings_dict = settings.to_dict()

        # Load from dict
        settings = AccessSettings.from_dict({'xz_tool': 'unxz'})
    """

    def update(self, **kwargs):
        """
        Update settings and return new instance (immutable pattern).

        Args:
            **kwargs: Settings to update

        Returns:
            New settings instance with updated values

        Raises:
            ValueError: If an unknown setting name is provided

        Example:
            >>> settings = AccessSettings()
            >>> new_settings = settings.update(read_buffer_size=4096)
            >>> settings.read_buffer_size  # Original unchanged
            81920
        """
        _check_known_fields(
            self.__class__.__name__,
            {f.name for f in fields(self)},
            kwargs.keys(),
        )

        data = self.to_dict()
        data.update(kwargs)
        # __post_init__ re-validates the rebuilt instance
        return self.__class__(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """
        Create settings instance from dictionary.

        Args:
            data: Dictionary with settings

        Returns:
            New settings instance

        Raises:
            ValueError: If dictionary contains unknown settings
        """
        _check_known_fields(cls.__name__, {f.name for f in fields(cls)}, data.keys())
        return cls(**data)

    def __str__(self) -> str:
        lines = [f"{self.__class__.__name__}:"]
        for key, value in self.to_dict().items():
            lines.append(f"  {key}: {value}")
        return '\n'.join(lines)

    def __repr__(self) -> str:
        params = ', '.join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{self.__class__.__name__}({params})"
