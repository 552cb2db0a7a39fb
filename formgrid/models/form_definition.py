"""Module: form_definition.py

Date: 2026-10-19

The parts of a form resource the submissions table depends on.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class FormDefinition:
    """Form resource as returned by the forms API.

    ``properties`` and ``removed_properties`` are kept exactly as received;
    column derivation is responsible for coping with malformed values.
    """

    id: int | str | None = None
    slug: str | None = None
    properties: Any = None
    removed_properties: Any = field(default_factory=list)
    is_pro: bool = False
    enable_partial_submissions: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormDefinition":
        """Build from a decoded form resource.

        Raises:
            TypeError: if ``data`` is not a mapping
        """
        if not isinstance(data, dict):
            raise TypeError(f"Form definition must be a mapping, got {type(data).__name__}")
        return cls(
            id=data.get("id"),
            slug=data.get("slug"),
            properties=data.get("properties"),
            removed_properties=data.get("removed_properties") or [],
            is_pro=bool(data.get("is_pro", False)),
            enable_partial_submissions=bool(data.get("enable_partial_submissions") or False),
        )

    @property
    def table_key(self) -> str:
        """Identity of the submissions table: form id, falling back to slug."""
        if self.id not in (None, ""):
            return str(self.id)
        return self.slug or ""
