"""Configuration schema definitions using Pydantic for validation.

Every knob of an extraction run lives in :class:`ExtractionConfig` so
configuration errors are caught before any symbol is collected.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class ExtractionConfig(BaseModel):
    """Top-level configuration for one documentation graph extraction.

    Attributes:
        package_name: Name whose root symbol is shown as ``/``. Defaults to
            the display name of the first root when unset.
        hash_length: Number of hex digits kept from each symbol digest.
        strict: Raise on unresolved exports instead of recording diagnostics.
        modules_only: Only serialize modules and namespaces (export maps of
            dependency packages); no references are recorded.
        apply_export_names: Rename exported declarations to their canonical
            export name.
        max_relaxation_passes: Cap on owner relaxation passes (0 = unlimited).
    """

    package_name: Optional[str] = None
    hash_length: int = Field(default=16, ge=8, le=64)
    strict: bool = False
    modules_only: bool = False
    apply_export_names: bool = False
    max_relaxation_passes: int = Field(default=0, ge=0)

    model_config = {"extra": "forbid"}

    @field_validator("package_name")
    @classmethod
    def validate_package_name(cls, v: Optional[str]) -> Optional[str]:
        """Reject blank package names."""
        if v is not None and not v.strip():
            raise ValueError("package_name must not be blank")
        return v

    @classmethod
    def default(cls) -> "ExtractionConfig":
        """Create the default configuration."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractionConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary.

        Returns:
            ExtractionConfig instance.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()
