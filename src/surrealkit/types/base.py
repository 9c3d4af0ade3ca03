"""Base model shared by surrealkit's pydantic models."""

from typing import Any, Dict, Optional, Set

from pydantic import BaseModel, ConfigDict


class SurrealKitModel(BaseModel):
    """Base model for surrealkit value objects.

    Enum fields store their values and assignments are re-validated.
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=True,
        validate_assignment=True
    )

    def to_dict(self, exclude: Optional[Set[str]] = None) -> Dict[str, Any]:
        """Convert the model to a JSON-friendly dictionary.

        Unset (None) fields are dropped, enums become their values and
        secrets are masked.

        Args:
            exclude: Field names to leave out
        """
        return self.model_dump(mode="json", exclude=exclude, exclude_none=True)
