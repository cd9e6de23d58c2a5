# geomath/utils/base_model.py
from typing import TypeVar, Any, cast
from pydantic import BaseModel

T = TypeVar('T', bound=BaseModel)


class ImmutableModel(BaseModel):
    """
    Base class for the geometric value types.

    Points and lines behave as values, so every model derived from this class:
    - is frozen after creation (fields cannot be reassigned)
    - produces modified copies via with_changes() instead of mutating
    """
    model_config = {
        "frozen": True,
    }

    def with_changes(self, **changes: Any) -> T:
        """
        Create a new instance with specified changes.

        The copy goes through full validation, so any range or consistency
        check applied at construction also applies to the changed fields.

        Args:
            **changes: Keyword arguments with field values to change

        Returns:
            New instance with updated values

        Raises:
            ValueError: If an invalid field name is provided
        """
        # Nested models are kept as instances rather than dumped to dicts
        current_data = {name: getattr(self, name) for name in type(self).model_fields}

        for key, value in changes.items():
            if key not in current_data:
                raise ValueError(f"Invalid field: {key}")
            current_data[key] = value

        cls = self.__class__
        return cast(T, cls.model_validate(current_data))
