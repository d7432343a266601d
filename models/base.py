from pydantic import BaseModel, ConfigDict


class BaseGolfModel(BaseModel):
    """Shared configuration for mutable result models."""
    model_config = ConfigDict(validate_assignment=True)


class FrozenGolfModel(BaseModel):
    """Shared configuration for immutable value types."""
    model_config = ConfigDict(frozen=True)
