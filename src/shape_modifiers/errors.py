"""Exceptions raised by the modifier engine."""


class ModifierError(Exception):
    """Base class for modifier engine errors."""


class UnknownModifierType(ModifierError, ValueError):
    """Raised when a modifier record names a type with no processor."""

    def __init__(self, modifier_type, modifier_id=None):
        self.modifier_type = modifier_type
        self.modifier_id = modifier_id
        message = f"Unknown modifier type '{modifier_type}'"
        if modifier_id is not None:
            message += f" (modifier '{modifier_id}')"
        super().__init__(message)


class SceneError(ModifierError):
    """Raised when a scene file cannot be turned into shapes and modifiers."""
