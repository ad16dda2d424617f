"""errwire's own error hierarchy (library misuse, bad registry data)."""


class ErrwireError(Exception):
    """Base exception for all errwire library errors."""


class RegistryError(ErrwireError):
    """Registry data is invalid, or a lookup named an unknown entry."""
