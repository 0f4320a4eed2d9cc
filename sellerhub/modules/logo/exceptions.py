"""Logo slot specific exceptions."""


class LogoError(Exception):
    """Base class for logo slot errors."""


class LogoNotFoundError(LogoError):
    """Raised when no logo has been uploaded yet."""


class LogoConflictError(LogoError):
    """Raised when the slot kept changing underneath a replacement."""


class InvalidLogoError(LogoError):
    """Raised for payloads that are not a usable image."""
