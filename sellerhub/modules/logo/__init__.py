"""Logo slot domain exports."""

from .exceptions import InvalidLogoError, LogoConflictError, LogoError, LogoNotFoundError
from .models import LogoRemoval, LogoReplacement, LogoSlot
from .service import LogoService, decode_logo_base64, resolve_logo_file_name

__all__ = [
    "InvalidLogoError",
    "LogoConflictError",
    "LogoError",
    "LogoNotFoundError",
    "LogoRemoval",
    "LogoReplacement",
    "LogoService",
    "LogoSlot",
    "decode_logo_base64",
    "resolve_logo_file_name",
]
