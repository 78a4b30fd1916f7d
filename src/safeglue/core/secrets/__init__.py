"""Secret lookup and redaction of sensitive data."""

from .redaction import (
    RedactingFilter,
    redact_text_credentials,
    redact_url_credentials,
    redact_values,
)
from .secret import Secret
from .store import SecretStore, env_var_name

__all__ = [
    "RedactingFilter",
    "redact_text_credentials",
    "redact_url_credentials",
    "redact_values",
    "Secret",
    "SecretStore",
    "env_var_name",
]
