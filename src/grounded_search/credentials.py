"""API credential resolution."""

import os

MIN_CREDENTIAL_LENGTH = 5


def resolve_credential(override: str | None, default: str | None) -> str | None:
    """Pick the credential to use for a call.

    A user override wins when it is non-empty after trimming; otherwise the
    ambient default is used when non-empty. Absence is a normal outcome.

    Args:
        override: Credential persisted by the user, if any.
        default: Credential provided by the environment, if any.

    Returns:
        The active credential, or None.
    """
    if override and override.strip():
        return override.strip()
    if default and default.strip():
        return default.strip()
    return None


def default_credential(env_var: str) -> str | None:
    """Read the ambient default credential from the environment."""
    return os.environ.get(env_var) or None


def is_plausible_credential(candidate: str | None) -> bool:
    """Cheap local check run before spending a model call on a candidate."""
    return bool(candidate) and len(candidate.strip()) >= MIN_CREDENTIAL_LENGTH
