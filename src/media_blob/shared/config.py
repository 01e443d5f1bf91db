"""Konfiguracja potoku rozwiązywania blobów."""

from __future__ import annotations

import os
from dataclasses import dataclass

_ENV_PREFIX = "MEDIA_BLOB_"


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Limity rozpakowywania archiwów.

    The defaults bound nested archives so that a hostile blob cannot exhaust
    memory: at most ``max_archive_depth`` levels of zip-in-zip, at most
    ``max_archive_entries`` files in total, and at most
    ``max_decompressed_bytes`` of member data across the whole expansion.
    """

    max_archive_depth: int = 4
    max_archive_entries: int = 1024
    max_decompressed_bytes: int = 256 * 1024 * 1024

    def __post_init__(self) -> None:
        for name in ("max_archive_depth", "max_archive_entries", "max_decompressed_bytes"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"{name} musi być dodatnią liczbą całkowitą, otrzymano {value!r}")

    @classmethod
    def default(cls) -> "ResolverConfig":
        """Tworzy domyślną konfigurację."""

        return cls()

    @classmethod
    def from_env(cls) -> "ResolverConfig":
        """Builds a config from ``MEDIA_BLOB_*`` environment variables.

        Supported variables:
        - ``MEDIA_BLOB_MAX_ARCHIVE_DEPTH``
        - ``MEDIA_BLOB_MAX_ARCHIVE_ENTRIES``
        - ``MEDIA_BLOB_MAX_DECOMPRESSED_BYTES``

        Unset or blank variables keep the default value.
        """

        defaults = cls()
        return cls(
            max_archive_depth=_int_from_env("MAX_ARCHIVE_DEPTH", defaults.max_archive_depth),
            max_archive_entries=_int_from_env("MAX_ARCHIVE_ENTRIES", defaults.max_archive_entries),
            max_decompressed_bytes=_int_from_env("MAX_DECOMPRESSED_BYTES", defaults.max_decompressed_bytes),
        )


def _int_from_env(suffix: str, default: int) -> int:
    key = _ENV_PREFIX + suffix
    raw = (os.getenv(key) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Nieprawidłowa wartość {key}={raw!r}") from exc
