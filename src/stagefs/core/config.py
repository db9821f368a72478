"""Environment-driven settings for stagefs.

Settings are read from ``STAGEFS_*`` environment variables and validated
with Pydantic. Explicit arguments passed to the primitives always win over
these defaults; the settings only feed the CLI and callers that opt in.
"""

from __future__ import annotations

import hashlib
import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from stagefs.core.constants import DEFAULT_DIGEST_ALGORITHM, MAX_DEPTH

__all__ = ["FsSettings", "load_settings", "normalize_algorithm"]

OnUnreadable = Literal["skip", "fail"]


def normalize_algorithm(algorithm: str) -> str:
    """Map a user-facing algorithm name to its hashlib spelling.

    ``"SHA1"``, ``"sha-1"`` and ``"Sha1"`` all become ``"sha1"``, while
    ``"SHA3-256"`` becomes ``"sha3_256"`` and ``"SHA-512/256"`` becomes
    ``"sha512_256"``.
    """
    name = algorithm.strip().lower()
    for candidate in (name, name.replace("-", "_")):
        if candidate in hashlib.algorithms_available:
            return candidate

    return name.replace("-", "").replace("/", "_")


class FsSettings(BaseModel):
    """Validated stagefs settings."""

    max_depth: int = Field(default=MAX_DEPTH, ge=1)
    hash_algorithm: str = DEFAULT_DIGEST_ALGORITHM
    on_unreadable: OnUnreadable = "skip"

    @field_validator("hash_algorithm")
    @classmethod
    def validate_hash_algorithm(cls, value: str) -> str:
        name = normalize_algorithm(value)
        if name not in hashlib.algorithms_available or name.startswith("shake_"):
            raise ValueError(f"unsupported digest algorithm: {value}")
        return value

    @field_validator("on_unreadable", mode="before")
    @classmethod
    def lower_on_unreadable(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


def load_settings(environ: Mapping[str, str] | None = None) -> FsSettings:
    """Build settings from the environment.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        Validated FsSettings; unset variables fall back to the defaults

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value
    """
    env = os.environ if environ is None else environ
    values: dict[str, str] = {}

    if env.get("STAGEFS_MAX_DEPTH"):
        values["max_depth"] = env["STAGEFS_MAX_DEPTH"]
    if env.get("STAGEFS_HASH_ALGORITHM"):
        values["hash_algorithm"] = env["STAGEFS_HASH_ALGORITHM"]
    if env.get("STAGEFS_ON_UNREADABLE"):
        values["on_unreadable"] = env["STAGEFS_ON_UNREADABLE"]

    return FsSettings.model_validate(values)
