"""
Static data — the registry of known file digests.
"""

from zshetc.core.data.known_hashes import (
    ENV,
    INTERACTIVE_RC,
    KNOWN_SHA256_HASHES,
    LOGICAL_NAMES,
    LOGIN_PROFILE,
    known_hashes,
)

__all__ = [
    "ENV",
    "INTERACTIVE_RC",
    "KNOWN_SHA256_HASHES",
    "LOGICAL_NAMES",
    "LOGIN_PROFILE",
    "known_hashes",
]
