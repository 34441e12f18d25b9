"""
casepriority Profile Fingerprints

Every assessment records which weight table produced it. The fingerprint is
a SHA-256 over a canonical JSON rendering (sorted keys, compact separators,
UTF-8) of the scoring-relevant part of a profile, so two deployments that
load the same weights compute the same fingerprint regardless of key order
or file format.
"""
from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any


FINGERPRINT_LENGTH = 12


def _encode_extra(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    raise TypeError(f"Cannot canonicalize {type(value).__name__}")


def canonical_json(value: Any) -> str:
    """
    Deterministic JSON text for hashing.

        >>> canonical_json({"weight": 30, "factor": "age_under_12"})
        '{"factor":"age_under_12","weight":30}'
    """
    if is_dataclass(value) and not isinstance(value, type):
        value = asdict(value)
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_encode_extra,
    )


def content_hash(value: Any) -> str:
    """SHA-256 hex digest of canonical_json(value)."""
    return hashlib.sha256(canonical_json(value).encode("utf-8")).hexdigest()


def content_hash_short(value: Any, length: int = FINGERPRINT_LENGTH) -> str:
    return content_hash(value)[:length]


def compute_profile_hash(profile: Any) -> str:
    """
    Full fingerprint of a JurisdictionProfile.

    Covers id, version and the weight table (thresholds included). Contacts,
    legal metadata and service area are left out: correcting a phone number
    must not change the fingerprint of past assessments.
    """
    return content_hash({
        "id": profile.id,
        "version": profile.version,
        "priority_weights": asdict(profile.priority_weights),
    })


def profile_fingerprint(profile: Any) -> str:
    """Short fingerprint recorded on each AssessmentResult."""
    return compute_profile_hash(profile)[:FINGERPRINT_LENGTH]
