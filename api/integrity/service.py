"""
Self / foreign reference guard on top of `resolver.resolve()`.

The two flags pick which outcome the caller enforces:

    validate_self_id  check_self_only   used by
    True              True              delete  (entity must exist)
    False             False             create  (referenced entities must exist)
    True              False             update  (both)
"""

from __future__ import annotations

from typing import Mapping

from fastapi import status

from core.envelope import ApiError

from . import resolver
from .registry import EntityKind
from .resolver import KeyDescriptor, Resolution, Status


class ReferenceNotFoundError(ApiError):
    def __init__(self, kind: EntityKind, message: str) -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, message)
        self.kind = kind


async def check_references(
    descriptor: KeyDescriptor,
    *,
    self_kind: EntityKind,
    self_message: str,
    foreign: Mapping[EntityKind, str],
    validate_self_id: bool,
    check_self_only: bool,
) -> Resolution:
    """
    Resolve `descriptor` once and raise `ReferenceNotFoundError` for the first
    enforced kind that did not resolve.

    `foreign` maps each referenced kind to its not-found message; it is
    checked in insertion order. Database errors propagate unchanged.
    """
    resolution = await resolver.resolve(descriptor)

    if validate_self_id and resolution.status(self_kind) is not Status.FOUND:
        raise ReferenceNotFoundError(self_kind, self_message)

    if not check_self_only:
        for kind, message in foreign.items():
            if kind == self_kind:
                continue
            if resolution.status(kind) is not Status.FOUND:
                raise ReferenceNotFoundError(kind, message)

    return resolution
