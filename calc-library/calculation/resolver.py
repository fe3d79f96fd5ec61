"""Target resolution: one step turning a raw target into its calculation-ready form."""

from __future__ import annotations

import logging
from typing import TypeVar

from calculation.errors import ResolutionError
from calculation.interfaces import Resolvable
from calculation.reference_data import ReferenceData

logger = logging.getLogger(__name__)

R = TypeVar("R")


def resolve_target(target: Resolvable[R], ref_data: ReferenceData) -> R:
    """
    Resolve `target` against reference data.

    Any error raised while resolving surfaces as ResolutionError; no measure
    can be calculated without the resolved form.
    """
    try:
        resolved = target.resolve(ref_data)
    except Exception as exc:
        raise ResolutionError(f"Unable to resolve {type(target).__name__}: {exc}") from exc
    logger.debug("Resolved %s", type(target).__name__)
    return resolved
