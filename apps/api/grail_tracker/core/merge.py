"""
Partial update merge policies.

Two policies coexist on purpose and are applied per field:

- coalesce_defined: absent or None keeps the existing value. False and 0 are
  real values and are written.
- apply_present: an absent key keeps the existing value, a present key
  overwrites it, None included (this is how nullable text gets cleared).

Callers must pass the patch built with model_dump(exclude_unset=True) so the
two cases stay distinguishable.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping


def coalesce_defined(patch: Mapping[str, Any], existing: Mapping[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for f in fields:
        v = patch.get(f)
        out[f] = existing[f] if v is None else v
    return out


def apply_present(patch: Mapping[str, Any], existing: Mapping[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for f in fields:
        out[f] = patch[f] if f in patch else existing[f]
    return out
