"""
Request signing for closed API methods.

The signature is the MD5 of ``token:marker`` followed by every parameter
value, colon separated, in lexicographic order of the parameter keys.
"""

from typing import Dict, Mapping, Optional
from urllib.parse import urlencode
import hashlib


def compute_signature(token: str, marker: int, params: Optional[Mapping[str, str]] = None) -> str:
    """Return the lowercase hex signature for ``params``."""
    parts = [token, str(marker)]
    if params:
        parts.extend(params[key] for key in sorted(params))
    source = ":".join(parts)
    return hashlib.md5(source.encode("utf-8")).hexdigest()


def signed_query(token: str, marker: int, params: Optional[Mapping[str, str]] = None) -> str:
    """
    Urlencode ``params`` together with ``marker`` and ``signature``.

    Keys are emitted in sorted order, e.g.
    ``marker=35290&signature=abdab6a981233bdaf156a5abc17cb382``.
    """
    values: Dict[str, str] = dict(params or {})
    values["marker"] = str(marker)
    values["signature"] = compute_signature(token, marker, params)
    return encode_query(values)


def encode_query(params: Mapping[str, str]) -> str:
    """Form-encode ``params`` with keys in sorted order."""
    return urlencode(sorted(params.items()))
