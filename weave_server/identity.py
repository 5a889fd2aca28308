"""Request identity.

Authentication happens in front of this service; it forwards the caller's
identity in the ``X-Owner-Id`` header. A request without one is refused.
"""

from fastapi import Header, HTTPException


def get_owner_id(x_owner_id: str | None = Header(default=None)) -> str:
    if not x_owner_id or not x_owner_id.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_owner_id.strip()
