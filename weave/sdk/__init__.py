"""Client SDK for the nodeweave server."""

from weave.sdk.client import WeaveClient, WeaveClientError

__all__ = ["WeaveClient", "WeaveClientError"]
