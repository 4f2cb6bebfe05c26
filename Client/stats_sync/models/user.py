"""
User Data Models

Contains the identity and credential passed into each reconciliation.
"""

from dataclasses import dataclass
from typing import Optional

from ..utils.helpers import user_id_from_token


@dataclass(frozen=True)
class SyncContext:
    """
    Who to reconcile for and which bearer credential to use.

    ``user_id`` may be None when the credential is opaque and no identity was
    configured. The remote call does not need it; only the cache lookup does.
    """
    user_id: Optional[str] = None
    credential: Optional[str] = None

    @classmethod
    def from_token(cls, credential: Optional[str], user_id: Optional[str] = None) -> 'SyncContext':
        """
        Build a context, reading the user id from the token when not given.

        Args:
            credential: Opaque bearer token (may be None)
            user_id: Explicit user identity, preferred over the token claim

        Returns:
            SyncContext, with ``user_id`` None if neither source names a user
        """
        if not user_id:
            user_id = user_id_from_token(credential)
        return cls(user_id=str(user_id) if user_id else None, credential=credential)
