"""
Profile store with optimistic concurrency.

Profiles are keyed by (agent_id, user_id) and carry a version stamp. Writers
pass the version they read; a stale write raises ProfileVersionConflictError
so the caller can re-read, re-merge and retry instead of losing an update.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Mapping, Any, Optional, Tuple

from app.ai_core.profile import merge
from app.models.profile import Profile

logger = logging.getLogger(__name__)


class ProfileVersionConflictError(Exception):
    """Raised when a profile was modified after it was read."""

    pass


class ProfileUpdateError(Exception):
    """Raised when a profile update could not be applied after retries."""

    pass


@dataclass(frozen=True)
class VersionedProfile:
    """A profile snapshot with the version it was read at (0 = not stored)."""

    profile: Profile
    version: int


class ProfileStore:
    """In-memory profile persistence with version stamps."""

    def __init__(self):
        self._lock = threading.Lock()
        self._profiles: Dict[Tuple[str, str], VersionedProfile] = {}

    def get(self, agent_id: str, user_id: str) -> VersionedProfile:
        """
        Read a profile snapshot.

        Returns:
            Stored profile, or an empty profile at version 0
        """
        with self._lock:
            stored = self._profiles.get((agent_id, user_id))
        if stored is None:
            return VersionedProfile(profile=Profile(), version=0)
        return VersionedProfile(
            profile=stored.profile.model_copy(deep=True), version=stored.version
        )

    def save(
        self, agent_id: str, user_id: str, profile: Profile, expected_version: int
    ) -> int:
        """
        Write a profile if nobody else wrote it since `expected_version`.

        Returns:
            The new version

        Raises:
            ProfileVersionConflictError: If the stored version differs
        """
        key = (agent_id, user_id)
        with self._lock:
            stored = self._profiles.get(key)
            current_version = stored.version if stored else 0
            if current_version != expected_version:
                raise ProfileVersionConflictError(
                    f"Profile {agent_id}/{user_id} is at version {current_version}, "
                    f"expected {expected_version}"
                )
            new_version = current_version + 1
            self._profiles[key] = VersionedProfile(
                profile=profile.model_copy(deep=True), version=new_version
            )
        return new_version

    def clear(self, agent_id: str, user_id: str) -> bool:
        """Delete a profile. Returns whether one existed."""
        with self._lock:
            return self._profiles.pop((agent_id, user_id), None) is not None

    def list_users(self, agent_id: str) -> List[str]:
        with self._lock:
            return sorted(user for agent, user in self._profiles if agent == agent_id)


class ProfileService:
    """
    Applies partial profiles to stored profiles with read-merge-write retries.
    """

    def __init__(self, store: ProfileStore, max_retries: int = 3):
        self.store = store
        self.max_retries = max(1, max_retries)

    def get_profile(self, agent_id: str, user_id: str) -> Profile:
        return self.store.get(agent_id, user_id).profile

    def apply(
        self,
        agent_id: str,
        user_id: str,
        partial: Optional[Mapping[str, Any]],
        source: str = "widget",
    ) -> Profile:
        """
        Merge a partial profile into the stored profile and persist it.

        Args:
            agent_id: Agent identifier
            user_id: User identifier
            partial: Partial profile to merge
            source: Channel that produced the update

        Returns:
            The persisted merged profile

        Raises:
            ProfileUpdateError: If every attempt hit a version conflict
        """
        for attempt in range(1, self.max_retries + 1):
            snapshot = self.store.get(agent_id, user_id)
            merged = merge(snapshot.profile, partial, source=source)
            try:
                version = self.store.save(agent_id, user_id, merged, snapshot.version)
            except ProfileVersionConflictError as e:
                logger.warning(f"Profile update conflict (attempt {attempt}): {e}")
                continue

            logger.info(
                f"Profile updated: agent={agent_id} user={user_id} "
                f"version={version} confidence={merged.metadata.confidence}"
            )
            return merged

        raise ProfileUpdateError(
            f"Could not update profile {agent_id}/{user_id} "
            f"after {self.max_retries} attempts"
        )
