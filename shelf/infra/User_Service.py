"""User profile document store.

Profiles live in users.json keyed by user id. The auth-method lookup lives in
auth_users.json keyed by the SHA-256 of the normalised email, so the file
never contains addresses in clear text.
"""
import hashlib
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from shelf.domain.User import User, SignupMethod
from shelf.infra.exceptions import (
    UserNotFoundError, InvalidUserDataError, StoreUnavailableError,
)
from shelf.infra.json_store import safe_load, atomic_write, lock_for
from shelf.infra.paths import DATA_DIR, USERS_FILE_NAME, AUTH_USERS_FILE_NAME

logger = logging.getLogger(__name__)

# Fields clients may change through update_user
UPDATABLE_FIELDS = {"name", "email", "is_email_verified", "email_verification_sent_at",
                    "allergies", "has_completed_onboarding"}


def hash_email(email: str) -> str:
    normalized = email.strip().lower()
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


class UserService:
    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir or DATA_DIR)
        self.users_file = self.data_dir / USERS_FILE_NAME
        self.auth_users_file = self.data_dir / AUTH_USERS_FILE_NAME
        self._lock = lock_for(self.data_dir)

    # --- storage -----------------------------------------------------------
    def _load(self, path: Path) -> Dict[str, Any]:
        return safe_load(path, {})

    def _write(self, path: Path, data: Dict[str, Any]):
        try:
            atomic_write(path, data)
        except OSError as e:
            logger.error(f"Failed to write {path.name}: {e}")
            raise StoreUnavailableError() from e

    # --- user CRUD -----------------------------------------------------------
    def fetch_user(self, user_id: str) -> User:
        doc = self._load(self.users_file).get(user_id)
        if doc is None:
            raise UserNotFoundError()
        try:
            user = User.from_dict(doc)
        except ValueError as e:
            logger.error(f"Failed to decode user {user_id}: {e}")
            raise InvalidUserDataError() from e
        if not user.id:
            user.id = user_id
        return user

    def create_user(self, user: User) -> User:
        with self._lock:
            users = self._load(self.users_file)
            users[user.id] = user.to_dict()
            self._write(self.users_file, users)
        logger.info(f"User document created for: {user.id}")
        return user

    def update_user(self, user_id: str, fields: Dict[str, Any]) -> User:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise InvalidUserDataError(f"Unknown user fields: {', '.join(sorted(unknown))}")
        with self._lock:
            users = self._load(self.users_file)
            if user_id not in users:
                raise UserNotFoundError()
            old_email = users[user_id].get("email") or ""
            users[user_id].update(fields)
            self._write(self.users_file, users)
            if "email" in fields and hash_email(fields["email"]) != hash_email(old_email):
                self._move_auth_method(old_email, fields["email"])
        logger.info(f"User data updated for: {user_id}")
        return self.fetch_user(user_id)

    def delete_user(self, user_id: str):
        with self._lock:
            users = self._load(self.users_file)
            if users.pop(user_id, None) is None:
                raise UserNotFoundError()
            self._write(self.users_file, users)
        logger.info(f"User document deleted for: {user_id}")

    # --- allergies -------------------------------------------------------------
    def fetch_allergies(self, user_id: str) -> List[str]:
        doc = self._load(self.users_file).get(user_id) or {}
        allergies = doc.get("allergies")
        return list(allergies) if isinstance(allergies, list) else []

    def update_allergies(self, user_id: str, allergies: List[str]) -> User:
        return self.update_user(user_id, {"allergies": list(allergies)})

    # --- onboarding ---------------------------------------------------------------
    def has_completed_onboarding(self, user_id: str) -> Optional[bool]:
        doc = self._load(self.users_file).get(user_id)
        if doc is None:
            return None
        value = doc.get("has_completed_onboarding")
        return value if isinstance(value, bool) else None

    def complete_onboarding(self, user_id: str, allergies: Optional[List[str]] = None) -> User:
        fields: Dict[str, Any] = {"has_completed_onboarding": True}
        if allergies is not None:
            fields["allergies"] = list(allergies)
        return self.update_user(user_id, fields)

    # --- auth method lookup -----------------------------------------------------------
    def check_user_exists(self, email: str) -> Tuple[bool, Optional[str]]:
        doc = self._load(self.auth_users_file).get(hash_email(email))
        if doc is None:
            return False, None
        return True, doc.get("signup_method")

    def store_auth_method(self, email: str, method: SignupMethod):
        with self._lock:
            docs = self._load(self.auth_users_file)
            entry = docs.setdefault(hash_email(email), {})
            entry["signup_method"] = SignupMethod.parse(method).value
            self._write(self.auth_users_file, docs)
        logger.info("Auth method stored for email")

    def delete_auth_method(self, email: str):
        with self._lock:
            docs = self._load(self.auth_users_file)
            if docs.pop(hash_email(email), None) is not None:
                self._write(self.auth_users_file, docs)
        logger.info("Auth method deleted for email")

    def _move_auth_method(self, old_email: str, new_email: str):
        """Re-key the auth record when a profile's email changes."""
        with self._lock:
            docs = self._load(self.auth_users_file)
            entry = docs.pop(hash_email(old_email), None)
            if entry is None:
                return
            docs[hash_email(new_email)] = entry
            self._write(self.auth_users_file, docs)
        logger.info("Auth method moved to the new email")
