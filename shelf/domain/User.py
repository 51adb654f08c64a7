"""User profile document: identity, signup method, allergies and onboarding state."""
from datetime import datetime
from enum import Enum
from typing import List, Optional, Set, Iterable

from shelf.domain.Tags import Intolerance


class SignupMethod(str, Enum):
    EMAIL = "email"
    APPLE_SIGN_IN = "apple-signin"
    GOOGLE_SIGN_IN = "google-signin"

    @property
    def display_name(self) -> str:
        return {"email": "Email", "apple-signin": "Apple Sign-In", "google-signin": "Google Sign-In"}[self.value]

    @classmethod
    def parse(cls, value) -> "SignupMethod":
        '''Legacy documents may carry unknown strings; those fall back to email.'''
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        return cls.EMAIL


def _parse_dt(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


class User:
    def __init__(self, id: str, name: str, email: str, signup_method: SignupMethod = SignupMethod.EMAIL,
                 join_date: Optional[datetime] = None, is_email_verified: bool = False,
                 email_verification_sent_at: Optional[datetime] = None,
                 allergies: Optional[List[str]] = None, has_completed_onboarding: bool = False):
        self.id = id
        self.name = name
        self.email = email
        self.signup_method = SignupMethod.parse(signup_method)
        self.join_date = join_date or datetime.now()
        self.is_email_verified = is_email_verified
        self.email_verification_sent_at = email_verification_sent_at
        self.allergies = allergies[:] if allergies else []
        self.has_completed_onboarding = has_completed_onboarding

    def __str__(self) -> str:
        return f"{self.name} <{self.email}> ({self.signup_method.display_name})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Decode a stored document. name and email are required; everything else has defaults.'''
        if not isinstance(data, dict):
            raise ValueError("User document must be a mapping")
        if not isinstance(data.get("name"), str) or not isinstance(data.get("email"), str):
            raise ValueError("User document is missing name or email")
        allergies = data.get("allergies") or []
        if not isinstance(allergies, list):
            raise ValueError("allergies must be a list")
        return User(
            id=data.get("id") or "",
            name=data["name"],
            email=data["email"],
            signup_method=SignupMethod.parse(data.get("signup_method")),
            join_date=_parse_dt(data.get("join_date")),
            is_email_verified=bool(data.get("is_email_verified", False)),
            email_verification_sent_at=_parse_dt(data.get("email_verification_sent_at")),
            allergies=[str(a) for a in allergies],
            has_completed_onboarding=bool(data.get("has_completed_onboarding", False)),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "join_date": self.join_date.isoformat(),
            "signup_method": self.signup_method.value,
            "is_email_verified": self.is_email_verified,
            "email_verification_sent_at": (self.email_verification_sent_at.isoformat()
                                           if self.email_verification_sent_at else None),
            "allergies": self.allergies,
            "has_completed_onboarding": self.has_completed_onboarding,
        }


class AllergySelection:
    """Onboarding/profile allergy picker over the Intolerance vocabulary."""

    def __init__(self, stored: Optional[Iterable[str]] = None):
        self.selected: Set[Intolerance] = set()
        for value in stored or []:
            try:
                self.selected.add(Intolerance.parse(value))
            except ValueError:
                # stale values from older app versions are dropped
                continue

    def toggle(self, intolerance):
        item = Intolerance.parse(intolerance)
        if item in self.selected:
            self.selected.remove(item)
        else:
            self.selected.add(item)

    def is_selected(self, intolerance) -> bool:
        return Intolerance.parse(intolerance) in self.selected

    def to_list(self) -> List[str]:
        # enum declaration order keeps stored documents stable
        return [i.api_value for i in Intolerance if i in self.selected]
