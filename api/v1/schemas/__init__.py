"""Re-export individual schema modules for easy imports."""

from .auth import AuthOut, LoginIn, SignupIn
from .plan import PlanCreate, PlanEnvelope, PlanList, PlanOut, PlanSummary, PlanUpdate
from .profile import ProfileIn, ProfileOut
from .user import (
    PasswordChange,
    UserEnvelope,
    UserList,
    UserOut,
    UserProfileEnvelope,
    UserUpdate,
)

__all__ = [
    "AuthOut",
    "LoginIn",
    "SignupIn",
    "PlanCreate",
    "PlanEnvelope",
    "PlanList",
    "PlanOut",
    "PlanSummary",
    "PlanUpdate",
    "ProfileIn",
    "ProfileOut",
    "PasswordChange",
    "UserEnvelope",
    "UserList",
    "UserOut",
    "UserProfileEnvelope",
    "UserUpdate",
]
