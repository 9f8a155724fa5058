from enum import Enum


class HouseholdRole(str, Enum):
    OWNER = "owner"
    MEMBER = "member"


class InvitationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class CreationMethod(str, Enum):
    MANUAL = "manual"
    AI_GENERATED = "ai_generated"
    AI_GENERATED_MODIFIED = "ai_generated_modified"
