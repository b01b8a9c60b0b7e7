from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization. Mutually exclusive."""

    SUPER_USER = "SUPER_USER"
    ADMIN = "ADMIN"
    EXECUTIVE = "EXECUTIVE"
    MEMBER = "MEMBER"


class WorkStatus(str, Enum):
    """Where a user is working today."""

    OFFICE = "Office"
    WFH = "WFH"
    LEAVE = "Leave"


class TaskStatus(str, Enum):
    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class TaskPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class EntityType(str, Enum):
    """Entity kinds the access policies reason about."""

    ORGANIZATION = "ORG"
    USER = "USER"
    ADMIN = "ADMIN_NODE"
    TEAM = "TEAM"
    TASK = "TASK"
