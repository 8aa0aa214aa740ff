"""Data models for commit validation."""

from .directory import ECA, BotRecord, EclipseUser, Project, ProjectCommitter, Repo
from .git import Commit, GitUser, ProviderType, ValidationRequest
from .status_codes import APIStatusCode
from .validation_response import (
    NIL_HASH_KEY,
    CommitStatus,
    CommitStatusMessage,
    ValidationResponse,
)

__all__ = [
    "APIStatusCode",
    "BotRecord",
    "Commit",
    "CommitStatus",
    "CommitStatusMessage",
    "ECA",
    "EclipseUser",
    "GitUser",
    "NIL_HASH_KEY",
    "Project",
    "ProjectCommitter",
    "ProviderType",
    "Repo",
    "ValidationRequest",
    "ValidationResponse",
]
