"""Validation outcome model returned by the engine and the /eca endpoint."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .status_codes import APIStatusCode

# Key used for request-level messages that have no commit hash
NIL_HASH_KEY = "_nil"


class CommitStatusMessage(BaseModel):
    message: str
    code: int


class CommitStatus(BaseModel):
    """Messages, warnings and errors recorded for one commit."""

    messages: List[CommitStatusMessage] = Field(default_factory=list)
    warnings: List[CommitStatusMessage] = Field(default_factory=list)
    errors: List[CommitStatusMessage] = Field(default_factory=list)


class ValidationResponse(BaseModel):
    """Per-request validation outcome, built up while commits are processed.

    ``passed`` is only meaningful once the engine has finished: it is set when
    no errors were recorded.
    """

    model_config = ConfigDict(populate_by_name=True)

    time: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    strict_mode: bool = Field(default=False, alias="strictMode")
    tracked_project: bool = Field(default=False, alias="trackedProject")
    passed: bool = False
    error_count: int = Field(default=0, alias="errorCount")
    commits: Dict[str, CommitStatus] = Field(default_factory=dict)

    def _status_for(self, commit_hash: Optional[str]) -> CommitStatus:
        key = commit_hash if commit_hash is not None else NIL_HASH_KEY
        status = self.commits.get(key)
        if status is None:
            status = CommitStatus()
            self.commits[key] = status
        return status

    def add_message(
        self,
        commit_hash: Optional[str],
        message: str,
        code: APIStatusCode = APIStatusCode.SUCCESS_DEFAULT,
    ) -> None:
        self._status_for(commit_hash).messages.append(
            CommitStatusMessage(message=message, code=int(code))
        )

    def add_warning(
        self,
        commit_hash: Optional[str],
        message: str,
        code: APIStatusCode = APIStatusCode.ERROR_DEFAULT,
    ) -> None:
        self._status_for(commit_hash).warnings.append(
            CommitStatusMessage(message=message, code=int(code))
        )

    def add_error(
        self,
        commit_hash: Optional[str],
        message: str,
        code: APIStatusCode = APIStatusCode.ERROR_DEFAULT,
    ) -> None:
        self._status_for(commit_hash).errors.append(
            CommitStatusMessage(message=message, code=int(code))
        )
        self.error_count += 1

    @property
    def is_enforced(self) -> bool:
        """Whether failures are hard errors rather than warnings."""
        return self.tracked_project or self.strict_mode

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the wire field names."""
        return self.model_dump(by_alias=True)
