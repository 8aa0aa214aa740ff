"""Records validation decisions into the response being built."""

import logging
from typing import Optional

from ..models import APIStatusCode, ValidationResponse

logger = logging.getLogger(__name__)


class ValidationReporter:
    """Adds messages and errors to a response, applying the severity policy.

    Errors become hard errors when the request targets a tracked project or
    asked for strict mode, and warnings otherwise. Structural errors are always
    hard errors.
    """

    def __init__(self, response: ValidationResponse):
        self.response = response

    def message(
        self,
        commit_hash: Optional[str],
        message: str,
        code: APIStatusCode = APIStatusCode.SUCCESS_DEFAULT,
    ) -> None:
        logger.debug(message)
        self.response.add_message(commit_hash, message, code)

    def error(
        self,
        commit_hash: Optional[str],
        message: str,
        code: APIStatusCode = APIStatusCode.ERROR_DEFAULT,
    ) -> None:
        logger.error(message)
        if self.response.is_enforced:
            self.response.add_error(commit_hash, message, code)
        else:
            self.response.add_warning(commit_hash, message, code)

    def structural_error(self, commit_hash: Optional[str], message: str) -> None:
        logger.error(message)
        self.response.add_error(commit_hash, message, APIStatusCode.ERROR_DEFAULT)
