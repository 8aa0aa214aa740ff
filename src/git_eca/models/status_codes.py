"""Status codes attached to every validation message."""

from enum import IntEnum


class APIStatusCode(IntEnum):
    """Codes tagging validation messages, warnings and errors.

    Positive values are informational, negative values are failures. The
    negative codes let callers tell author-side, committer-side, structural and
    specification-project failures apart.
    """

    SUCCESS_DEFAULT = 200
    SUCCESS_COMMITTER = 201
    SUCCESS_CONTRIBUTOR = 202
    SUCCESS_SKIPPED = 203
    ERROR_DEFAULT = -400
    ERROR_SIGN_OFF = -401
    ERROR_SPEC_PROJECT = -402
    ERROR_AUTHOR = -403
    ERROR_COMMITTER = -404
