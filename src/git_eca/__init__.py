"""
Git ECA - contributor agreement validation for Git commits.

Checks that every author and committer of a batch of commits is either a
project committer, a registered bot, an allow-listed address, or holds a
current Eclipse Contributor Agreement.
"""

__version__ = "1.0.0"
