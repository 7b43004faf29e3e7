"""Compiled commit-subject and filename patterns shared by the analyzers.

Compiled once at import time and never mutated, so every analyzer thread
reads the same objects.
"""

import re

BUG_PATTERN = re.compile(
    r"\b(fix|bug|patch|hotfix|regression|broken|crash|defect|issue|error)\b",
    re.IGNORECASE,
)

REVERT_PATTERN = re.compile(r"^revert\b", re.IGNORECASE)

WIP_KEYWORD_PATTERN = re.compile(
    r"\b(wip|temp|tmp|fixup|squash|hack|dirty|oops|typo|debug|draft)\b",
    re.IGNORECASE,
)

# Whole-subject generic messages, ignoring trailing punctuation.
GENERIC_SUBJECT_PATTERN = re.compile(
    r"^(fix|update|changes|stuff|misc|test|cleanup|commit|save|ok|done)[\s.!?,;:]*$",
    re.IGNORECASE,
)

# Security classes, checked in this order; first match wins.
ENV_FILE_PATTERN = re.compile(r"(?:^|/)\.env(?:\.|$)", re.IGNORECASE)
KEY_FILE_PATTERN = re.compile(
    r"\.(?:pem|key|p12|pfx|cer|crt|jks|ppk|keystore)$", re.IGNORECASE
)
CREDENTIAL_FILE_PATTERN = re.compile(
    r"(?:^|/)[^/]*(?:credential|secret|passw(?:or)?d|private[_ -]?key|api[_ -]?key|auth[_ -]?token)[^/]*$",
    re.IGNORECASE,
)


def is_bug_fix(subject: str) -> bool:
    return BUG_PATTERN.search(subject) is not None


def is_revert(subject: str) -> bool:
    return REVERT_PATTERN.match(subject.strip()) is not None
