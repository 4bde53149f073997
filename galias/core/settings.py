from __future__ import annotations

DEFAULT_REMOTE = "origin"
MAIN_BRANCHES = ("main", "master")
PROTECTED_BRANCHES = ("main", "master", "develop")

DEFAULT_LOG_COUNT = 10

MIN_MESSAGE_LENGTH = 3
MAX_SUBJECT_LENGTH = 100

BACKUP_PREFIX = "backup"
BACKUP_MAX_AGE_DAYS = 30
FRESH_BACKUP_PREFIX = "fresh-backup"
HOTFIX_PREFIX = "hotfix"

GITHUB_URL = "https://github.com/{slug}.git"

RULE_WIDTH = 50
PREVIEW_LIMIT = 5
