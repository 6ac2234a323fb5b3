"""Settings read from the environment."""

import os


GITHUB_PERSONAL_TOKEN = os.environ.get("GITHUB_PERSONAL_TOKEN", None)

SENTRY_DSN = os.environ.get("SENTRY_DSN", "")

# GitHub won't show more labels than this on one pull request, so the
# truncate input can't go higher.
TRUNCATE_HARD_LIMIT = 100
