"""Token detection patterns — JWT, bearer/OAuth, GitHub, GitLab, Slack."""

from secretguard.rules.models import Pattern

JWT = Pattern(
    name="jwt",
    regex=r"\b(?P<secret>eyJ[A-Za-z0-9_\-]+\.eyJ[A-Za-z0-9_\-]+\.[A-Za-z0-9_.\-]+)",
    description="JSON Web Token (JWT)",
    severity="high",
    redaction_label="JWT",
)

BEARER_TOKEN = Pattern(
    name="bearer-token",
    regex=r"(?i)\bBearer\s+(?P<secret>[a-zA-Z0-9_\-.~+/]{16,}=*)",
    description="Bearer Token",
    severity="high",
    redaction_label="BEARER_TOKEN",
)

OAUTH_TOKEN = Pattern(
    name="oauth-token",
    regex=r"""(?i)\boauth[_\-]?token["']?\s*[:=]\s*["']?(?P<secret>[a-zA-Z0-9_\-]{32,})""",
    description="OAuth Token Assignment",
    severity="high",
    redaction_label="OAUTH_TOKEN",
)

GITHUB_TOKEN = Pattern(
    name="github-token",
    regex=r"\b(?P<secret>gh[pousr]_[A-Za-z0-9_]{36,})",
    description="GitHub Personal Access Token",
    severity="high",
    redaction_label="GITHUB_TOKEN",
)

GITHUB_OAUTH = Pattern(
    name="github-oauth",
    regex=r"\b(?P<secret>gho_[A-Za-z0-9]{36})\b",
    description="GitHub OAuth Token",
    severity="high",
    redaction_label="GITHUB_OAUTH",
)

GITHUB_FINE_GRAINED_PAT = Pattern(
    name="github-fine-grained-pat",
    regex=r"\b(?P<secret>github_pat_[A-Za-z0-9]{22}_[A-Za-z0-9]{59})\b",
    description="GitHub Fine-Grained Personal Access Token",
    severity="high",
    redaction_label="GITHUB_PAT",
)

GITLAB_TOKEN = Pattern(
    name="gitlab-token",
    regex=r"\b(?P<secret>glpat-[A-Za-z0-9_\-]{20,})",
    description="GitLab Personal Access Token (glpat- prefix)",
    severity="high",
    redaction_label="GITLAB_TOKEN",
)

SLACK_TOKEN = Pattern(
    name="slack-token",
    regex=r"\b(?P<secret>xox[baprs]-[0-9]{10,13}-[0-9]{10,13}-[0-9a-zA-Z]{24,})\b",
    description="Slack Token",
    severity="high",
    redaction_label="SLACK_TOKEN",
)

SLACK_WEBHOOK = Pattern(
    name="slack-webhook",
    regex=r"https://hooks\.slack\.com/services/[A-Z0-9]+/[A-Z0-9]+/[a-zA-Z0-9]+",
    description="Slack Webhook URL",
    severity="medium",
    redaction_label="SLACK_WEBHOOK",
)

ALL_TOKEN_PATTERNS = [
    JWT,
    BEARER_TOKEN,
    OAUTH_TOKEN,
    # gho_ tokens also fit the broader gh*_ pattern; the narrower one goes first.
    GITHUB_OAUTH,
    GITHUB_TOKEN,
    GITHUB_FINE_GRAINED_PAT,
    GITLAB_TOKEN,
    SLACK_TOKEN,
    SLACK_WEBHOOK,
]
