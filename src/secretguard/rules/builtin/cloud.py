"""Cloud provider credentials — AWS, Google, Azure, DigitalOcean, Heroku."""

from secretguard.rules.models import Pattern

AWS_ACCESS_KEY = Pattern(
    name="aws-access-key",
    regex=r"\b(?P<secret>(?:A3T[A-Z0-9]|AKIA|ASIA|AROA|AIDA|AGPA|ANPA|ANVA)[0-9A-Z]{16})\b",
    description="AWS Access Key ID (all prefixes: AKIA, ASIA, AROA, etc.)",
    severity="high",
    redaction_label="AWS_ACCESS_KEY",
)

AWS_SECRET_KEY = Pattern(
    name="aws-secret-key",
    regex=r"(?:^|[^A-Za-z0-9/+=])(?P<secret>[A-Za-z0-9/+]{39}[A-Za-z0-9/+=])(?:$|[^A-Za-z0-9/+=])",
    description="AWS Secret Access Key (40 chars, Base64-like)",
    severity="high",
    redaction_label="AWS_SECRET_KEY",
    min_entropy=4.5,
)

AWS_SESSION_TOKEN = Pattern(
    name="aws-session-token",
    regex=r"\b(?P<secret>(?:F(?:Qo|wo)GZXIvYXdz|IQoJb3Jn)[A-Za-z0-9/+=]{80,})",
    description="AWS Session Token (FwoGZXIv..., IQoJb3Jn..., etc.)",
    severity="high",
    redaction_label="AWS_SESSION_TOKEN",
)

GOOGLE_API_KEY = Pattern(
    name="google-api-key",
    regex=r"\b(?P<secret>AIza[0-9A-Za-z_\-]{35})",
    description="Google API Key",
    severity="high",
    redaction_label="GOOGLE_API_KEY",
)

GOOGLE_OAUTH = Pattern(
    name="google-oauth",
    regex=r"\b(?P<secret>[0-9]+-[0-9A-Za-z_]{32}\.apps\.googleusercontent\.com)\b",
    description="Google OAuth Client ID",
    severity="medium",
    redaction_label="GOOGLE_OAUTH",
)

AZURE_CLIENT_SECRET = Pattern(
    name="azure-client-secret",
    regex=(
        r"""(?i)\b(?:azure|client)[_\-.]?(?:client[_\-.]?)?secret["']?\s*[:=]\s*["']?"""
        r"""(?P<secret>[a-zA-Z0-9~._\-]{34,40})(?:[^a-zA-Z0-9~._\-]|$)"""
    ),
    description="Azure Client Secret (client_secret / AZURE_CLIENT_SECRET assignment)",
    severity="high",
    redaction_label="AZURE_CLIENT_SECRET",
    min_entropy=4.2,
)

DIGITALOCEAN_TOKEN = Pattern(
    name="digitalocean-token",
    regex=r"\b(?P<secret>dop_v1_[a-f0-9]{64})\b",
    description="DigitalOcean Personal Access Token",
    severity="high",
    redaction_label="DIGITALOCEAN_TOKEN",
)

HEROKU_API_KEY = Pattern(
    name="heroku-api-key",
    regex=(
        r"\b(?P<secret>[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}"
        r"-[0-9a-fA-F]{4}-[0-9a-fA-F]{12})\b"
    ),
    description="Heroku API Key (UUID format)",
    severity="high",
    redaction_label="HEROKU_API_KEY",
)

ALL_CLOUD_PATTERNS = [
    AWS_ACCESS_KEY,
    AWS_SECRET_KEY,
    AWS_SESSION_TOKEN,
    GOOGLE_API_KEY,
    GOOGLE_OAUTH,
    DIGITALOCEAN_TOKEN,
    HEROKU_API_KEY,
]

# Keyed on assignment context rather than a token prefix. Registered after
# every prefixed pattern so that a recognisable token assigned to a
# client_secret keeps its own type.
CONTEXT_CLOUD_PATTERNS = [
    AZURE_CLIENT_SECRET,
]
