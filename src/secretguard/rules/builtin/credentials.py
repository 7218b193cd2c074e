"""Database credentials and generic secret assignments (entropy-gated)."""

from secretguard.rules.models import Pattern

DATABASE_URL = Pattern(
    name="database-url",
    regex=(
        r"(?i)(?P<secret>(?:postgres|postgresql|mysql|mongodb|redis)://"
        r"[^:\s/]+:[^@\s]+@[a-zA-Z0-9.\-]+(?::[0-9]+)?(?:/[^\s'\"]*)?)"
    ),
    description="Database Connection URL with embedded credentials",
    severity="high",
    redaction_label="DATABASE_URL",
)

CONNECTION_STRING = Pattern(
    name="connection-string",
    regex=(
        r"(?i)(?P<secret>(?:server|host|data source)=[^;\n]+;[^;\n]*"
        r"(?:password|pwd)=[^;\n]+(?:;[^;\n]+)*)"
    ),
    description="Database Connection String with password",
    severity="high",
    redaction_label="CONNECTION_STRING",
)

MONGODB_URI = Pattern(
    name="mongodb-uri",
    regex=(
        r"(?i)(?P<secret>mongodb(?:\+srv)?://[a-zA-Z0-9_\-]+:[^@\s/]+"
        r"@[a-zA-Z0-9.\-]+(?::[0-9]+)?(?:/[^\s'\"]*)?)"
    ),
    description="MongoDB Connection URI with credentials",
    severity="high",
    redaction_label="MONGODB_URI",
)

PASSWORD_ASSIGNMENT = Pattern(
    name="password-assignment",
    regex=r"""(?i)(?:password|passwd|pwd)["']?\s*[:=]\s*["'](?P<secret>[^"'\s]{8,})["']""",
    description="Password assignment in code",
    severity="medium",
    redaction_label="PASSWORD",
    min_entropy=3.5,
)

SECRET_ASSIGNMENT = Pattern(
    name="secret-assignment",
    regex=(
        r"""(?i)(?:secret|api[_\-]?key|apikey|access[_\-]?token)["']?\s*[:=]\s*"""
        r"""["'](?P<secret>[^"'\s]{16,})["']"""
    ),
    description="Secret/API key assignment in code",
    severity="high",
    redaction_label="SECRET",
    min_entropy=4.0,
)

AUTHORIZATION_HEADER = Pattern(
    name="authorization-header",
    regex=r"""(?i)(?:authorization|auth)["']?\s*:\s*["'](?P<secret>[^"'\s]{20,})["']""",
    description="Authorization header value",
    severity="high",
    redaction_label="AUTH_HEADER",
    min_entropy=4.0,
)

PRIVATE_KEY_ENV = Pattern(
    name="private-key-env",
    regex=(
        r"""(?i)(?:private[_\-]?key|secret[_\-]?key)["']?\s*[:=]\s*"""
        r"""["'](?P<secret>[^"'\s]{32,})["']"""
    ),
    description="Private/secret key in environment variable",
    severity="high",
    redaction_label="PRIVATE_KEY_ENV",
    min_entropy=4.0,
)

ALL_CREDENTIAL_PATTERNS = [
    DATABASE_URL,
    CONNECTION_STRING,
    MONGODB_URI,
    PASSWORD_ASSIGNMENT,
    SECRET_ASSIGNMENT,
    AUTHORIZATION_HEADER,
    PRIVATE_KEY_ENV,
]
