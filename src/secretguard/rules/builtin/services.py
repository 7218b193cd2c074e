"""API keys for popular SaaS services — payments, email, registries, AI providers."""

from secretguard.rules.models import Pattern

STRIPE_KEY = Pattern(
    name="stripe-key",
    regex=r"\b(?P<secret>(?:sk|pk|rk)_(?:test|live)_[0-9a-zA-Z]{24,})\b",
    description="Stripe API Key (secret, publishable, restricted)",
    severity="high",
    redaction_label="STRIPE_KEY",
)

SENDGRID_API_KEY = Pattern(
    name="sendgrid-api-key",
    regex=r"\b(?P<secret>SG\.[A-Za-z0-9_\-]{22}\.[A-Za-z0-9_\-]{43})",
    description="SendGrid API Key",
    severity="high",
    redaction_label="SENDGRID_KEY",
)

TWILIO_API_KEY = Pattern(
    name="twilio-api-key",
    regex=r"\b(?P<secret>SK[a-f0-9]{32})\b",
    description="Twilio API Key",
    severity="high",
    redaction_label="TWILIO_KEY",
)

MAILGUN_API_KEY = Pattern(
    name="mailgun-api-key",
    regex=r"\b(?P<secret>key-[a-f0-9]{32})\b",
    description="Mailgun API Key",
    severity="high",
    redaction_label="MAILGUN_KEY",
)

NPM_TOKEN = Pattern(
    name="npm-token",
    regex=r"\b(?P<secret>npm_[a-zA-Z0-9]{36})\b",
    description="NPM Access Token",
    severity="high",
    redaction_label="NPM_TOKEN",
)

PYPI_TOKEN = Pattern(
    name="pypi-token",
    regex=r"\b(?P<secret>pypi-[A-Za-z0-9_\-]{64,})",
    description="PyPI Upload Token",
    severity="high",
    redaction_label="PYPI_TOKEN",
)

OPENAI_API_KEY = Pattern(
    name="openai-api-key",
    regex=(
        r"\b(?P<secret>sk-(?:proj-[A-Za-z0-9_\-]{50,}"
        r"|[A-Za-z0-9]{20}T3BlbkFJ[A-Za-z0-9]{20}"
        r"|[A-Za-z0-9]{48}))"
    ),
    description="OpenAI API Key (classic and project keys)",
    severity="high",
    redaction_label="OPENAI_API_KEY",
)

ANTHROPIC_API_KEY = Pattern(
    name="anthropic-api-key",
    regex=r"\b(?P<secret>sk-ant-(?:api|admin)[0-9]{2}-[A-Za-z0-9_\-]{80,})",
    description="Anthropic API Key",
    severity="high",
    redaction_label="ANTHROPIC_API_KEY",
)

HUGGINGFACE_TOKEN = Pattern(
    name="huggingface-token",
    regex=r"\b(?P<secret>hf_[a-zA-Z0-9]{34,})\b",
    description="Hugging Face Access Token",
    severity="high",
    redaction_label="HUGGINGFACE_TOKEN",
)

ALL_SERVICE_PATTERNS = [
    STRIPE_KEY,
    SENDGRID_API_KEY,
    TWILIO_API_KEY,
    MAILGUN_API_KEY,
    NPM_TOKEN,
    PYPI_TOKEN,
    OPENAI_API_KEY,
    ANTHROPIC_API_KEY,
    HUGGINGFACE_TOKEN,
]
