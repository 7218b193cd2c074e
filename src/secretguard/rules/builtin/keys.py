"""Private key blocks — matched from BEGIN to END across lines."""

from secretguard.rules.models import Pattern


def _pem_block(label: str) -> str:
    return rf"-----BEGIN {label}-----[\s\S]*?-----END {label}-----"


RSA_PRIVATE_KEY = Pattern(
    name="rsa-private-key",
    regex=_pem_block("RSA PRIVATE KEY"),
    description="RSA Private Key",
    severity="high",
    redaction_label="RSA_PRIVATE_KEY",
)

OPENSSH_PRIVATE_KEY = Pattern(
    name="openssh-private-key",
    regex=_pem_block("OPENSSH PRIVATE KEY"),
    description="OpenSSH Private Key",
    severity="high",
    redaction_label="SSH_PRIVATE_KEY",
)

EC_PRIVATE_KEY = Pattern(
    name="ec-private-key",
    regex=_pem_block("EC PRIVATE KEY"),
    description="EC Private Key",
    severity="high",
    redaction_label="EC_PRIVATE_KEY",
)

DSA_PRIVATE_KEY = Pattern(
    name="dsa-private-key",
    regex=_pem_block("DSA PRIVATE KEY"),
    description="DSA Private Key",
    severity="high",
    redaction_label="DSA_PRIVATE_KEY",
)

PGP_PRIVATE_KEY = Pattern(
    name="pgp-private-key",
    regex=_pem_block("PGP PRIVATE KEY BLOCK"),
    description="PGP Private Key Block",
    severity="high",
    redaction_label="PGP_PRIVATE_KEY",
)

PRIVATE_KEY_GENERIC = Pattern(
    name="private-key-generic",
    regex=_pem_block("PRIVATE KEY"),
    description="Generic PKCS#8 Private Key",
    severity="high",
    redaction_label="PRIVATE_KEY",
)

ALL_KEY_PATTERNS = [
    RSA_PRIVATE_KEY,
    OPENSSH_PRIVATE_KEY,
    EC_PRIVATE_KEY,
    DSA_PRIVATE_KEY,
    PGP_PRIVATE_KEY,
    PRIVATE_KEY_GENERIC,
]
