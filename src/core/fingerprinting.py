"""Device fingerprinting for persistent session tokens.

The fingerprint identifies the browser/device a session was started from.
It is stored with the session metadata so a rotated persistent token can be
tied to the device that presented it.

Fingerprint Components:
- User-Agent header
- Accept-Language header
- Screen resolution (custom header)
- Timezone offset (custom header)

Security:
- SHA256 hash (64 hex characters), not reversible
- No PII is collected
"""

import hashlib

from fastapi import Request

from src.core.container import get_logger


def generate_device_fingerprint(request: Request) -> str:
    """Generate SHA256 hash of device fingerprint from request metadata.

    Args:
        request: FastAPI Request object

    Returns:
        SHA256 hash (64 hex characters)

    Notes:
        - Missing headers become empty components
        - Same device/browser produces the same fingerprint
    """
    components = [
        request.headers.get("user-agent", ""),
        request.headers.get("accept-language", ""),
        request.headers.get("x-screen-resolution", ""),
        request.headers.get("x-timezone-offset", ""),
    ]

    fingerprint_string = "|".join(components)
    fingerprint_hash = hashlib.sha256(fingerprint_string.encode("utf-8")).hexdigest()

    get_logger().debug(
        "Generated device fingerprint", fingerprint_prefix=fingerprint_hash[:8]
    )

    return fingerprint_hash
