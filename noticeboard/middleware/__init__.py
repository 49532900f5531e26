"""HTTP middleware: timeout, request ID, security headers.

Applied in main app; order matters (last added = outermost).
"""

from noticeboard.middleware.request_id import RequestIDMiddleware
from noticeboard.middleware.security_headers import SecurityHeadersMiddleware
from noticeboard.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
