"""Security headers middleware.

Adds common security-related response headers. API responses get a locked
down CSP; served attachment files (under files_prefix) only get nosniff and
a sandboxing CSP so browsers still render images and PDFs inline.
Raw ASGI (no BaseHTTPMiddleware).
"""

from typing import Callable

API_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}

FILE_HEADERS = {
    "Content-Security-Policy": "sandbox",
    "X-Content-Type-Options": "nosniff",
}


def _encode(headers: dict[str, str]) -> list[tuple[bytes, bytes]]:
    return [(k.lower().encode(), v.encode()) for k, v in headers.items()]


def SecurityHeadersMiddleware(app: Callable, files_prefix: str | None = "/files") -> Callable:
    """Set security headers on all HTTP responses without overriding ones already set."""
    api_list = _encode(API_HEADERS)
    file_list = _encode(FILE_HEADERS)

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        is_file = bool(files_prefix) and scope.get("path", "").startswith(f"{files_prefix}/")
        header_list = file_list if is_file else api_list

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                seen = {h[0].lower() for h in headers}
                headers.extend(h for h in header_list if h[0] not in seen)
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
