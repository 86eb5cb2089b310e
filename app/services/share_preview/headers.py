"""Response header policy for share preview responses."""

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

NO_STORE_CACHE_CONTROL = (
    "no-store, no-cache, must-revalidate, proxy-revalidate, max-age=0"
)


def no_store_headers() -> dict[str, str]:
    """Headers for errors and redirects; never served from a cache."""
    return {
        "Cache-Control": NO_STORE_CACHE_CONTROL,
        "Pragma": "no-cache",
        "Expires": "0",
        "X-Content-Type-Options": "nosniff",
    }


def bot_cache_headers(max_age: int, stale_while_revalidate: int) -> dict[str, str]:
    """Short shared-cache lifetime for metadata pages served to crawlers."""
    return {
        "Cache-Control": (
            f"public, max-age={max_age}, s-maxage={max_age}, "
            f"stale-while-revalidate={stale_while_revalidate}"
        ),
        "X-Content-Type-Options": "nosniff",
    }


def share_headers(base: dict[str, str]) -> dict[str, str]:
    """Add the headers common to every successful share response."""
    headers = dict(base)
    # Body depends on the User-Agent; keep CDNs from mixing the variants
    headers["Vary"] = "User-Agent"
    headers["X-Robots-Tag"] = "noindex, nofollow"
    return headers
