import requests

from src.client.admin_api import admin_headers


class PreFlightCheckError(Exception):
    """Custom exception for pre-flight check failures."""
    pass


def run_admin_pre_flight_checks(config: dict, *, source: str = "wordpress"):
    """
    Verifies that the admin backend is reachable and the session is valid
    before an import is started.

    Args:
        config: The application configuration dictionary.
        source: ``"wordpress"`` or ``"youtube"``; selects the extra check.

    Raises:
        PreFlightCheckError: If any check fails.
    """
    print("[INFO] Running pre-flight checks...")

    admin = config.get("admin", {})
    base_url = (admin.get("base_url") or "").rstrip("/")
    if not base_url:
        raise PreFlightCheckError("Admin base URL is not configured.")
    if not admin.get("session_cookie") and not admin.get("api_token"):
        raise PreFlightCheckError("No admin session cookie or API token configured.")

    headers = admin_headers(admin)
    timeout = admin.get("timeout")

    # Check 1: session is accepted by the blog listing
    try:
        response = requests.get(f"{base_url}/api/admin/blog/posts", headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.HTTPError as e:
        if e.response.status_code in (401, 403):
            raise PreFlightCheckError("The admin session is invalid or has expired.")
        raise PreFlightCheckError(f"Unexpected error checking the blog API: {e}")
    except requests.RequestException as e:
        raise PreFlightCheckError(f"Network error connecting to the admin backend: {e}")

    # Check 2: source-specific settings
    if source == "wordpress":
        wordpress = config.get("wordpress", {})
        if not wordpress.get("url") or not wordpress.get("username"):
            raise PreFlightCheckError("WordPress URL and username are required for a WordPress import.")
    elif source == "youtube":
        try:
            response = requests.get(f"{base_url}/api/admin/youtube/channels", headers=headers, timeout=timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            raise PreFlightCheckError(f"Unexpected error checking the YouTube API: {e}")
        except requests.RequestException as e:
            raise PreFlightCheckError(f"Network error checking the YouTube API: {e}")

    print("[INFO] Pre-flight checks passed successfully.")
