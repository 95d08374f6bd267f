"""
supabase_rest.py — HTTP-based database client using Supabase's PostgREST API.
Works on serverless runtimes without a Postgres driver; uses only httpx.
"""
import httpx

from studypilot.config import SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY


def _headers(service_key: str) -> dict:
    return {
        "apikey": service_key,
        "Authorization": f"Bearer {service_key}",
        "Content-Type": "application/json",
        "Prefer": "return=representation",
    }


def _eq(value) -> str:
    # PostgREST expects lowercase booleans
    if isinstance(value, bool):
        value = "true" if value else "false"
    return f"eq.{value}"


def make_client(base_url: str = None, service_key: str = None,
                transport: httpx.BaseTransport = None, timeout: float = 10) -> httpx.Client:
    """Build an httpx client bound to the project's REST endpoint."""
    base_url = (base_url or SUPABASE_URL).rstrip("/")
    service_key = service_key or SUPABASE_SERVICE_ROLE_KEY
    if not base_url or not service_key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set in environment variables")
    return httpx.Client(
        base_url=f"{base_url}/rest/v1",
        headers=_headers(service_key),
        timeout=timeout,
        transport=transport,
    )


def sb_select(client: httpx.Client, table: str, filters: dict = None, columns: str = "*",
              order: str = None, limit: int = None) -> list:
    """Select rows from a table with optional equality filters, ordering and limit."""
    params = [("select", columns)]
    for key, value in (filters or {}).items():
        params.append((key, _eq(value)))
    if order:
        params.append(("order", order))
    if limit:
        params.append(("limit", str(limit)))

    resp = client.get(f"/{table}", params=params)
    resp.raise_for_status()
    return resp.json()


def sb_insert(client: httpx.Client, table: str, data: dict) -> dict:
    """Insert a row and return the created record."""
    resp = client.post(f"/{table}", json=data)
    resp.raise_for_status()
    result = resp.json()
    return result[0] if isinstance(result, list) and result else {}


def sb_update(client: httpx.Client, table: str, filter_col: str, filter_val, data: dict) -> list:
    """Update rows where filter_col = filter_val; returns the updated rows."""
    resp = client.patch(f"/{table}", params={filter_col: _eq(filter_val)}, json=data)
    resp.raise_for_status()
    result = resp.json()
    return result if isinstance(result, list) else []
