"""
api_verification.py - TMDB credential verification for Showfinder
"""

import asyncio

import aiohttp
from rich.table import Table
from rich.markup import escape
from rich.console import Console
from .config import ShowfinderConfig
from .rate_limits import enforce_tmdb_min_interval
from .search.resilience import run_with_retries
from .tmdb_auth import build_tmdb_auth
from . import __version__

UA = f"Showfinder/{__version__}"

console = Console(stderr=True)


def _invalid_key_msg(detail: str) -> str:
    """Generate standardized invalid API key message"""
    return f"Invalid API key - {detail}"


async def verify_tmdb(session, api_key: str, url: str, timeout=10):
    """Verify the TMDB credential against the authentication endpoint"""
    headers, params = build_tmdb_auth(api_key)
    headers = {**headers, 'User-Agent': UA}
    api_url = f"{url.rstrip('/')}/authentication"
    await enforce_tmdb_min_interval(url)

    async with session.get(
        api_url,
        headers=headers,
        params=params,
        timeout=timeout
    ) as response:
        if response.status != 200:
            return "TMDB", False, _invalid_key_msg(f"{response.status} {response.reason}")

        data = await response.json()
        if isinstance(data, dict) and data.get('success'):
            return "TMDB", True, "Credentials accepted"
        message = data.get('status_message') if isinstance(data, dict) else None
        return "TMDB", False, _invalid_key_msg(message or "authentication not confirmed")


async def verify_with_retry(verify_func, service_name, *args, max_attempts=3, timeout=10):
    """Run a verification with exponential backoff on transient failures"""
    def _on_retry(attempt, max_attempts, delay, _exc):
        console.print(f"[yellow]Retrying {service_name} in {delay}s... ({attempt}/{max_attempts})[/yellow]")

    try:
        return await run_with_retries(
            lambda: verify_func(*args, timeout=timeout),
            max_attempts=max_attempts,
            on_retry=_on_retry,
        )
    except (aiohttp.ClientError, asyncio.TimeoutError):
        return service_name, False, f"Connection failed after {max_attempts} attempts"
    except Exception as e:
        # Surface a helpful message instead of a traceback
        return service_name, False, f"Unexpected error: {type(e).__name__}: {e}"


async def verify_api_keys(config: ShowfinderConfig) -> bool:
    """Verify the configured TMDB credential and print a result table"""
    console.print("[cyan][INFO][/cyan] Verifying API Keys...")

    results = []
    if config.api_keys.tmdb_key:
        session_timeout = aiohttp.ClientTimeout(total=40)
        async with aiohttp.ClientSession(headers={"User-Agent": UA}, timeout=session_timeout) as session:
            results.append(
                await verify_with_retry(
                    verify_tmdb,
                    "TMDB",
                    session,
                    config.api_keys.tmdb_key,
                    config.tmdb.url,
                    timeout=config.tmdb.timeout,
                )
            )

    table = Table(title="API Key Verification Results")
    table.add_column("Service", style="cyan", no_wrap=True)
    table.add_column("Status", style="bold", no_wrap=True)
    table.add_column("Details", style="yellow")

    for service, status, details in results:
        status_str = "[green]✓ Valid[/green]" if status else "[red]✗ Invalid[/red]"
        if details:
            details = escape(str(details).strip()[:100])
        table.add_row(service, status_str, details or "")

    if not results:
        table.add_row("No Keys", "[yellow]⚠ Warning[/yellow]", "No API keys configured")

    console.print(table)

    if results:
        return all(status for _, status, _ in results)
    return False
