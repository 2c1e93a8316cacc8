"""Dev CLI for parking-radar."""

import asyncio
import os
import subprocess
import sys

COMMANDS = {
    "dev": "Run uvicorn in development mode with auto-reload",
    "start": "Run uvicorn in production mode",
    "probe": "Bootstrap a session against the target and report token discovery",
}

APP = "parking_radar.main:app"


def _uvicorn(*extra: str) -> None:
    subprocess.run(
        [
            sys.executable,
            "-m",
            "uvicorn",
            APP,
            *extra,
            "--host",
            "0.0.0.0",
            "--port",
            os.environ.get("PORT", "8000"),
        ],
    )


def dev():
    _uvicorn("--reload")


def start():
    _uvicorn()


async def _probe() -> None:
    from parking_radar.config import settings
    from parking_radar.discovery import TokenDiscovery
    from parking_radar.session import Session, bootstrap

    print(f"Bootstrapping against {settings.target_origin} ...")
    async with Session(settings) as session:
        boot = await bootstrap(session)
        if boot.error:
            print(f"  Entry fetch failed: {boot.error}")
        else:
            print(f"  Status: {boot.status}, {boot.content_type}")
            print(f"  Page: {len(boot.html)} chars")

        discovery = TokenDiscovery(session)
        token = await discovery.discover(boot.html)
        cookie_header = session.cookie_header()

    print(f"\nCookies: {cookie_header[:120] or '(none)'}")
    if token:
        print(f"Token found via {token.source} ({len(token.value)} chars):")
        print(f"  {token.preview}")
    else:
        print("No token found; the parks call would go out without one.")

    if discovery.attempts:
        print("\nCandidate endpoints:")
        for path, attempt in discovery.attempts_dict().items():
            print(f"  {path:28s} {attempt}")


def probe():
    asyncio.run(_probe())


def usage():
    print("Usage: uv run cli.py <command>\n")
    print("Commands:")
    for name, desc in COMMANDS.items():
        print(f"  {name:14s} {desc}")
    sys.exit(1)


def main():
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        usage()

    cmd = sys.argv[1]
    dispatch = {
        "dev": dev,
        "start": start,
        "probe": probe,
    }
    dispatch[cmd]()


if __name__ == "__main__":
    main()
