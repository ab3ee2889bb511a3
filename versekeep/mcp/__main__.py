import subprocess
import sys
from pathlib import Path

from httpx import ASGITransport, AsyncClient

from versekeep.app import create_app
from versekeep.config import DB_PATH
from versekeep.mcp.client import VersekeepClient
from versekeep.mcp.server import create_mcp_server

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def upgrade_database() -> None:
    """Bring the key-value table up to date before serving tools."""
    Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "-c", str(PROJECT_ROOT / "alembic.ini"), "upgrade", "head"],
        cwd=PROJECT_ROOT,
    )
    if result.returncode != 0:
        sys.exit(result.returncode)


def main():
    upgrade_database()

    http = AsyncClient(transport=ASGITransport(app=create_app()), base_url="http://localhost")
    mcp = create_mcp_server(VersekeepClient(http))
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
