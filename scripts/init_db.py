# scripts/init_db.py

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
from activity_log.infrastructure.database.session import engine, init_models


async def main():
    # Create user_logs (with its compound indexes) and users if they don't exist
    await init_models()
    await engine.dispose()
    print("Tables ready:", engine.url.render_as_string(hide_password=True))

asyncio.run(main())
