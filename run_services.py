import asyncio
import os

import uvicorn

RELOAD = os.getenv("RELOAD", "true").lower() == "true"


async def start_servers():
    # Identity service
    config1 = uvicorn.Config(
        "auth_service.app.main:app",
        host="0.0.0.0",
        port=8001,
        reload=RELOAD,
    )
    server1 = uvicorn.Server(config1)

    # Asset service
    config2 = uvicorn.Config(
        "asset_service.app.main:app",
        host="0.0.0.0",
        port=8002,
        reload=RELOAD,
    )
    server2 = uvicorn.Server(config2)

    # Run both servers concurrently
    await asyncio.gather(
        server1.serve(),
        server2.serve(),
    )

if __name__ == "__main__":
    try:
        asyncio.run(start_servers())
    except KeyboardInterrupt:
        print("\nShutting down servers...")
