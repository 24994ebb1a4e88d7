import asyncio
import os
import uvicorn

AUTH_PORT = int(os.getenv("AUTH_SERVICE_PORT", "8001"))
INVENTORY_PORT = int(os.getenv("INVENTORY_SERVICE_PORT", "8002"))


async def start_servers():
    # Auth service
    config1 = uvicorn.Config(
        "auth_service.app.main:app",
        host="0.0.0.0",
        port=AUTH_PORT,
    )
    server1 = uvicorn.Server(config1)

    # Inventory service
    config2 = uvicorn.Config(
        "inventory_service.app.main:app",
        host="0.0.0.0",
        port=INVENTORY_PORT,
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
