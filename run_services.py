import asyncio
import uvicorn

from shared.core.config import settings

# (module:app, port)
SERVICES = [
    ("auth_service.app.main:app", 8001),    # signup / signin / me
    ("hotel_service.app.main:app", 8002),   # inventory, reservations, ledger, reports
]


def build_server(app_path: str, port: int) -> uvicorn.Server:
    config = uvicorn.Config(
        app_path,
        host="0.0.0.0",
        port=port,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return uvicorn.Server(config)


async def start_servers():
    servers = [build_server(app_path, port) for app_path, port in SERVICES]
    # both services share the database and the JWT secret
    await asyncio.gather(*(server.serve() for server in servers))


if __name__ == "__main__":
    try:
        asyncio.run(start_servers())
    except KeyboardInterrupt:
        print("\nShutting down servers...")
