import asyncio
import sys
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from rentman.config import get_settings  # noqa: E402
from rentman.infrastructure.db.engine import (  # noqa: E402
    build_engine,
    build_sessionmaker,
    create_tables,
    session_scope,
)
from rentman.infrastructure.db.repositories import UserRepoSQL, VehicleRepoSQL  # noqa: E402
from rentman.infrastructure.demo_data import demo_users, demo_vehicles  # noqa: E402


async def seed():
    settings = get_settings()
    engine = build_engine(settings.database_url, echo=settings.sql_echo)
    await create_tables(engine)
    print("Created missing tables.")

    users = demo_users()
    vehicles = demo_vehicles()
    async with session_scope(build_sessionmaker(engine)) as session:
        user_repo = UserRepoSQL(session)
        vehicle_repo = VehicleRepoSQL(session)
        for user in users:
            await user_repo.add(user)
        for vehicle in vehicles:
            await vehicle_repo.add(vehicle)

    print(f"Seeded {len(users)} users and {len(vehicles)} vehicles.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
