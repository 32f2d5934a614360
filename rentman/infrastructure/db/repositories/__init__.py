from rentman.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from rentman.infrastructure.db.repositories.user_repo_sql import UserRepoSQL
from rentman.infrastructure.db.repositories.vehicle_repo_sql import VehicleRepoSQL

__all__ = ["ReservationRepoSQL", "UserRepoSQL", "VehicleRepoSQL"]
