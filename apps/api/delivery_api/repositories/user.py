from sqlalchemy import func

from delivery_api.models.user import User
from delivery_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    def get_by_username(self, username: str) -> User | None:
        return self.find_one(User.username == username)

    def username_taken(self, username: str) -> bool:
        # Soft-deleted accounts keep their username reserved
        stmt = self.db.query(func.count(User.id)).filter(User.username == username)
        return stmt.scalar() > 0
