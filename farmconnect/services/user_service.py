from sqlalchemy.orm import Session

from farmconnect.data.models.user import UserModel
from farmconnect.domain.enums import Role
from farmconnect.domain.errors import ConflictError
from farmconnect.domain.schemas import Identity, UserRegisterIn
from farmconnect.repos.user_repo import UserRepo
from farmconnect.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, identity: Identity, payload: UserRegisterIn) -> UserModel:
        """Links a verified identity to a local user, returns the existing row on repeat."""
        existing = self.repo.get_by_firebase_uid(identity.uid)
        if existing:
            return existing

        taken = self.repo.get_by_email(payload.email)
        if taken:
            raise ConflictError("Email already registered")

        user = UserModel(
            firebase_uid=identity.uid,
            email=payload.email,
            display_name=payload.display_name,
            phone_number=payload.phone_number,
            role=Role(payload.role),
        )
        created = self.repo.create_user(user)
        logger.info(f"Registered user {created.id} ({created.role.value})")
        return created

    def get_by_identity(self, identity: Identity) -> UserModel | None:
        return self.repo.get_by_firebase_uid(identity.uid)
