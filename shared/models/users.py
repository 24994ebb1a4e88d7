from sqlalchemy import TIMESTAMP, Column, Integer, String, func
from passlib.context import CryptContext

from shared.core.database import Base
from shared.utils.enums import UserRole, UserStatus

bcrypt_context = CryptContext(schemes=['bcrypt'], deprecated='auto')


class Users(Base):
    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default=UserRole.USER.value)
    status = Column(String(16), nullable=False,
                    default=UserStatus.ACTIVE.value)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    def set_password(self, password: str):
        self.password = bcrypt_context.hash(password)

    def verify_password(self, password: str) -> bool:
        return bcrypt_context.verify(password, self.password)
