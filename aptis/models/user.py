from sqlalchemy import Column, String, DateTime, Boolean, Integer
from sqlalchemy.orm import relationship
from ..database import Base
from ..utils.timeutils import utcnow
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ROLE_LEARNER = "learner"
ROLE_ADMIN = "admin"

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_LEARNER)
    is_active = Column(Boolean, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    submissions = relationship("Submission", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def set_password(self, password: str):
        """비밀번호 해싱"""
        if not password:
            raise ValueError("암호는 필수입니다")
        self.password_hash = pwd_context.hash(password)

    def verify_password(self, password: str) -> bool:
        """비밀번호 검증"""
        if not password or not self.password_hash:
            return False
        return pwd_context.verify(password, self.password_hash)

    def update_last_login(self):
        """마지막 로그인 시간 업데이트"""
        self.last_login = utcnow()
