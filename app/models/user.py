import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.orm import relationship
from ..database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    supabase_id = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    membership = relationship(
        "HouseholdMembership", back_populates="user", uselist=False
    )

    @classmethod
    def create_from_supabase(cls, supabase_user, db_session):
        """Create new user from Supabase auth user"""
        user = cls(
            supabase_id=str(supabase_user.id),
            email=(supabase_user.email or "").strip().lower(),
        )

        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    @classmethod
    def get_or_create_from_supabase(cls, supabase_user, db_session):
        """Get existing user or create new one from Supabase"""
        user = (
            db_session.query(cls)
            .filter(cls.supabase_id == str(supabase_user.id))
            .first()
        )

        if user:
            email = (supabase_user.email or "").strip().lower()
            if email and user.email != email:
                user.email = email
                db_session.commit()
            return user

        return cls.create_from_supabase(supabase_user, db_session)
