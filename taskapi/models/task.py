"""Task model"""

from enum import IntEnum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from taskapi.core.database import Base


class TaskPriority(IntEnum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2


class TaskStatus(IntEnum):
    PENDING = 0
    COMPLETED = 1


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=True)
    due_date = Column(DateTime, nullable=False)
    priority = Column(Integer, nullable=False, default=TaskPriority.MEDIUM)
    status = Column(Integer, nullable=False, default=TaskStatus.PENDING, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, nullable=True)

    owner = relationship("User", back_populates="tasks")
