from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String, Text

from travel_diary.core.db import Base


class DiaryEntry(Base):
    __tablename__ = "diary_entries"
    # Без AUTOINCREMENT SQLite может повторно выдать id удалённой последней записи
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Без внешнего ключа: владелец может быть пользователем внешнего провайдера
    user_id = Column(String(255), index=True, nullable=False)
    caption = Column(Text, nullable=False)
    image_url = Column(Text, nullable=False)
    location = Column(JSON, nullable=True)
    screen_info = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    is_shared = Column(Boolean, nullable=False, default=False)
    share_id = Column(String(128), unique=True, index=True, nullable=True)
