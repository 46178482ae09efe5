from sqlalchemy import Column, DateTime, Text
from sqlalchemy.sql import func

from fulfillment.database import Base


class AppSetting(Base):
    __tablename__ = "app_settings"

    id = Column(Text, primary_key=True)
    value = Column(Text)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
