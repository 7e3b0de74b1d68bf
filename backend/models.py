from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String

from database import Base


def utcnow():
    return datetime.now(timezone.utc)


class Audit(Base):
    __tablename__ = "audits"

    id = Column(Integer, primary_key=True, index=True)
    website_url = Column(String, nullable=False)
    status = Column(String, default="completed")

    # Platform context
    cms = Column(String, nullable=True)
    page_builder = Column(String, nullable=True)
    detected_plugins = Column(JSON, default=list)

    # Scores
    desktop_score = Column(Integer, nullable=True)
    mobile_score = Column(Integer, nullable=True)

    # Raw findings as submitted by the crawler
    findings = Column(JSON, default=list)
    technical_issues = Column(JSON, default=dict)
    results = Column(JSON, default=dict)

    created_at = Column(DateTime(timezone=True), default=utcnow)
