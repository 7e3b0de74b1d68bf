import os

# Database
DATABASE_URL = os.getenv("AUDIT_ADVISOR_DATABASE_URL", "sqlite:///./audit_advisor.db")

# CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "AUDIT_ADVISOR_CORS_ORIGINS", "http://localhost:3000,http://localhost:3001"
    ).split(",")
    if origin.strip()
]

# Logging
LOG_LEVEL = os.getenv("AUDIT_ADVISOR_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Recommendation ranking
MAX_RECOMMENDATIONS = int(os.getenv("AUDIT_ADVISOR_MAX_RECOMMENDATIONS", "10"))
MAX_PERFORMANCE_FINDINGS = int(os.getenv("AUDIT_ADVISOR_MAX_PERFORMANCE_FINDINGS", "6"))

# Summary
TOP_PRIORITIES = 10
