import os
from typing import Optional

class Settings:
    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "Fan-Out Aggregator")

    # Outbound fetching
    USER_AGENT: str = os.getenv("USER_AGENT", "DS-Agent/1.0")
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "30"))
    # Deadline for a whole batch in seconds, 0 or less disables it
    BATCH_TIMEOUT: float = float(os.getenv("BATCH_TIMEOUT", "60"))
    MAX_CONNECTIONS: int = int(os.getenv("MAX_CONNECTIONS", "100"))
    FOLLOW_REDIRECTS: bool = os.getenv("FOLLOW_REDIRECTS", "1").lower() in ("1", "true", "yes")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE")

    # Synchronous caller
    FANOUT_ENDPOINT: str = os.getenv("FANOUT_ENDPOINT", "http://localhost:8000/api/fanout")
    CLIENT_TIMEOUT: float = float(os.getenv("CLIENT_TIMEOUT", "120"))

settings = Settings()
