"""Configuration settings for the CWA forecast proxy."""

import os
from typing import Final
from dotenv import load_dotenv

load_dotenv()

# Upstream API configuration
CWA_API_BASE_URL: str = os.getenv("CWA_API_BASE_URL", "https://opendata.cwa.gov.tw/api")
CWA_FORECAST_PATH: Final[str] = "/v1/rest/datastore/F-C0032-001"
CWA_API_KEY: str = os.getenv("CWA_API_KEY", "")
UPSTREAM_TIMEOUT_SECONDS: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10"))

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "3000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
