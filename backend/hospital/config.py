"""
Centralized application settings.
All configuration lives here for easy maintenance.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Main system settings."""
    
    # ============================================
    # APPLICATION
    # ============================================
    APP_TITLE: str = "Hospital Management System"
    APP_DESCRIPTION: str = "Patients, rooms and priority-based room allocation"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    
    # ============================================
    # DATABASE
    # ============================================
    DATABASE_URL: str = "sqlite:///./hospital.db"
    
    # ============================================
    # CORS
    # ============================================
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
        "http://localhost:3002",
    ]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    CORS_ALLOW_HEADERS: List[str] = ["Content-Type", "Authorization"]
    
    # ============================================
    # PAGINATION
    # ============================================
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    
    # ============================================
    # ALLOCATION
    # ============================================
    # Re-searches after losing a room to a concurrent assignment
    AUTO_ALLOCATE_MAX_ATTEMPTS: int = 3
    
    # ============================================
    # LOGGING
    # ============================================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
