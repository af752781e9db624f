"""Pydantic schemas for the activity log"""
from enum import Enum

from pydantic import BaseModel, ConfigDict


class LogLevel(str, Enum):
    INFO = "info"
    ERROR = "error"


class LogEntry(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    timestamp: str
    level: LogLevel
    message: str
