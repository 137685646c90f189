import pydantic as p

from gradeworks.grading.forest import DefaultMaxDepth

from .base import BaseSettings


class GradingSettings(BaseSettings):
    max_depth: int = p.Field(default=DefaultMaxDepth, ge=1)
