from pydantic import BaseModel


class HealthResponse(BaseModel):
    database: str
    people_service: str


class ErrorResponse(BaseModel):
    detail: str
