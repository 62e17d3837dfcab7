from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Envelope for operations that return no entity."""
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
