"""WhatsApp send schemas"""

from typing import Optional
from pydantic import BaseModel


class WhatsAppSendRequest(BaseModel):
    to: Optional[str] = None
    message: Optional[str] = None


class WhatsAppSendResponse(BaseModel):
    success: bool
    sid: Optional[str] = None
