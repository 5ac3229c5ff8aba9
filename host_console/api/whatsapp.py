"""WhatsApp send endpoint"""

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool
import structlog

from host_console.notifications.whatsapp import (
    MessagingError,
    send_whatsapp,
)
from host_console.schemas.whatsapp import WhatsAppSendRequest, WhatsAppSendResponse

router = APIRouter()
logger = structlog.get_logger()


@router.post("/send", response_model=WhatsAppSendResponse)
async def send(request: WhatsAppSendRequest):
    """Send a free-form WhatsApp message to a guest"""
    if not request.to or not request.message:
        raise HTTPException(status_code=400, detail="Missing to or message")

    logger.info("WhatsApp send requested", to=request.to[-4:])

    try:
        sid = await run_in_threadpool(send_whatsapp, request.to, request.message)
    except MessagingError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return WhatsAppSendResponse(success=True, sid=sid)
