"""Centralized dependencies for the FastAPI application.

Clients are created lazily on first use and then kept for the lifetime of
the process, so warm Lambda invocations reuse them. Lifespan events are not
used because the Lambda adapter runs with lifespan disabled.
"""

import os
from typing import Optional

from fastapi import HTTPException, status

from TicketPurchaseService.database.gig_repository import GigRepository
from TicketPurchaseService.messaging.sqs_publisher import SqsPublisher
from TicketPurchaseService.purchase.purchase_handler import PurchaseRequestHandler

# CONFIGURATION

QUEUE_URL = os.getenv("QUEUE_URL")
GIG_TABLE_NAME = os.getenv("GIG_TABLE_NAME", "gig")
AWS_REGION = os.getenv("AWS_REGION")
AWS_ENDPOINT_URL = os.getenv("AWS_ENDPOINT_URL")

sqs_publisher: Optional[SqsPublisher] = None
gig_repository: Optional[GigRepository] = None
purchase_handler: Optional[PurchaseRequestHandler] = None


def get_publisher() -> SqsPublisher:
    global sqs_publisher
    if sqs_publisher is None:
        sqs_publisher = SqsPublisher(region_name=AWS_REGION, endpoint_url=AWS_ENDPOINT_URL)
    return sqs_publisher


def get_purchase_handler() -> PurchaseRequestHandler:
    """Purchase handler dependency.

    Raises 503 when no queue is configured, since no purchase can be accepted.
    """
    global purchase_handler
    if purchase_handler is None:
        if not QUEUE_URL:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Purchase service temporarily unavailable (queue not configured)"
            )
        purchase_handler = PurchaseRequestHandler(get_publisher(), QUEUE_URL)
    return purchase_handler


def get_gig_repository() -> GigRepository:
    global gig_repository
    if gig_repository is None:
        gig_repository = GigRepository(
            GIG_TABLE_NAME,
            region_name=AWS_REGION,
            endpoint_url=AWS_ENDPOINT_URL
        )
    return gig_repository
