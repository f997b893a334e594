"""
Ticket Purchase Service

This service is responsible for:
1. Accepting ticket purchase requests and enqueueing them on SQS
2. Serving the gig catalogue from DynamoDB
"""

import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from TicketPurchaseService import dependencies
from TicketPurchaseService.data_model.gig import Gig, GigListResponse
from TicketPurchaseService.data_model.health import HealthResponse
from TicketPurchaseService.data_model.purchase import ErrorResponse, PurchaseAcknowledgement
from TicketPurchaseService.database.gig_repository import GigRepository, GigRepositoryError
from TicketPurchaseService.dependencies import get_gig_repository, get_publisher, get_purchase_handler
from TicketPurchaseService.logger.logger import setup_logging
from TicketPurchaseService.messaging.sqs_publisher import SqsPublisher
from TicketPurchaseService.purchase.purchase_handler import PurchaseRequestHandler

# CONFIGURATION

setup_logging()
logger = logging.getLogger(__name__)

# FASTAPI APPLICATION

app = FastAPI(
    title="Ticket Purchase Service",
    description="Accepts gig ticket purchases and serves the gig catalogue",
    version="1.0.0"
)

# CORS MIDDLEWARE

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# API ENDPOINTS

@app.get("/", response_model=dict)
async def root():
    """
    Root endpoint providing API information.
    """
    return {
        "service": "Ticket Purchase Service",
        "version": "1.0.0",
        "description": "API for gig ticket purchases",
        "endpoints": {
            "purchase": "POST /purchase",
            "gigs": "GET /gigs",
            "gig": "GET /gigs/{gig_id}",
            "health": "GET /health"
        }
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns:
        200 OK if the queue and gig table are configured
        503 Service Unavailable otherwise
    """
    queue_configured = bool(dependencies.QUEUE_URL)
    gig_table_configured = bool(dependencies.GIG_TABLE_NAME)

    is_healthy = queue_configured and gig_table_configured

    response = HealthResponse(
        status="healthy" if is_healthy else "unhealthy",
        service="ticket-purchase-service",
        queue_configured=queue_configured,
        gig_table_configured=gig_table_configured,
        timestamp=datetime.now(timezone.utc).isoformat()
    )

    status_code = status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content=response.model_dump()
    )


@app.post(
    "/purchase",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=PurchaseAcknowledgement,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def purchase(
        request: Request,
        handler: PurchaseRequestHandler = Depends(get_purchase_handler)
):
    """
    Handle a ticket purchase request.

    This endpoint:
    1. Reads the raw JSON body
    2. Validates name, email and gigId
    3. Generates a ticket id
    4. Publishes the purchase to SQS
    5. Returns the ticket id

    The body is read raw so malformed JSON and invalid fields are reported
    with the same error shape.

    Returns:
        202: Purchase accepted, body holds the ticketId
        400: Malformed body or invalid fields
        500: Purchase could not be enqueued
    """
    raw_body = await request.body()

    # boto3 is blocking
    response = await run_in_threadpool(handler.handle, raw_body)

    return JSONResponse(
        status_code=response.status_code,
        content=response.body,
        headers=response.headers
    )


@app.get("/gigs", response_model=GigListResponse)
async def list_gigs(repository: GigRepository = Depends(get_gig_repository)):
    """
    List every gig in the catalogue.

    Raises:
        500: If the gig table could not be read
    """
    try:
        gigs = await run_in_threadpool(repository.list_gigs)
        return GigListResponse(gigs=[Gig(**gig) for gig in gigs], count=len(gigs))

    except GigRepositoryError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve gigs"
        )
    except Exception as e:
        logger.error(f"Failed to list gigs: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve gigs"
        )


@app.get("/gigs/{gig_id}", response_model=Gig)
async def get_gig(gig_id: str, repository: GigRepository = Depends(get_gig_repository)):
    """
    Retrieve a single gig.

    Raises:
        404: If no gig has this id
        500: If the gig table could not be read
    """
    try:
        logger.info(f"Fetching gig gig_id={gig_id}")
        gig = await run_in_threadpool(repository.get_gig, gig_id)

        if gig is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Gig not found"
            )

        return Gig(**gig)

    except HTTPException:
        raise
    except GigRepositoryError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve gig"
        )
    except Exception as e:
        logger.error(f"Failed to fetch gig_id={gig_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve gig"
        )


@app.get("/metrics")
async def metrics(publisher: SqsPublisher = Depends(get_publisher)):
    """
    Publisher metrics for monitoring.

    Metrics exposed:
    - Total messages sent
    - Messages failed
    - Time of the last successful send
    """
    stats = publisher.get_stats()

    return {
        "service": "ticket-purchase-service",
        "messages_sent": stats.get("messages_sent", 0),
        "messages_failed": stats.get("messages_failed", 0),
        "sqs_connected": stats.get("connected", False),
        "last_message_time": stats.get("last_message_time")
    }


# MAIN ENTRY POINT

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "TicketPurchaseService.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
