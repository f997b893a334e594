"""
Purchase Request Handler

Turns a raw purchase request into a queued purchase record:
parse -> validate -> mint ticket id -> publish -> acknowledge.

Nothing is enqueued unless the request is valid, and nothing is
acknowledged unless the queue accepted the message.
"""

import json
import logging
import uuid
from typing import Any, Optional, Union

from pydantic import ValidationError

from TicketPurchaseService.data_model.purchase import (
    ErrorResponse,
    PurchaseAcknowledgement,
    PurchaseRecord,
    PurchaseRequest,
)
from TicketPurchaseService.data_model.response import ApiResponse
from TicketPurchaseService.messaging.sqs_publisher import QueuePublisher
from TicketPurchaseService.purchase.errors import (
    MalformedBodyError,
    PublishFailureError,
    PurchaseError,
    PurchaseValidationError,
)

logger = logging.getLogger(__name__)

RawBody = Optional[Union[str, bytes]]


def generate_ticket_id() -> str:
    """Mint a random 128-bit ticket identifier."""
    return str(uuid.uuid4())


def parse_body(raw_body: RawBody) -> Any:
    """
    Deserialize a raw request body.

    Raises:
        MalformedBodyError: If the body is missing, not UTF-8 or not JSON
    """
    if raw_body is None:
        raise MalformedBodyError("Request body is required")

    if isinstance(raw_body, bytes):
        try:
            raw_body = raw_body.decode("utf-8")
        except UnicodeDecodeError:
            raise MalformedBodyError("Request body must be UTF-8 encoded JSON")

    if not raw_body.strip():
        raise MalformedBodyError("Request body is required")

    try:
        return json.loads(raw_body)
    except (ValueError, RecursionError):
        # JSONDecodeError, oversized integer literals, excessive nesting
        raise MalformedBodyError("Invalid JSON in request body")


def validate_request(payload: Any) -> PurchaseRequest:
    """
    Validate a deserialized body into a PurchaseRequest.

    Raises:
        PurchaseValidationError: Listing every missing or malformed field
    """
    try:
        return PurchaseRequest.model_validate(payload)
    except ValidationError as e:
        details = [
            {
                "field": ".".join(str(part) for part in error["loc"]) or "body",
                "message": error["msg"],
            }
            for error in e.errors()
        ]
        fields = ", ".join(detail["field"] for detail in details)
        raise PurchaseValidationError(f"Invalid purchase request: {fields}", details=details)


class PurchaseRequestHandler:
    """
    Handles ticket purchase requests.

    The queue URL is injected here rather than read from the environment,
    so the handler can run against any QueuePublisher.
    """

    def __init__(self, publisher: QueuePublisher, queue_url: str):
        """
        Args:
            publisher: Queue client used to enqueue purchase records
            queue_url: URL of the purchase queue
        """
        if not queue_url:
            raise ValueError("queue_url is required")

        self.publisher = publisher
        self.queue_url = queue_url

    def process(self, raw_body: RawBody) -> PurchaseRecord:
        """
        Validate, enqueue and return the purchase record.

        Args:
            raw_body: Request body as received from the gateway

        Returns:
            PurchaseRecord: The record that was published

        Raises:
            MalformedBodyError: Body is not valid JSON
            PurchaseValidationError: Required fields missing or malformed
            PublishFailureError: Queue did not accept the record
        """
        request = validate_request(parse_body(raw_body))

        record = PurchaseRecord(
            name=request.name,
            email=request.email,
            gigId=request.gigId,
            ticketId=generate_ticket_id()
        )

        try:
            message_id = self.publisher.publish(self.queue_url, record.model_dump_json())
        except Exception as e:
            logger.error(f"Failed to enqueue ticket {record.ticketId}: {e}", exc_info=True)
            raise PublishFailureError("Failed to process purchase request, please try again later") from e

        logger.info(
            f"Purchase accepted: ticketId={record.ticketId}, "
            f"gigId={record.gigId}, message_id={message_id}"
        )

        return record

    def handle(self, raw_body: RawBody) -> ApiResponse:
        """
        Process a purchase request and map the outcome to a response.

        Returns:
            ApiResponse: 202 with the ticket id, 400 for a bad request,
            500 if the purchase could not be enqueued
        """
        try:
            record = self.process(raw_body)
        except PurchaseError as e:
            if e.status_code < 500:
                logger.warning(f"Purchase rejected: {e.message}")

            error = ErrorResponse(error=e.message, details=e.details)
            return ApiResponse(
                status_code=e.status_code,
                body=error.model_dump(exclude_none=True)
            )

        acknowledgement = PurchaseAcknowledgement(ticketId=record.ticketId)
        return ApiResponse(status_code=202, body=acknowledgement.model_dump())
