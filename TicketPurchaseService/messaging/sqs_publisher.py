"""
SQS Publisher Service

This module handles:
1. Publishing purchase messages to an SQS queue
2. Lazy creation and reuse of the boto3 client
3. Wrapping AWS errors into a single publish error
4. Metrics tracking
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

# Configure logging
logger = logging.getLogger(__name__)


class QueuePublishError(Exception):
    """Raised when the queue did not accept a message."""


class QueuePublisher(Protocol):
    """
    Minimal capability the purchase handler needs from a message queue.

    Implementations return the message id assigned by the queue and raise
    on any failure to enqueue.
    """

    def publish(self, queue_url: str, message_body: str) -> str:
        ...


class SqsPublisher:
    """
    Publisher that sends purchase messages to Amazon SQS.

    This service:
    - Creates the SQS client on first use
    - Reuses the client across warm Lambda invocations
    - Sends one message per publish call
    - Tracks metrics for monitoring
    """

    def __init__(
            self,
            region_name: Optional[str] = None,
            endpoint_url: Optional[str] = None,
            client: Any = None
    ):
        """
        Initialize SQS publisher.

        Args:
            region_name: AWS region (None for the boto3 default chain)
            endpoint_url: Optional endpoint override, e.g. a local stack
            client: Pre-built SQS client (skips boto3 client creation)
        """
        self.region_name = region_name
        self.endpoint_url = endpoint_url

        self.client = client

        # Metrics for monitoring
        self.messages_sent = 0
        self.messages_failed = 0
        self.last_message_time: Optional[datetime] = None

        logger.info(
            f"SQS Publisher initialized: "
            f"region={region_name or 'default'}, endpoint={endpoint_url or 'default'}"
        )

    def _get_client(self):
        if self.client is None:
            logger.info("Creating SQS client...")
            self.client = boto3.client(
                "sqs",
                region_name=self.region_name,
                endpoint_url=self.endpoint_url
            )
        return self.client

    def is_connected(self) -> bool:
        """
        Check if the SQS client has been created.

        Returns:
            bool: True if a client is available, False otherwise
        """
        return self.client is not None

    def publish(self, queue_url: str, message_body: str) -> str:
        """
        Send a message to SQS.

        This method:
        1. Sends the message body to the queue
        2. Waits for the queue to acknowledge it
        3. Updates metrics
        4. Wraps AWS errors

        Args:
            queue_url: URL of the target queue
            message_body: Serialized message (JSON text)

        Returns:
            str: Message id assigned by SQS

        Raises:
            QueuePublishError: If the queue did not accept the message
        """
        try:
            logger.debug(f"Sending message to queue {queue_url}")

            response = self._get_client().send_message(
                QueueUrl=queue_url,
                MessageBody=message_body
            )

        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"SQS rejected message ({error_code}): {e}")
            self.messages_failed += 1
            raise QueuePublishError(f"SQS rejected message: {error_code}") from e

        except BotoCoreError as e:
            logger.error(f"Failed to reach SQS: {e}")
            self.messages_failed += 1
            raise QueuePublishError(f"Failed to reach SQS: {e}") from e

        message_id = response["MessageId"]

        # Update metrics
        self.messages_sent += 1
        self.last_message_time = datetime.now(timezone.utc)

        logger.info(f"Message sent successfully: message_id={message_id}")

        return message_id

    def get_stats(self) -> Dict[str, Any]:
        """
        Get publisher statistics for monitoring.

        Returns:
            dict: Publisher metrics including messages sent, failed, etc.
        """
        return {
            "connected": self.is_connected(),
            "messages_sent": self.messages_sent,
            "messages_failed": self.messages_failed,
            "last_message_time": self.last_message_time.isoformat() if self.last_message_time else None,
            "region": self.region_name
        }
