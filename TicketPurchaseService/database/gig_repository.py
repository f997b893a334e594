import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class GigRepositoryError(Exception):
    """Raised when the gig table could not be read."""


def _from_dynamo(value: Any) -> Any:
    """Convert DynamoDB Decimals into plain ints and floats, recursively."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _from_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, set)):
        return [_from_dynamo(v) for v in value]
    return value


# ============================================================================
# DATABASE OPERATIONS
# ============================================================================

class GigRepository:
    """
    Read-only access to the DynamoDB gig table.

    This class handles:
    - Lazy table resource creation
    - Listing every gig (paginated scan)
    - Looking up a single gig by id
    """

    def __init__(
            self,
            table_name: str,
            region_name: Optional[str] = None,
            endpoint_url: Optional[str] = None,
            table: Any = None
    ):
        """
        Initialize gig repository.

        Args:
            table_name: DynamoDB table name
            region_name: AWS region (None for the boto3 default chain)
            endpoint_url: Optional endpoint override
            table: Pre-built Table resource (skips boto3 resource creation)
        """
        self.table_name = table_name
        self.region_name = region_name
        self.endpoint_url = endpoint_url
        self.table = table

    def _get_table(self):
        if self.table is None:
            logger.info(f"Opening DynamoDB table {self.table_name}")
            dynamodb = boto3.resource(
                "dynamodb",
                region_name=self.region_name,
                endpoint_url=self.endpoint_url
            )
            self.table = dynamodb.Table(self.table_name)
        return self.table

    def list_gigs(self) -> List[Dict[str, Any]]:
        """
        Retrieve every gig in the table.

        Follows LastEvaluatedKey until the scan is exhausted.

        Returns:
            List of gig items

        Raises:
            GigRepositoryError: If the scan fails
        """
        table = self._get_table()
        gigs: List[Dict[str, Any]] = []
        scan_kwargs: Dict[str, Any] = {}

        try:
            while True:
                response = table.scan(**scan_kwargs)
                gigs.extend(_from_dynamo(item) for item in response.get("Items", []))

                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to scan table {self.table_name}: {e}")
            raise GigRepositoryError("Failed to list gigs") from e

        logger.info(f"Retrieved {len(gigs)} gigs")
        return gigs

    def get_gig(self, gig_id: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve a single gig.

        Args:
            gig_id: Gig identifier

        Returns:
            The gig item, or None if no gig has that id

        Raises:
            GigRepositoryError: If the lookup fails
        """
        try:
            response = self._get_table().get_item(Key={"id": gig_id})
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to get gig {gig_id}: {e}")
            raise GigRepositoryError(f"Failed to get gig {gig_id}") from e

        item = response.get("Item")
        if item is None:
            logger.info(f"Gig not found: gig_id={gig_id}")
            return None

        return _from_dynamo(item)
