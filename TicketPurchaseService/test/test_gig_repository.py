"""
Unit Tests for the Gig Repository

Run with: pytest -v test_gig_repository.py
"""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from TicketPurchaseService.database.gig_repository import GigRepository, GigRepositoryError


@pytest.fixture
def mock_table():
    return MagicMock()


@pytest.fixture
def repository(mock_table):
    return GigRepository("gig", table=mock_table)


def _client_error(operation):
    return ClientError(
        {"Error": {"Code": "ResourceNotFoundException", "Message": "no table"}},
        operation
    )


class TestListGigs:

    def test_single_page(self, repository, mock_table):
        mock_table.scan.return_value = {
            "Items": [{"id": "gig-1", "band": "The Decimals", "price": Decimal("25")}]
        }

        gigs = repository.list_gigs()

        assert gigs == [{"id": "gig-1", "band": "The Decimals", "price": 25}]
        mock_table.scan.assert_called_once_with()

    def test_follows_pagination(self, repository, mock_table):
        mock_table.scan.side_effect = [
            {"Items": [{"id": "gig-1"}], "LastEvaluatedKey": {"id": "gig-1"}},
            {"Items": [{"id": "gig-2"}]},
        ]

        gigs = repository.list_gigs()

        assert [gig["id"] for gig in gigs] == ["gig-1", "gig-2"]
        assert mock_table.scan.call_args_list[1].kwargs == {"ExclusiveStartKey": {"id": "gig-1"}}

    def test_empty_table(self, repository, mock_table):
        mock_table.scan.return_value = {"Items": []}
        assert repository.list_gigs() == []

    def test_scan_failure(self, repository, mock_table):
        mock_table.scan.side_effect = _client_error("Scan")

        with pytest.raises(GigRepositoryError):
            repository.list_gigs()


class TestGetGig:

    def test_found(self, repository, mock_table):
        mock_table.get_item.return_value = {
            "Item": {"id": "gig-42", "price": Decimal("19.5"), "lineup": [{"slot": Decimal("1")}]}
        }

        gig = repository.get_gig("gig-42")

        assert gig == {"id": "gig-42", "price": 19.5, "lineup": [{"slot": 1}]}
        mock_table.get_item.assert_called_once_with(Key={"id": "gig-42"})

    def test_not_found(self, repository, mock_table):
        mock_table.get_item.return_value = {}
        assert repository.get_gig("missing") is None

    def test_lookup_failure(self, repository, mock_table):
        mock_table.get_item.side_effect = _client_error("GetItem")

        with pytest.raises(GigRepositoryError):
            repository.get_gig("gig-42")


def test_table_created_lazily():
    with patch('TicketPurchaseService.database.gig_repository.boto3') as mock_boto3:
        mock_boto3.resource.return_value.Table.return_value.get_item.return_value = {}

        repository = GigRepository("gig", region_name="eu-west-1")
        mock_boto3.resource.assert_not_called()

        repository.get_gig("gig-1")

        mock_boto3.resource.assert_called_once_with("dynamodb", region_name="eu-west-1", endpoint_url=None)
        mock_boto3.resource.return_value.Table.assert_called_once_with("gig")
