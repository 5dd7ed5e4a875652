"""Shared pytest fixtures for goldbook tests."""

import tempfile
import os
import pytest

from goldbook.database.factories import create_sqlite_database
from goldbook.domain.client import ClientService
from goldbook.domain.receipt import ReceiptService
from goldbook.logging_config import reset_logging


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    reset_logging()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def receipt_service(temp_db):
    """Create a ReceiptService with a temporary database."""
    return ReceiptService(temp_db)


@pytest.fixture
def sample_client(client_service):
    """Create a sample client with an opening balance of 10 g."""
    client_id = client_service.create_client(
        name="Ravi", shop_name="Golden Creations", balance="10"
    )
    return client_service.get_client(client_id)


@pytest.fixture
def sample_receipt(receipt_service, sample_client):
    """Create an empty receipt for the sample client."""
    receipt_id = receipt_service.create_receipt(sample_client.id)
    return receipt_service.get_receipt(receipt_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
