"""Test configuration for pytest."""

import logging
import os
import pytest


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['IMAGECUTTER_LOG_LEVEL'] = 'WARNING'

    logging.getLogger().setLevel(logging.WARNING)

    # Batch processing logs every failed item as a warning
    for logger_name in ['imagecutter.pipeline', 'imagecutter.cli']:
        logging.getLogger(logger_name).setLevel(logging.ERROR)
