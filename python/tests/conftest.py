import logging
from unittest.mock import MagicMock

import pytest

from json_logger import Config, mdc, shutdown

@pytest.fixture(autouse=True)
def _clean_state():
    mdc.clear()
    yield
    mdc.clear()
    shutdown()

@pytest.fixture
def backend():
    b = MagicMock(spec=logging.Logger)
    b.name = "test.backend"
    b.isEnabledFor.return_value = True
    return b

@pytest.fixture
def bare_config():
    # no standard fields, so output depends only on what the test adds
    return Config(include_level=False, include_timestamp=False, include_trace_context=False)

def emitted(backend) -> str:
    backend.log.assert_called_once()
    return backend.log.call_args.args[1]
