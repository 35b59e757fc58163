"""
Python client for the NetSuite REST record API.

This package provides a `NetSuiteClient` class that builds requests
against NetSuite's record endpoints, sends the configured consumer
key as a bearer credential, and decodes the JSON responses into typed
`Customer` and `Transaction` records.

Examples
--------

```python
from netsuite_client import NetSuiteClient, load_config

# Credentials come from config/*.toml, .env and NETSUITE_* variables
client = NetSuiteClient(load_config())

# Customers, at most 5
customers = client.get_customers(limit=5)

# Vendor payments created in Q1 2024
payments = client.get_vendor_payments("2024-01-01", "2024-03-31", limit=20)

# Arbitrary NetSuite query filters, one `q` parameter each
orders = client.get_sales_orders(["status IS SalesOrd:B"], limit=10)
```

Each call sends a single GET request. Errors are raised as
subclasses of `NetSuiteError`.
"""

from .client import NetSuiteClient, build_query
from .config import ConnectionConfig, load_config
from .exceptions import (
    NetSuiteAPIError,
    NetSuiteConfigError,
    NetSuiteDecodeError,
    NetSuiteError,
    NetSuiteTransportError,
)
from .models import Customer, EntityReference, RecordEnvelope, Transaction

__all__ = [
    "NetSuiteClient",
    "build_query",
    "ConnectionConfig",
    "load_config",
    "NetSuiteError",
    "NetSuiteConfigError",
    "NetSuiteTransportError",
    "NetSuiteAPIError",
    "NetSuiteDecodeError",
    "Customer",
    "Transaction",
    "EntityReference",
    "RecordEnvelope",
]
