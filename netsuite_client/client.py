"""
Client implementation for the NetSuite REST record API.

This module defines the :class:`NetSuiteClient` class which builds
requests against the fixed NetSuite record endpoints, attaches the
authorization header and decodes the ``{"records": [...]}`` envelope
returned by every list endpoint into typed records.

Usage
-----

.. code-block:: python

    from netsuite_client import NetSuiteClient, load_config

    client = NetSuiteClient(load_config())

    client.test_connection()
    for customer in client.get_customers(limit=10):
        print(customer.entityid, customer.companyname)

    payments = client.get_vendor_payments("2024-01-01", "2024-03-31", limit=20)

Every public method issues exactly one GET request. There is no
retry, pagination or caching; failures are raised to the caller as
:class:`~netsuite_client.exceptions.NetSuiteError` subclasses.

The ``Authorization`` header carries the consumer key as a static
bearer credential. No OAuth signing or token exchange is performed.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Type

import requests
from pydantic import ValidationError

from .config import ConnectionConfig
from .exceptions import (
    NetSuiteAPIError,
    NetSuiteConfigError,
    NetSuiteDecodeError,
    NetSuiteTransportError,
)
from .models import Customer, RecordEnvelope, RecordT, Transaction

logger = logging.getLogger(__name__)

RECORD_PATH = "/rest/platform/v1/record"
CUSTOMER_ENDPOINT = "customer"
CHECK_ENDPOINT = "check"
SALES_ORDER_ENDPOINT = "salesorder"

VENDOR_PAYMENT_FILTER = "type IS VendPymt"


def build_query(filters: Sequence[str], limit: Optional[int] = None) -> str:
    """Compose the query string for a record list request.

    Each filter becomes its own ``q=<filter>`` parameter in the given
    order, followed by ``limit=N`` when a limit is supplied. Filter
    strings are passed through verbatim; no escaping is applied.

    Returns
    -------
    str
        ``"?"`` followed by the ``&``-joined parameters, or an empty
        string when there are no parameters at all.

    Raises
    ------
    ValueError
        If ``limit`` is negative.

    Examples
    --------

    >>> build_query(["type IS VendPymt"], 10)
    '?q=type IS VendPymt&limit=10'
    >>> build_query([])
    ''
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    params = [f"q={f}" for f in filters]
    if limit is not None:
        params.append(f"limit={limit}")
    if not params:
        return ""
    return "?" + "&".join(params)


def date_range_filter(start_date: str, end_date: str) -> str:
    """Return a ``createddate BETWEEN`` filter; dates are inserted as given."""
    return f"createddate BETWEEN '{start_date}' AND '{end_date}'"


def _validate_url(url: str) -> None:
    try:
        requests.Request("GET", url).prepare()
    except requests.RequestException as exc:
        raise NetSuiteConfigError(f"Invalid URL {url!r}: {exc}") from exc


class NetSuiteClient:
    """A thin client for the NetSuite REST record API.

    Parameters
    ----------
    config : ConnectionConfig
        Account credentials and the REST base URL.
    session : requests.Session, optional
        HTTP session to send requests with. When omitted the client
        creates its own session, which pools connections across calls
        and is closed by :meth:`close`.

    Raises
    ------
    NetSuiteConfigError
        If the OAuth authorize or token URL derived from ``base_url``
        is not a valid URL.

    Notes
    -----
    The session is shared by every call and never reconfigured after
    construction, so one client may serve several callers at once.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.base_url = config.base_url.rstrip("/")

        # Derived for a future OAuth flow; only checked for validity today.
        self.authorize_url = f"{self.base_url}/oauth/authorize"
        self.token_url = f"{self.base_url}/oauth/token"
        _validate_url(self.authorize_url)
        _validate_url(self.token_url)

        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        logger.debug("NetSuite client created for %s", self.base_url)

    def close(self) -> None:
        """Close the underlying HTTP session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "NetSuiteClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # HTTP request helpers
    # ------------------------------------------------------------------
    def _auth_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.config.consumer_key}"}

    def _record_url(
        self,
        endpoint: str,
        filters: Sequence[str] = (),
        limit: Optional[int] = None,
    ) -> str:
        return f"{self.base_url}{RECORD_PATH}/{endpoint}{build_query(filters, limit)}"

    def _send(self, operation: str, url: str) -> requests.Response:
        """Issue a single GET request and return the raw response.

        Raises
        ------
        NetSuiteTransportError
            If the request fails before a response is received.
        """
        logger.debug("GET %s", url, extra={"operation": operation})
        try:
            return self._session.get(url, headers=self._auth_headers())
        except requests.RequestException as exc:
            logger.warning(
                "%s failed: %s", operation, exc,
                extra={"operation": operation, "outcome": "transport_error"},
            )
            raise NetSuiteTransportError(f"Failed to connect to {url}: {exc}") from exc

    def _fetch_records(
        self,
        operation: str,
        url: str,
        model: Type[RecordT],
    ) -> List[RecordT]:
        """GET ``url`` and unwrap its record envelope into ``model`` instances.

        Non-2xx responses raise :class:`NetSuiteAPIError` without the
        body being read. Bodies that are not JSON or do not match the
        envelope shape raise :class:`NetSuiteDecodeError`.
        """
        response = self._send(operation, url)
        status = response.status_code

        if not 200 <= status < 300:
            logger.warning(
                "%s failed with status %d", operation, status,
                extra={"operation": operation, "outcome": "http_error", "status_code": status},
            )
            raise NetSuiteAPIError(f"{operation} failed: HTTP {status}", status, url)

        try:
            envelope = RecordEnvelope[model].model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise NetSuiteDecodeError(
                f"{operation}: unexpected response body from {url}: {exc}"
            ) from exc

        logger.info(
            "%s returned %d records", operation, len(envelope.records),
            extra={"operation": operation, "outcome": "success", "status_code": status},
        )
        return envelope.records

    def _fetch_transactions(
        self,
        operation: str,
        endpoint: str,
        filters: Sequence[str],
        limit: Optional[int],
    ) -> List[Transaction]:
        url = self._record_url(endpoint, filters, limit)
        return self._fetch_records(operation, url, Transaction)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def test_connection(self) -> None:
        """Check that the NetSuite REST API is reachable.

        Sends a GET to the customer endpoint. A 2xx status or a 401
        both count as success: 401 means the server answered but the
        credentials were not accepted.

        Raises
        ------
        NetSuiteAPIError
            For any other status.
        NetSuiteTransportError
            If the server could not be reached.
        """
        operation = "test_connection"
        url = self._record_url(CUSTOMER_ENDPOINT)
        response = self._send(operation, url)
        status = response.status_code

        if 200 <= status < 300 or status == 401:
            logger.info(
                "NetSuite reachable (HTTP %d)", status,
                extra={"operation": operation, "outcome": "success", "status_code": status},
            )
            return

        logger.warning(
            "NetSuite connection test failed with status %d", status,
            extra={"operation": operation, "outcome": "http_error", "status_code": status},
        )
        raise NetSuiteAPIError(f"Failed to connect to NetSuite: HTTP {status}", status, url)

    def get_customers(self, limit: Optional[int] = None) -> List[Customer]:
        """Fetch customer records.

        Parameters
        ----------
        limit : int, optional
            Maximum number of records. When omitted the ``limit``
            parameter is left out and the server's page size applies.
        """
        url = self._record_url(CUSTOMER_ENDPOINT, limit=limit)
        return self._fetch_records("get_customers", url, Customer)

    def get_vendor_payments(
        self,
        start_date: str,
        end_date: str,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """Fetch vendor payments created between two dates.

        NetSuite exposes vendor payments through the ``check`` record.
        The dates are inserted into the filter verbatim, so they must
        already be literals NetSuite accepts (e.g. ``"2024-05-01"``).
        """
        filters = [VENDOR_PAYMENT_FILTER, date_range_filter(start_date, end_date)]
        return self._fetch_transactions("get_vendor_payments", CHECK_ENDPOINT, filters, limit)

    def get_vendor_payments_2024(self, limit: Optional[int] = None) -> List[Transaction]:
        """Vendor payments for May through August 2024."""
        return self.get_vendor_payments("2024-05-01", "2024-08-31", limit)

    def get_transactions_with_filters(
        self,
        filters: Sequence[str],
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """Fetch ``check`` records matching raw NetSuite query filters.

        Each filter is sent as its own ``q`` parameter, unvalidated and
        unescaped. An empty sequence sends no ``q`` parameter at all.
        """
        return self._fetch_transactions(
            "get_transactions_with_filters", CHECK_ENDPOINT, filters, limit
        )

    def get_sales_orders(
        self,
        filters: Sequence[str] = (),
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """Fetch ``salesorder`` records matching raw NetSuite query filters."""
        return self._fetch_transactions(
            "get_sales_orders", SALES_ORDER_ENDPOINT, filters, limit
        )
