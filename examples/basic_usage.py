"""Check the connection and list a few customers."""

import logging
import sys
from collections import defaultdict
from typing import Dict, List

from netsuite_client import Customer, NetSuiteClient, NetSuiteError, load_config

logger = logging.getLogger("basic_usage")


def group_by_name_length(customers: List[Customer]) -> Dict[int, List[Customer]]:
    """Group customers that have a company name by the name's length."""
    groups: Dict[int, List[Customer]] = defaultdict(list)
    for customer in customers:
        if customer.companyname:
            groups[len(customer.companyname)].append(customer)
    return dict(groups)


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    logger.info("=== NetSuite Client Example ===")

    try:
        client = NetSuiteClient(load_config())
    except NetSuiteError as exc:
        logger.error("Failed to initialize NetSuite client: %s", exc)
        return 1

    with client:
        try:
            client.test_connection()
            logger.info("Successfully connected to NetSuite")
        except NetSuiteError as exc:
            logger.warning("Connection test failed (expected without real credentials): %s", exc)

        try:
            customers = client.get_customers(limit=5)
        except NetSuiteError as exc:
            logger.warning("Failed to fetch customers (expected without real credentials): %s", exc)
        else:
            logger.info("Fetched %d customers", len(customers))
            for customer in customers[:3]:
                logger.info("   - %s (%s)", customer.entityid,
                            customer.companyname or "No company name")
            for length, group in sorted(group_by_name_length(customers).items()):
                logger.info("%d customers have company names with %d characters",
                            len(group), length)

    logger.info("=== Example completed ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
