"""Query vendor payments, custom filters and sales orders."""

import logging
import sys

from netsuite_client import NetSuiteClient, NetSuiteError, load_config

logger = logging.getLogger("transaction_query")


def show(title, fetch):
    logger.info(title)
    try:
        transactions = fetch()
    except NetSuiteError as exc:
        logger.warning("Failed: %s", exc)
        return
    logger.info("Fetched %d transactions", len(transactions))
    for i, txn in enumerate(transactions[:3], start=1):
        logger.info("   %d. %s - $%.2f - %s (%s)", i, txn.id, txn.amount or 0.0,
                    txn.transaction_type or txn.memo or "Unknown",
                    txn.createddate or "No date")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    try:
        client = NetSuiteClient(load_config())
    except NetSuiteError as exc:
        logger.error("Failed to initialize NetSuite client: %s", exc)
        return 1

    with client:
        show("Vendor payments for May-Aug 2024",
             lambda: client.get_vendor_payments_2024(limit=10))

        filters = [
            "type IS VendPymt",
            "createddate BETWEEN '2024-05-01' AND '2024-08-31'",
        ]
        show("Checks matching custom filters",
             lambda: client.get_transactions_with_filters(filters, limit=10))

        show("Sales orders created in 2024",
             lambda: client.get_sales_orders(
                 ["createddate BETWEEN '2024-01-01' AND '2024-12-31'"], limit=5))
    return 0


if __name__ == "__main__":
    sys.exit(main())
