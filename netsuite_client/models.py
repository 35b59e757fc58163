"""NetSuite record models.

These mirror the JSON records returned by the NetSuite REST record API
field for field. Unknown fields are ignored and optional fields that
are missing from a record decode to ``None``.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class NetSuiteRecord(BaseModel):
    """Base model for NetSuite API records."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class EntityReference(NetSuiteRecord):
    """Reference to a related entity such as a vendor or customer."""
    id: str
    name: Optional[str] = None


class Customer(NetSuiteRecord):
    """NetSuite customer entity.

    Maps to: /rest/platform/v1/record/customer
    """
    id: str
    entityid: str
    companyname: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    datecreated: Optional[str] = None


class Transaction(NetSuiteRecord):
    """A financial transaction row.

    Maps to: /rest/platform/v1/record/check and
    /rest/platform/v1/record/salesorder
    """
    id: str
    trandate: Optional[str] = None
    createddate: Optional[str] = None
    # NetSuite sends this as "type"
    transaction_type: Optional[str] = Field(
        None, validation_alias=AliasChoices("transaction_type", "type")
    )
    memo: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    entity: Optional[EntityReference] = None


RecordT = TypeVar("RecordT", bound=NetSuiteRecord)


class RecordEnvelope(BaseModel, Generic[RecordT]):
    """The ``{"records": [...]}`` wrapper every list endpoint returns."""

    model_config = ConfigDict(extra="ignore")

    records: List[RecordT]
