"""
Packet label schemas.

Label format: DDMMDD-REGION-SEQ (e.g. 301031-RR-001)
"""

from pydantic import ConfigDict, Field
from typing import Optional

from models.base import BaseSchema


class PacketLabelParts(BaseSchema):
    """Fragments recovered from a packet label."""

    # Fragments are taken verbatim from the label
    model_config = ConfigDict(str_strip_whitespace=False)

    wip_day: str = Field(..., description="Production batch day (DD)")
    month: str = Field(..., description="Production batch month (MM)")
    packing_day: str = Field(..., description="Packing day (DD)")
    region_code: str
    sequence: int


class PacketLabelCreate(BaseSchema):
    """Mint a label from a production batch."""

    wip_batch_id: str = Field(
        ...,
        min_length=1,
        description="Production batch ID like WIP-SUN-251030-001"
    )
    region: str = Field(..., description="Region name like Riyadh Region")
    packing_date: str = Field(..., description="Packing date (YYYY-MM-DD)")
    sequence: Optional[int] = Field(
        None,
        description="Explicit sequence; allocated from existing_labels when omitted"
    )
    existing_labels: list[str] = Field(default_factory=list)


class PacketLabelResponse(BaseSchema):
    """Minted label and its decoded parts."""

    label: str
    sequence: int
    parts: PacketLabelParts


class NextSequenceRequest(BaseSchema):
    """Existing labels to allocate the next sequence from."""

    region: str
    packing_date: str
    existing_labels: list[str] = Field(default_factory=list)


class NextSequenceResponse(BaseSchema):
    region_code: str
    packing_day: str
    next_sequence: int
