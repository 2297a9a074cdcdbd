"""
Packet label codec.

Label format: DDMMDD-REGION-SEQ

    301031-RR-001
    │ │ │  │  └── sequence for (region, packing day), 3 digits
    │ │ │  └───── region code
    │ │ └──────── packing day
    │ └────────── production batch month
    └──────────── production batch day

The production day/month come from the WIP batch ID
(WIP-<PRODUCT>-<YYMMDD>-<SEQ>). Decoding recovers only these fragments,
never the production year.
"""

from typing import Iterable, Optional

import structlog

from config.packing import (
    REGION_CODES,
    DEFAULT_REGION_CODE,
    LABEL_SEQUENCE_WIDTH,
    LABEL_SEQUENCE_MAX,
)
from exceptions import (
    InvalidBatchIdError,
    InvalidPackingDateError,
    SequenceOverflowError,
)
from models.packet_label import PacketLabelParts

logger = structlog.get_logger(__name__)


def resolve_region_code(region: Optional[str]) -> str:
    """
    Look up the label code for a region name.

    Unmapped names fall back to the general code (GEN).
    """
    if not region:
        return DEFAULT_REGION_CODE
    return REGION_CODES.get(region.strip(), DEFAULT_REGION_CODE)


def packing_day_of(packing_date: str) -> str:
    """
    Day fragment of a YYYY-MM-DD date.

    Raises:
        InvalidPackingDateError: If the date has fewer than 3 segments
            or the day is not two ASCII digits
    """
    parts = str(packing_date).strip().split("-")
    if len(parts) < 3:
        raise InvalidPackingDateError(packing_date)

    day = parts[2]
    if len(day) != 2 or not (day.isascii() and day.isdigit()):
        raise InvalidPackingDateError(packing_date)
    return day


def encode(
    wip_batch_id: str,
    region: str,
    packing_date: str,
    sequence: int = 1
) -> str:
    """
    Build a packet label.

    Example:
        encode("WIP-SUN-251030-001", "Riyadh Region", "2025-10-31", 1)
        → "301031-RR-001"

    The date fragment of the batch ID is sliced without checking that
    it is numeric.

    Raises:
        InvalidBatchIdError: Batch ID has fewer than 3 segments
        InvalidPackingDateError: Packing date is not YYYY-MM-DD
        SequenceOverflowError: Sequence outside 1-999
    """
    parts = wip_batch_id.split("-")
    if len(parts) < 3:
        raise InvalidBatchIdError(wip_batch_id)

    wip_date = parts[2]  # YYMMDD
    wip_month = wip_date[2:4]
    wip_day = wip_date[4:6]

    packing_day = packing_day_of(packing_date)
    region_code = resolve_region_code(region)

    if not 1 <= sequence <= LABEL_SEQUENCE_MAX:
        raise SequenceOverflowError(sequence, LABEL_SEQUENCE_MAX)
    seq_str = str(sequence).zfill(LABEL_SEQUENCE_WIDTH)

    label = f"{wip_day}{wip_month}{packing_day}-{region_code}-{seq_str}"

    logger.debug(
        "packet_label_encoded",
        wip_batch_id=wip_batch_id,
        region=region,
        packing_date=packing_date,
        sequence=sequence,
        label=label
    )

    return label


def decode(label: Optional[str]) -> Optional[PacketLabelParts]:
    """
    Split a label back into its fragments.

    Returns None for anything that is not a well-formed label; callers
    scan sheet columns with this, so a miss is not an error.
    """
    if not label:
        return None

    text = str(label).strip()
    if any(c.isspace() for c in text):
        return None

    parts = text.split("-")
    if len(parts) != 3:
        return None

    date_str, region_code, seq_str = parts
    if len(date_str) != 6 or not region_code:
        return None
    if not (seq_str.isascii() and seq_str.isdigit()):
        return None

    return PacketLabelParts(
        wip_day=date_str[0:2],
        month=date_str[2:4],
        packing_day=date_str[4:6],
        region_code=region_code,
        sequence=int(seq_str),
    )


def next_sequence(
    region: str,
    packing_date: str,
    existing_labels: Iterable[Optional[str]] = ()
) -> int:
    """
    Next free sequence for a region on a packing day.

    Only labels with the same region code and packing day count.
    Returns 1 when none match, otherwise the highest sequence + 1.

    Not safe against concurrent writers: two callers reading the same
    snapshot get the same number. Re-read the ledger right before
    allocating.
    """
    region_code = resolve_region_code(region)
    packing_day = packing_day_of(packing_date)

    sequences = [
        parsed.sequence
        for parsed in (decode(label) for label in existing_labels)
        if parsed
        and parsed.region_code == region_code
        and parsed.packing_day == packing_day
    ]

    if not sequences:
        return 1

    return max(sequences) + 1
