"""
Tests for packet_label_service: label encoding, decoding and sequencing.
"""

import pytest

from exceptions import (
    FormatError,
    InvalidBatchIdError,
    InvalidPackingDateError,
    SequenceOverflowError,
)
from services.packet_label_service import (
    decode,
    encode,
    next_sequence,
    packing_day_of,
    resolve_region_code,
)


class TestResolveRegionCode:
    """Tests for region name → code lookup."""

    def test_known_region(self):
        assert resolve_region_code("Riyadh Region") == "RR"

    def test_short_spelling(self):
        assert resolve_region_code("Eastern Province") == "ER"

    def test_strips_whitespace(self):
        assert resolve_region_code("  Makkah  ") == "MR"

    def test_unknown_region_is_general(self):
        assert resolve_region_code("Atlantis") == "GEN"

    def test_empty_region_is_general(self):
        assert resolve_region_code("") == "GEN"
        assert resolve_region_code(None) == "GEN"


class TestPackingDayOf:
    """Tests for extracting the day from YYYY-MM-DD."""

    def test_returns_day(self):
        assert packing_day_of("2025-10-31") == "31"

    def test_rejects_short_date(self):
        with pytest.raises(InvalidPackingDateError):
            packing_day_of("2025-10")

    @pytest.mark.parametrize("packing_date", ["2025-10-5", "2025-10-031", "2025-10-ab"])
    def test_rejects_day_not_two_digits(self, packing_date):
        with pytest.raises(InvalidPackingDateError):
            packing_day_of(packing_date)


class TestEncode:
    """Tests for building labels."""

    def test_first_label(self):
        assert encode("WIP-SUN-251030-001", "Riyadh Region", "2025-10-31", 1) == "301031-RR-001"

    def test_default_sequence_is_one(self):
        assert encode("WIP-SUN-251030-001", "Riyadh Region", "2025-10-31") == "301031-RR-001"

    def test_pads_sequence(self):
        assert encode("WIP-SUN-251030-001", "Makkah", "2025-11-02", 42) == "301002-MR-042"

    def test_unknown_region(self):
        assert encode("WIP-SUN-250105-007", "Nowhere", "2025-01-06", 3) == "050106-GEN-003"

    def test_max_sequence(self):
        assert encode("WIP-SUN-251030-001", "Riyadh", "2025-10-31", 999).endswith("-999")

    def test_batch_id_too_short(self):
        with pytest.raises(InvalidBatchIdError) as exc_info:
            encode("WIP-251030", "Riyadh", "2025-10-31", 1)

        assert exc_info.value.code == "INVALID_BATCH_ID"
        assert exc_info.value.status_code == 422

    def test_bad_packing_date(self):
        with pytest.raises(InvalidPackingDateError):
            encode("WIP-SUN-251030-001", "Riyadh", "31/10/2025", 1)

    def test_single_digit_day_rejected(self):
        with pytest.raises(InvalidPackingDateError):
            encode("WIP-SUN-251030-001", "Riyadh", "2025-10-5", 1)

    @pytest.mark.parametrize("sequence", [0, -1, 1000])
    def test_sequence_out_of_range(self, sequence):
        with pytest.raises(SequenceOverflowError) as exc_info:
            encode("WIP-SUN-251030-001", "Riyadh", "2025-10-31", sequence)

        assert exc_info.value.code == "SEQUENCE_OUT_OF_RANGE"

    def test_errors_are_format_errors(self):
        with pytest.raises(FormatError):
            encode("bad", "Riyadh", "2025-10-31", 1)


class TestDecode:
    """Tests for splitting labels."""

    def test_round_trip_fields(self):
        parts = decode("301031-RR-001")

        assert parts.wip_day == "30"
        assert parts.month == "10"
        assert parts.packing_day == "31"
        assert parts.region_code == "RR"
        assert parts.sequence == 1

    def test_multi_letter_region(self):
        assert decode("301031-MDR-015").region_code == "MDR"

    @pytest.mark.parametrize("batch_id,region,packing_date,sequence,region_code", [
        ("WIP-SUN-251030-001", "Riyadh Region", "2025-10-31", 1, "RR"),
        ("WIP-SUN-250105-007", "Madinah", "2025-01-06", 42, "MDR"),
        ("WIP-SUN-251030-001", "Nowhere", "2025-10-31", 999, "GEN"),
        ("WIP-SUN-251030-001", "Jouf Region", "2025-10-31", 5, "JFR"),
        ("WIP-SUN-251030-001", "Northern Borders", "2025-11-02", 42, "NBR"),
    ])
    def test_decodes_what_encode_builds(self, batch_id, region, packing_date, sequence, region_code):
        label = encode(batch_id, region, packing_date, sequence)
        parts = decode(label)

        assert parts.region_code == region_code
        assert parts.sequence == sequence
        assert parts.packing_day == packing_date[-2:]
        assert parts.wip_day == batch_id.split("-")[2][4:6]
        assert f"{parts.wip_day}{parts.month}{parts.packing_day}-{parts.region_code}-{parts.sequence:03d}" == label

    def test_region_fragment_not_stripped(self):
        # A padded region must not be read as a clean one
        assert decode("301031- RR-001") is None

    @pytest.mark.parametrize("label", [
        None,
        "",
        "301031-RR",
        "301031-RR-001-X",
        "30103-RR-001",
        "301031-RR-ABC",
        "301031-RR-00²",
        "301031- RR-001",
        "301031-RR -001",
        "301031--001",
    ])
    def test_invalid_labels_return_none(self, label):
        assert decode(label) is None


class TestNextSequence:
    """Tests for allocating the next sequence."""

    def test_no_existing_labels(self):
        assert next_sequence("Riyadh Region", "2025-10-31", []) == 1

    def test_increments_highest(self):
        existing = ["301031-RR-001", "301031-RR-005", "301031-RR-002"]
        assert next_sequence("Riyadh Region", "2025-10-31", existing) == 6

    def test_ignores_other_regions(self):
        existing = ["301031-MR-009", "301031-RR-001"]
        assert next_sequence("Riyadh", "2025-10-31", existing) == 2

    def test_ignores_other_packing_days(self):
        existing = ["301030-RR-007"]
        assert next_sequence("Riyadh", "2025-10-31", existing) == 1

    def test_matches_across_production_days(self):
        # Same packing day and region, different WIP batch
        existing = ["281031-RR-003"]
        assert next_sequence("Riyadh", "2025-10-31", existing) == 4

    def test_skips_malformed_labels(self):
        existing = ["garbage", None, "", "301031-RR-002"]
        assert next_sequence("Riyadh", "2025-10-31", existing) == 3

    def test_skips_non_ascii_sequence(self):
        existing = ["301031-RR-00²", "301031-RR-001"]
        assert next_sequence("Riyadh", "2025-10-31", existing) == 2

    def test_skips_padded_region(self):
        existing = ["301031- RR-008", "301031-RR-001"]
        assert next_sequence("Riyadh", "2025-10-31", existing) == 2
