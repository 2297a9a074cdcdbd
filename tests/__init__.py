"""
Test suite for Packing Tracker.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_packet_label_service.py -v
"""
