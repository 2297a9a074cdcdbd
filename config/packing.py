"""
Packing configuration: stock thresholds, region codes, packaging profiles.

Static tables loaded once at import time and treated as read-only.
"""

from decimal import Decimal
from types import MappingProxyType

# =============================================================================
# STOCK LEVEL THRESHOLDS
# =============================================================================
# Multipliers applied to the min level (CRITICAL, LOW) or max level (HIGH)

STOCK_LEVEL_THRESHOLDS = MappingProxyType({
    "CRITICAL": 0.2,  # 20% of min level = critical (red)
    "LOW": 0.5,       # 50% of min level = low (orange)
    "NORMAL": 1.0,    # At or above min = normal (green)
    "HIGH": 1.5,      # 150% of max = overstock (purple)
})


# =============================================================================
# PACKET LABEL REGION CODES
# =============================================================================
# Several spellings map to the same code; the sheet holds whichever
# spelling the operator picked in the packing form.

REGION_CODES = MappingProxyType({
    "Riyadh": "RR",
    "Riyadh Region": "RR",
    "Makkah": "MR",
    "Makkah Region": "MR",
    "Madinah": "MDR",
    "Madinah Region": "MDR",
    "Eastern": "ER",
    "Eastern Region": "ER",
    "Eastern Province": "ER",
    "Eastern Province Region": "ER",
    "Asir": "AR",
    "Asir Region": "AR",
    "Tabuk": "TR",
    "Tabuk Region": "TR",
    "Qassim": "QR",
    "Qassim Region": "QR",
    "Hail": "HR",
    "Hail Region": "HR",
    "Jazan": "JR",
    "Jazan Region": "JR",
    "Najran": "NR",
    "Najran Region": "NR",
    "Al Baha": "BR",
    "Al Baha Region": "BR",
    "Northern Borders": "NBR",
    "Northern Borders Region": "NBR",
    "Jouf": "JFR",
    "Jouf Region": "JFR",
    "N/A": "NA",
    "Default": "GEN",  # General/No region
})

DEFAULT_REGION_CODE = REGION_CODES["Default"]

# Sequence field width in a packet label (001-999)
LABEL_SEQUENCE_WIDTH = 3
LABEL_SEQUENCE_MAX = 10 ** LABEL_SEQUENCE_WIDTH - 1


# =============================================================================
# PACKING MATERIALS
# =============================================================================

PACKING_ROLL = "Packing Roll"
PACKING_COVER = "Packing Cover"
BUNDLE_COVER = "Bundle Cover"

PACKING_MATERIAL_CATEGORY = "Packing Material"
PACKING_MATERIAL_UNIT = "KG"

# Grams consumed per bundle/carton, keyed by package size.
# Material order within a size is the deduction order.
PACKING_MATERIAL_CONSUMPTION = MappingProxyType({
    "25g": MappingProxyType({
        PACKING_ROLL: Decimal("0.6240"),
        PACKING_COVER: Decimal("6.0000"),
        BUNDLE_COVER: Decimal("0.0750"),
    }),
    "100g": MappingProxyType({
        PACKING_ROLL: Decimal("0.5100"),
        PACKING_COVER: Decimal("0.0500"),
        BUNDLE_COVER: Decimal("0.0750"),
    }),
    "150g": MappingProxyType({
        PACKING_ROLL: Decimal("0.6000"),  # Estimate per carton
        PACKING_COVER: Decimal("0.0500"),
        BUNDLE_COVER: Decimal("0.0800"),
    }),
    "200g": MappingProxyType({
        PACKING_ROLL: Decimal("0.7250"),
        PACKING_COVER: Decimal("0.0500"),
        BUNDLE_COVER: Decimal("0.0850"),
    }),
    "800g": MappingProxyType({
        PACKING_ROLL: Decimal("0.3000"),  # Only packing roll for 800g cartons
    }),
    "10kg": MappingProxyType({}),  # Sacks use no packing material
})


# =============================================================================
# RETAIL PRODUCT CATALOG
# =============================================================================
# SKUs the packing floor produces. Rows for SKUs outside this catalog are
# ignored when building the priority packing list.

RETAIL_PRODUCTS = MappingProxyType({
    "SUN-4402": {
        "code": "4402",
        "product_type": "Sunflower Seeds",
        "size": "200 g",
        "unit": "bag",
        "packaging": {"type": "bundle", "quantity": 5},
        "weight_per_unit": 0.2,
    },
    "SUN-4401": {
        "code": "4401",
        "product_type": "Sunflower Seeds",
        "size": "100 g",
        "unit": "bag",
        "packaging": {"type": "bundle", "quantity": 5},
        "weight_per_unit": 0.1,
    },
    "SUN-1129": {
        "code": "1129",
        "product_type": "Sunflower Seeds",
        "size": "25 g",
        "unit": "bag",
        "packaging": {"type": "bundle", "quantity": 6},
        "weight_per_unit": 0.025,
    },
    "SUN-1116": {
        "code": "1116",
        "product_type": "Sunflower Seeds",
        "size": "800 g",
        "unit": "bag",
        "packaging": {"type": "carton", "quantity": 12},
        "weight_per_unit": 0.8,
    },
    "SUN-1145": {
        "code": "1145",
        "product_type": "Sunflower Seeds",
        "size": "130 g",
        "unit": "box",
        "packaging": {"type": "carton", "quantity": 6},
        "weight_per_unit": 0.13,
    },
    "SUN-1126": {
        "code": "1126",
        "product_type": "Sunflower Seeds",
        "size": "10 KG",
        "unit": "sack",
        "packaging": {"type": "sack", "quantity": 1},
        "weight_per_unit": 10,
    },
    "PUM-8001": {
        "code": "8001",
        "product_type": "Pumpkin Seeds",
        "size": "15 g",
        "unit": "box",
        "packaging": {"type": "carton", "quantity": 6},
        "weight_per_unit": 0.015,
    },
    "PUM-8002": {
        "code": "8002",
        "product_type": "Pumpkin Seeds",
        "size": "110 g",
        "unit": "box",
        "packaging": {"type": "carton", "quantity": 6},
        "weight_per_unit": 0.11,
    },
    "MEL-9001": {
        "code": "9001",
        "product_type": "Melon Seeds",
        "size": "15 g",
        "unit": "box",
        "packaging": {"type": "carton", "quantity": 6},
        "weight_per_unit": 0.015,
    },
    "MEL-9002": {
        "code": "9002",
        "product_type": "Melon Seeds",
        "size": "110 g",
        "unit": "box",
        "packaging": {"type": "carton", "quantity": 6},
        "weight_per_unit": 0.11,
    },
    "POP-1701": {
        "code": "1701",
        "product_type": "Popcorn",
        "size": "Cheese",
        "unit": "bag",
        "packaging": {"type": "carton", "quantity": 8},
        "weight_per_unit": 0.15,
    },
})


# =============================================================================
# PRIORITY PACKING
# =============================================================================

# Minutes of machine time per packed unit (bundle/carton)
PACKING_TIME_MINUTES = MappingProxyType({
    "SUN-4402": 1,  # 200g bundle
    "SUN-4401": 1,  # 100g bundle
    "SUN-1116": 3,  # 800g carton
})

# Stock as % of minimum below which an item escalates
PRIORITY_CRITICAL_PCT = 25
PRIORITY_LOW_PCT = 50

PRIORITY_SCORE_OUT = 100
PRIORITY_SCORE_CRITICAL = 80
PRIORITY_SCORE_LOW = 60
PRIORITY_SCORE_BELOW_MIN = 40


# =============================================================================
# DEFAULT STOCK LEVELS
# =============================================================================
# Used when the stock levels sheet cannot be read

DEFAULT_STOCK_LEVELS = MappingProxyType({
    "SUN-4402": {"min": 400, "max": 1200, "reorder": 600},
    "SUN-4401": {"min": 400, "max": 1200, "reorder": 600},
    "SUN-1129": {"min": 400, "max": 1200, "reorder": 600},
    "SUN-1116": {"min": 150, "max": 450, "reorder": 200},
    "SUN-1145": {"min": 100, "max": 300, "reorder": 150},
})
