"""
Catalog: product variants and store slugs.
"""

from plazoo_core.catalog.slugs import clean_slug, slugify
from plazoo_core.catalog.variants import (
    AxisOption,
    Combination,
    VariantAxisName,
    VariantSelection,
    generate_combinations,
    group_variants,
    missing_axes,
    selection_price,
)

__all__ = [
    "clean_slug",
    "slugify",
    "AxisOption",
    "Combination",
    "VariantAxisName",
    "VariantSelection",
    "generate_combinations",
    "group_variants",
    "missing_axes",
    "selection_price",
]
